"""SiteFAQ: question answering over a small website's own pages."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sitefaq")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0+unknown"
