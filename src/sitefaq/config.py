"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (SITEFAQ__SERVER__PORT=8080)
  2. Conventional variables (PORT, OPENAI_API_KEY)
  3. sitefaq.yaml           (searched in cwd, then platform config dir)
  4. Hardcoded defaults

The config file is optional; all fields except the completion API key have
usable defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_DOCUMENTS = ["index.html", "products.html", "about.html", "contact.html"]

DEFAULT_SITE_KEYWORDS = [
    # Persian
    "محصول",
    "قیمت",
    "خدمات",
    "شرکت",
    "نوآوران",
    "سایت",
    "سفارش",
    "خرید",
    "پشتیبانی",
    "تماس",
    "آدرس",
    # English
    "product",
    "price",
    "service",
    "company",
    "order",
    "buy",
    "support",
    "contact",
    "address",
]


def _find_config_file() -> str | None:
    """Return the path of the first sitefaq.yaml found, or None."""
    candidates = [
        Path("sitefaq.yaml"),
        Path(platformdirs.user_config_dir("sitefaq")) / "sitefaq.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]


class SiteSettings(BaseModel):
    root: str = "."
    # Site-relative paths, crawled in this order
    documents: list[str] = DEFAULT_DOCUMENTS
    company_name: str = "شرکت نوآوران دیجیتال"
    fallback_phone: str = "021-12345678"


class CacheSettings(BaseModel):
    refresh_interval_seconds: int = 3600


class ClassifierSettings(BaseModel):
    site_keywords: list[str] = DEFAULT_SITE_KEYWORDS
    short_question_length: int = 15


class RankerSettings(BaseModel):
    title_bonus: int = 10
    h1_bonus: int = 8
    h2_bonus: int = 5
    min_token_length: int = 2  # Tokens must be strictly longer than this
    max_results: int = 5
    max_sources: int = 3
    context_chars: int = 500
    fallback_excerpt_chars: int = 300


class CompletionSettings(BaseModel):
    api_key: str | None = None
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-5"
    max_completion_tokens: int = 500
    temperature: float | None = 0.7
    # Models that reject a custom temperature; the parameter is left out for them
    temperature_unsupported_prefixes: list[str] = ["gpt-5"]
    # Parameters that may be dropped when the provider rejects their value
    optional_parameters: list[str] = ["temperature"]
    timeout_seconds: float | None = None


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class ConventionalEnvSettingsSource(PydanticBaseSettingsSource):
    """Map the un-prefixed ``PORT`` and ``OPENAI_API_KEY`` variables."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        # Values are assembled in __call__; per-field lookup is unused.
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        port = os.environ.get("PORT")
        if port:
            data["server"] = {"port": port}
        api_key = os.environ.get("OPENAI_API_KEY")
        if api_key:
            data["completion"] = {"api_key": api_key}
        return data


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: SITEFAQ__SERVER__PORT=9090
        env_prefix="SITEFAQ__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    site: SiteSettings = SiteSettings()
    cache: CacheSettings = CacheSettings()
    classifier: ClassifierSettings = ClassifierSettings()
    ranker: RankerSettings = RankerSettings()
    completion: CompletionSettings = CompletionSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # SITEFAQ__ environment variables
            ConventionalEnvSettingsSource(settings_cls),  # PORT, OPENAI_API_KEY
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
