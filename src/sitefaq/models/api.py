from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FaqSearchInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    # Accepted for client compatibility; not used for lookup
    site_url: str | None = Field(default=None, alias="siteUrl")


class FaqSearchOutput(BaseModel):
    success: bool = True
    answer: str
    type: Literal["general", "site-specific"]
    sources: list[str] | None = None
