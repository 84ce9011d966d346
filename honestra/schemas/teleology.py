"""
API Schemas — Request and Response Models

Pydantic models for the Honestra API. External payloads use camelCase;
fields accept either the alias or the Python name.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# TELEOLOGY
# ============================================================

class TeleologyRequest(CamelModel):
    """
    POST /teleology request body.

    Blank text is rejected by the endpoint with 400 rather than by
    validation, so the error shape matches the other endpoints.
    """
    text: Optional[str] = Field(None, max_length=100_000,
                                description="Text to analyze.")
    message: Optional[str] = Field(None, max_length=100_000,
                                   description="Alias for text used by chat integrations.")
    mode: Optional[str] = Field(None, description='"document" for document mode; anything else runs the guard.')
    session_id: Optional[str] = None
    user_message: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [
            {"text": "The universe is guiding this answer."},
            {"text": "It is a mistake to think the universe wants this. Causes matter.", "mode": "document"},
        ]},
    )

    @property
    def content(self) -> str:
        return self.text if self.text is not None else (self.message or "")


# ============================================================
# FIREWALL
# ============================================================

class FirewallRequest(CamelModel):
    """POST /firewall request body."""
    text: Optional[str] = Field(None, max_length=100_000)


# ============================================================
# CATALOG & HEALTH
# ============================================================

class CategoryInfo(CamelModel):
    category: str
    severity: str
    description: str = ""
    rule_counts: dict[str, int]


class CatalogResponse(CamelModel):
    """GET /catalog response body."""
    catalog_version: str
    rewrite_mode: str
    total_rules: int
    categories: list[CategoryInfo]


class HealthResponse(CamelModel):
    status: str
    version: str
    catalog_version: str
    llm_provider: str
    summaries_enabled: bool
