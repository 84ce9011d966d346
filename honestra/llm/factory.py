"""Provider factory."""

from __future__ import annotations

from typing import Optional

from honestra.config import settings
from honestra.llm import LLMProvider

SUPPORTED_PROVIDERS = ("gemini",)


def get_provider(provider_name: Optional[str] = None) -> LLMProvider:
    """Return the configured provider. Raises ValueError for unknown names."""
    name = (provider_name or settings.LLM_PROVIDER).strip().lower()
    if name == "gemini":
        from honestra.llm.gemini import GeminiProvider
        return GeminiProvider()
    raise ValueError(
        f"Unknown LLM provider: {name!r}. Supported: {', '.join(SUPPORTED_PROVIDERS)}"
    )
