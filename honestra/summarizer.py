"""
Purpose Summarizer — Optional Text-Generation Collaborator

Asks the configured provider for two auxiliary fields:
  purposeClaim            one-sentence summary of the teleological story
  neutralCausalParaphrase the same content rewritten in causal terms

Every failure mode (no provider, missing key, timeout, open circuit,
invalid JSON, network error) degrades to a pair of None values. The
firewall decision is computed before this runs and never depends on it.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

from honestra.cache import SummaryCache, summary_cache
from honestra.config import settings
from honestra.llm import LLMProvider

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a careful analyst of teleological language. "
    "You always return valid JSON that matches the requested schema."
)

PROMPT_TEMPLATE = """You are an assistant that analyzes teleological (purpose-based) language.

The user has written the following text:

---
{text}
---

1. First, identify the main *teleological story* in this text, if any. That is: how does the text explain events as happening "in order to", "meant to", "for the sake of", "as punishment", "as reward", etc. Summarize this in ONE short sentence. If there is no clear teleological story, return an empty string.

2. Second, rewrite the user's text as a neutral **causal description**:
   - Only talk about causes, conditions, actions, incentives, history, context.
   - Do NOT use "in order to", "meant to", "destiny", "fate", "punishment", "deserves", "reward", "for a reason", or any similar purpose-language.
   - The tone should be descriptive and matter-of-fact.

Return a JSON object with exactly the following fields:
{{
  "purposeClaim": string,
  "neutralCausalParaphrase": string
}}
If there is no teleological story, set "purposeClaim" to an empty string.
"""


@dataclass(frozen=True)
class PurposeSummary:
    purpose_claim: Optional[str] = None
    neutral_causal_paraphrase: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.purpose_claim is None and self.neutral_causal_paraphrase is None


EMPTY_SUMMARY = PurposeSummary()


def _clean(value: Any) -> Optional[str]:
    """Blank or non-string values become None."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text)


class PurposeSummarizer:
    """Timeout-bounded, cached wrapper around an LLMProvider."""

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        timeout: Optional[float] = None,
        cache: Optional[SummaryCache] = summary_cache,
    ):
        self.provider = provider
        self.timeout = settings.SUMMARY_TIMEOUT if timeout is None else timeout
        self.cache = cache

    @property
    def _cache_scope(self) -> str:
        return f"{self.provider.name}:{self.provider.model}"

    async def summarize(self, text: str) -> PurposeSummary:
        if not text or not text.strip() or self.provider is None:
            return EMPTY_SUMMARY

        if self.cache is not None:
            cached = await self.cache.get(text, self._cache_scope)
            if cached is not None:
                return PurposeSummary(**cached)

        try:
            raw = await asyncio.wait_for(
                self.provider.generate_json(
                    prompt=build_prompt(text),
                    system_instruction=SYSTEM_INSTRUCTION,
                    temperature=0.2,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Purpose summary timed out after %.1fs", self.timeout,
                extra={"error_type": "TimeoutError"},
            )
            return EMPTY_SUMMARY
        except Exception as e:
            logger.warning(
                "Purpose summary failed: %s", e,
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            return EMPTY_SUMMARY

        summary = PurposeSummary(
            purpose_claim=_clean(raw.get("purposeClaim")),
            neutral_causal_paraphrase=_clean(raw.get("neutralCausalParaphrase")),
        )

        if self.cache is not None:
            await self.cache.put(
                text,
                {
                    "purpose_claim": summary.purpose_claim,
                    "neutral_causal_paraphrase": summary.neutral_causal_paraphrase,
                },
                self._cache_scope,
            )
        return summary
