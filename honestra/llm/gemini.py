"""
Gemini Provider — Google Gemini via the google.genai SDK.

The client is created on first use, so the API starts without a key
and the firewall simply runs without summaries.

Resilience:
- Model chain: configured model first, then FALLBACK_MODEL
- Exponential backoff on transient errors (rate limits, 5xx, timeouts)
- Circuit breaker: after repeated failures, calls fail fast for a while
  so the firewall is not held up by a dead upstream
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from google import genai
from google.genai import types

from honestra.config import settings
from honestra.llm import LLMProvider

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "gemini-2.5-flash"

_TRANSIENT_MARKERS = (
    "429", "500", "503", "rate", "quota", "timeout",
    "connection", "unavailable", "overloaded",
)


def is_transient(error: Exception) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in _TRANSIENT_MARKERS)


class CircuitOpenError(Exception):
    """Raised instead of calling upstream while the breaker is open."""


class CircuitBreaker:
    """closed → open after N consecutive failures → half-open after a cooldown."""

    def __init__(self, failure_threshold: int = 3, recovery_timeout: float = 60.0):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self._failures = 0
        self._opened_at: Optional[float] = None

    @property
    def state(self) -> str:
        if self._opened_at is None:
            return "closed"
        if time.monotonic() - self._opened_at >= self.recovery_timeout:
            return "half-open"
        return "open"

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    def record_success(self) -> None:
        self._failures = 0
        self._opened_at = None

    def record_failure(self) -> None:
        self._failures += 1
        if self._failures >= self.failure_threshold:
            self._opened_at = time.monotonic()
            logger.warning(
                "Circuit breaker open after %d consecutive failures; "
                "summaries disabled for %.0fs",
                self._failures, self.recovery_timeout,
            )


class GeminiProvider(LLMProvider):
    """Gemini provider with model fallback and a circuit breaker."""

    name = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self._client: Optional[genai.Client] = None
        self.circuit_breaker = CircuitBreaker()

    @property
    def model_chain(self) -> list[str]:
        if self.model == FALLBACK_MODEL:
            return [self.model]
        return [self.model, FALLBACK_MODEL]

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise RuntimeError("GEMINI_API_KEY not set")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def _call_with_retry(
        self,
        model: str,
        prompt: str,
        config: types.GenerateContentConfig,
        attempts: int,
    ) -> str:
        client = self._get_client()
        for attempt in range(attempts):
            try:
                response = await client.aio.models.generate_content(
                    model=model,
                    contents=prompt,
                    config=config,
                )
                return response.text
            except Exception as e:
                if is_transient(e) and attempt < attempts - 1:
                    await asyncio.sleep(2 ** attempt)
                    continue
                raise
        raise RuntimeError("unreachable: retry loop exited without result")

    async def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: float = 0.7,
        json_mode: bool = False,
    ) -> str:
        if self.circuit_breaker.is_open:
            raise CircuitOpenError("Gemini circuit breaker is open")

        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            response_mime_type="application/json" if json_mode else None,
        )

        last_error: Optional[Exception] = None
        for position, model in enumerate(self.model_chain):
            attempts = 2 if position == 0 else 1
            try:
                result = await self._call_with_retry(model, prompt, config, attempts)
            except Exception as e:
                last_error = e
                logger.warning(
                    "Gemini model %s failed: %s", model, e,
                    extra={"error_type": type(e).__name__},
                )
                continue
            self.circuit_breaker.record_success()
            return result

        self.circuit_breaker.record_failure()
        raise last_error  # type: ignore[misc]
