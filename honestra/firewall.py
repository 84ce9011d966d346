"""
Feed Firewall

Heuristic analysis → policy decision → optional summaries.

The decision is fixed before the summarizer is awaited, so a slow or
failing text-generation service can only leave the two auxiliary fields
empty; it never changes the action.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from honestra.policy import (
    PolicyConfig,
    PolicyDecision,
    TeleologyAnalysis,
    analyze_teleology,
    evaluate_policy,
)
from honestra.summarizer import PurposeSummarizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FirewallResult:
    decision: PolicyDecision
    analysis: TeleologyAnalysis

    def to_dict(self) -> dict:
        return {
            "decision": self.decision.to_dict(),
            "analysis": self.analysis.to_dict(),
        }


async def run_firewall(
    text: str,
    summarizer: Optional[PurposeSummarizer] = None,
    config: Optional[PolicyConfig] = None,
) -> FirewallResult:
    start = time.monotonic()
    config = config or PolicyConfig.from_settings()

    analysis = analyze_teleology(text, refined_types=config.refined_types)
    decision = evaluate_policy(analysis, config)

    if summarizer is not None:
        summary = await summarizer.summarize(text)
        analysis = analysis.with_summaries(
            summary.purpose_claim, summary.neutral_causal_paraphrase,
        )

    logger.info(
        "Firewall decision",
        extra={
            "action": decision.action,
            "teleology_type": analysis.teleology_type,
            "duration_ms": round((time.monotonic() - start) * 1000, 1),
        },
    )
    return FirewallResult(decision=decision, analysis=analysis)
