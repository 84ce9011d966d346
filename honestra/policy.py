"""
Policy Decision Engine

A coarser classifier than the guard, aimed at feed moderation.

  analyze_teleology() — keyword heuristic → score, type, manipulation risk
  evaluate_policy()   — fixed thresholds → allow / annotate / warn / block

Both are pure. The optional purpose-claim / causal-paraphrase pair is
filled in by the firewall, never here, so the decision cannot depend on it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Optional

from honestra.config import settings

# ============================================================
# VOCABULARY
# ============================================================

TELEOLOGY_KEYWORDS = (
    "in order to",
    "so that",
    "meant to",
    "trying to",
    "supposed to",
    "punishment",
    "deserves",
    "deserve",
    "fate",
    "destiny",
    "chosen",
    "god wants",
    "history wants",
    "the universe wants",
    "the world is",
    "the world wants",
    "teaching me",
    "showing me",
    "telling me",
)

# Purposive connectives that are usually harmless on their own
WEAK_CONNECTIVES = frozenset({"in order to", "so that", "trying to", "supposed to"})

RELIGIOUS_MARKERS = ("god", "universe", "fate", "destiny")
NATIONAL_MARKERS = ("nation", "history", "the people")
CONSPIRACY_MARKERS = ("conspiracy", "they are all", "everything is orchestrated")
# Word-anchored: "sin" must not match "using" or "since"
MORALISTIC_PATTERN = re.compile(r"\b(?:deserv\w*|punish\w*|sin(?:s|ful|ned)?|karma|lessons?)\b")
HIGH_RISK_MARKERS = ("deserve", "punishment", "cleanse", "eradicate")

TYPE_RELIGIOUS = "religious"
TYPE_NATIONAL = "national/ideological"
TYPE_CONSPIRACY = "conspiracy"
TYPE_MORALISTIC = "moralistic"
TYPE_WEAK = "harmless/weak"
TYPE_PERSONAL = "personal"

RISK_LOW = "low"
RISK_MEDIUM = "medium"
RISK_HIGH = "high"

ACTION_ALLOW = "allow"
ACTION_ANNOTATE = "annotate"
ACTION_WARN = "warn"
ACTION_BLOCK = "block"

# Types treated as hard framing by the decision thresholds
HARD_FRAMING_TYPES = frozenset({TYPE_MORALISTIC, TYPE_RELIGIOUS, TYPE_NATIONAL})

REASONS = {
    ACTION_ALLOW: "Teleology score is low; content can pass without intervention.",
    ACTION_BLOCK: (
        "Content uses strong moral or ideological teleology with high manipulation risk; "
        "it should be blocked or heavily down-ranked."
    ),
    ACTION_WARN: (
        "Content uses teleological framing that could mislead or inflame; "
        "it should be shown with a warning and reduced reach."
    ),
    ACTION_ANNOTATE: (
        "Content mainly expresses personal meaning; "
        "it should be allowed but annotated with a causal clarification."
    ),
}


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class PolicyConfig:
    """Thresholds for the decision engine."""
    min_score_for_policy: float = 0.2
    high_risk_score: float = 0.7
    # Adds the moralistic and harmless/weak types to the heuristic
    refined_types: bool = False

    @classmethod
    def from_settings(cls) -> "PolicyConfig":
        return cls(
            min_score_for_policy=settings.POLICY_MIN_SCORE,
            high_risk_score=settings.POLICY_HIGH_RISK_SCORE,
            refined_types=settings.POLICY_REFINED_TYPES,
        )


@dataclass(frozen=True)
class TeleologyAnalysis:
    teleology_score: float = 0.0
    teleology_type: Optional[str] = None
    manipulation_risk: str = RISK_LOW
    detected_phrases: list[str] = field(default_factory=list)
    purpose_claim: Optional[str] = None
    neutral_causal_paraphrase: Optional[str] = None

    def with_summaries(
        self,
        purpose_claim: Optional[str],
        neutral_causal_paraphrase: Optional[str],
    ) -> "TeleologyAnalysis":
        return replace(
            self,
            purpose_claim=purpose_claim,
            neutral_causal_paraphrase=neutral_causal_paraphrase,
        )

    def to_dict(self) -> dict:
        return {
            "teleologyScore": self.teleology_score,
            "teleologyType": self.teleology_type,
            "manipulationRisk": self.manipulation_risk,
            "detectedPhrases": list(self.detected_phrases),
            "purposeClaim": self.purpose_claim,
            "neutralCausalParaphrase": self.neutral_causal_paraphrase,
        }


@dataclass(frozen=True)
class PolicyDecision:
    action: str
    reason: str

    def to_dict(self) -> dict:
        return {"action": self.action, "reason": self.reason}


# ============================================================
# HEURISTIC ANALYSIS
# ============================================================

def _contains_any(text: str, markers) -> bool:
    return any(m in text for m in markers)


def _classify_type(lower: str, detected: list[str], refined_types: bool = False) -> str:
    if _contains_any(lower, RELIGIOUS_MARKERS):
        return TYPE_RELIGIOUS
    if _contains_any(lower, NATIONAL_MARKERS):
        return TYPE_NATIONAL
    if _contains_any(lower, CONSPIRACY_MARKERS):
        return TYPE_CONSPIRACY
    if not refined_types:
        return TYPE_PERSONAL
    if MORALISTIC_PATTERN.search(lower):
        return TYPE_MORALISTIC
    if all(phrase in WEAK_CONNECTIVES for phrase in detected):
        return TYPE_WEAK
    return TYPE_PERSONAL


def _classify_risk(lower: str, teleology_type: str) -> str:
    if _contains_any(lower, HIGH_RISK_MARKERS):
        return RISK_HIGH
    if teleology_type in (TYPE_RELIGIOUS, TYPE_NATIONAL, TYPE_CONSPIRACY):
        return RISK_MEDIUM
    return RISK_LOW


def analyze_teleology(text: str, refined_types: bool = False) -> TeleologyAnalysis:
    """
    Keyword heuristic over the fixed vocabulary.

    score = min(1, 0.3 + 0.1 * n) for n > 0 matched keywords, else 0.
    Markers are substring tests on the lower-cased text. The type
    cascade is religious, national/ideological, conspiracy, personal.
    With refined_types, "moralistic" (word-anchored markers) and
    "harmless/weak" (only weak connectives matched) are tried before
    falling back to personal.
    """
    lower = (text or "").lower()
    detected = [k for k in TELEOLOGY_KEYWORDS if k in lower]

    if not detected:
        return TeleologyAnalysis()

    score = min(1.0, 0.3 + 0.1 * len(detected))
    teleology_type = _classify_type(lower, detected, refined_types)

    return TeleologyAnalysis(
        teleology_score=score,
        teleology_type=teleology_type,
        manipulation_risk=_classify_risk(lower, teleology_type),
        detected_phrases=detected,
    )


# ============================================================
# DECISION
# ============================================================

def evaluate_policy(
    analysis: TeleologyAnalysis,
    config: Optional[PolicyConfig] = None,
) -> PolicyDecision:
    """Map an analysis to an action. Rules are checked in fixed order."""
    config = config or PolicyConfig.from_settings()
    score = analysis.teleology_score
    teleology_type = analysis.teleology_type
    risk = analysis.manipulation_risk

    if (
        score < config.min_score_for_policy
        or teleology_type is None
        or teleology_type == TYPE_WEAK
    ):
        return PolicyDecision(ACTION_ALLOW, REASONS[ACTION_ALLOW])

    hard_framing = teleology_type in HARD_FRAMING_TYPES

    if (hard_framing and score >= config.high_risk_score) or risk == RISK_HIGH:
        return PolicyDecision(ACTION_BLOCK, REASONS[ACTION_BLOCK])

    if hard_framing or risk == RISK_MEDIUM:
        return PolicyDecision(ACTION_WARN, REASONS[ACTION_WARN])

    return PolicyDecision(ACTION_ANNOTATE, REASONS[ACTION_ANNOTATE])
