"""
Document Aggregator — Density & Infiltration

Runs the guard over every sentence of a document and folds the results
into document-level metrics:

  teleologyDensity   share of sentences that are teleological
  cosmicRatio        share of teleological sentences tagged cosmic_purpose
  infiltrationScore  density adjusted for critique context, cosmic weight
                     and cosmic self-blame, clamped to [0, 1]
  documentStatus     globally_clean / mixed / globally_teleological

A sentence that quotes teleology in order to criticise it ("it is a
mistake to think the universe wants...") still counts as teleological,
but lowers infiltration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from honestra.catalog import (
    ANTHROPOMORPHIC_MODEL,
    ANTHROPOMORPHIC_SELF,
    COSMIC_PURPOSE,
    SEVERITY_NONE,
)
from honestra.classifier import max_severity
from honestra.guard import GuardPayload, guard
from honestra.segmenter import segment

logger = logging.getLogger(__name__)


# ============================================================
# MARKERS
# ============================================================

CRITIQUE_MARKERS_EN = (
    "it is a mistake to think",
    "it's a mistake to think",
    "it is misleading to say",
    "people wrongly believe",
    "it's not that",
    "instead, what happens is",
    "in fact, what happens is",
    "rather, the cause is",
)

CRITIQUE_MARKERS_HE = (
    "זו טעות לחשוב",
    "טעות לחשוב",
    "זה עיוות לחשוב",
    "אנשים נוטים לחשוב ש",
    "לא בגלל שהיקום",
    "במקום זה",
    "בפועל מה שקורה הוא",
)

SELF_BLAME_MARKERS_EN = (
    "punishing me",
    "punishes me",
    "my fault",
    "i deserve this",
    "i'm being tested",
)

SELF_BLAME_MARKERS_HE = (
    "המערכת מענישה אותי",
    "היקום מעניש אותי",
    "בגללי",
    "אשמתי",
    "מגיע לי",
    "אני נבחן",
)

# --- Thresholds ---
CRITIQUE_STRONG = 0.6
CRITIQUE_PARTIAL = 0.3
CRITIQUE_STRONG_FACTOR = 0.3
CRITIQUE_PARTIAL_FACTOR = 0.6
COSMIC_DOMINANT = 0.5
COSMIC_FACTOR = 1.2
SELF_BLAME_COSMIC_FACTOR = 1.2

INFILTRATION_HIGH = 0.6
INFILTRATION_MEDIUM = 0.25
CLEAN_DENSITY = 0.05
CLEAN_INFILTRATION = 0.2

STATUS_CLEAN = "globally_clean"
STATUS_MIXED = "mixed"
STATUS_TELEOLOGICAL = "globally_teleological"


def _normalize_apostrophes(text: str) -> str:
    return text.replace("’", "'")


def is_critique_context(sentence: str) -> bool:
    """Does the sentence discuss teleology critically rather than assert it?"""
    lower = _normalize_apostrophes(sentence.lower())
    return any(m in lower for m in CRITIQUE_MARKERS_EN) or any(
        m in sentence for m in CRITIQUE_MARKERS_HE
    )


def has_self_blame(sentence: str) -> bool:
    lower = _normalize_apostrophes(sentence.lower())
    return any(m in lower for m in SELF_BLAME_MARKERS_EN) or any(
        m in sentence for m in SELF_BLAME_MARKERS_HE
    )


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass
class DocumentSentence:
    index: int
    text: str
    start_offset: int
    end_offset: int
    guard: GuardPayload
    is_teleological: bool
    is_cosmic: bool
    is_anthropomorphic: bool
    is_critique_context: bool
    has_self_blame: bool

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "text": self.text,
            "startOffset": self.start_offset,
            "endOffset": self.end_offset,
            "guard": self.guard.to_dict(),
            "isTeleological": self.is_teleological,
            "isCosmic": self.is_cosmic,
            "isAnthropomorphic": self.is_anthropomorphic,
            "isCritiqueContext": self.is_critique_context,
            "hasSelfBlame": self.has_self_blame,
        }


@dataclass
class DocumentSummary:
    total_sentences: int = 1
    teleological_sentences: int = 0
    teleology_density: float = 0.0
    cosmic_sentence_count: int = 0
    cosmic_ratio: float = 0.0
    anthropomorphic_sentence_count: int = 0
    average_teleology_score: float = 0.0
    max_teleology_score: float = 0.0
    max_severity: str = SEVERITY_NONE
    document_status: str = STATUS_CLEAN
    infiltration_score: float = 0.0
    infiltration_label: str = "low"

    def to_dict(self) -> dict:
        return {
            "totalSentences": self.total_sentences,
            "teleologicalSentences": self.teleological_sentences,
            "teleologyDensity": self.teleology_density,
            "cosmicSentenceCount": self.cosmic_sentence_count,
            "cosmicRatio": self.cosmic_ratio,
            "anthropomorphicSentenceCount": self.anthropomorphic_sentence_count,
            "averageTeleologyScore": self.average_teleology_score,
            "maxTeleologyScore": self.max_teleology_score,
            "maxSeverity": self.max_severity,
            "documentStatus": self.document_status,
            "infiltrationScore": self.infiltration_score,
            "infiltrationLabel": self.infiltration_label,
        }


@dataclass
class DocumentAnalysis:
    text: str
    summary: DocumentSummary
    sentences: list[DocumentSentence] = field(default_factory=list)
    mode: str = "document"

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "text": self.text,
            "summary": self.summary.to_dict(),
            "sentences": [s.to_dict() for s in self.sentences],
        }


# ============================================================
# SCORING
# ============================================================

def infiltration_label(score: float) -> str:
    if score >= INFILTRATION_HIGH:
        return "high"
    if score >= INFILTRATION_MEDIUM:
        return "medium"
    return "low"


def document_status(density: float, infiltration: float) -> str:
    if density < CLEAN_DENSITY and infiltration < CLEAN_INFILTRATION:
        return STATUS_CLEAN
    if infiltration < INFILTRATION_HIGH:
        return STATUS_MIXED
    return STATUS_TELEOLOGICAL


def _infiltration(
    density: float,
    critique_ratio: float,
    cosmic_ratio: float,
    self_blame_cosmic: bool,
) -> float:
    score = density

    # Teleology quoted in order to be criticised
    if critique_ratio > CRITIQUE_STRONG:
        score *= CRITIQUE_STRONG_FACTOR
    elif critique_ratio > CRITIQUE_PARTIAL:
        score *= CRITIQUE_PARTIAL_FACTOR

    if cosmic_ratio > COSMIC_DOMINANT:
        score *= COSMIC_FACTOR

    if self_blame_cosmic:
        score *= SELF_BLAME_COSMIC_FACTOR

    # Clamp last; intermediate values may exceed 1
    return max(0.0, min(1.0, score))


def analyze_document(text: str, mode=None) -> DocumentAnalysis:
    """
    Analyze a whole document sentence by sentence.

    `mode` is the rewrite mode forwarded to the guard.
    """
    sentences: list[DocumentSentence] = []

    for span in segment(text or "", document_mode=True):
        payload = guard(span.text, mode)
        reasons = payload.categories
        sentences.append(DocumentSentence(
            index=span.index,
            text=span.text,
            start_offset=span.start_offset,
            end_offset=span.end_offset,
            guard=payload,
            is_teleological=payload.has_teleology,
            is_cosmic=COSMIC_PURPOSE in reasons,
            is_anthropomorphic=(
                ANTHROPOMORPHIC_SELF in reasons or ANTHROPOMORPHIC_MODEL in reasons
            ),
            is_critique_context=is_critique_context(span.text),
            has_self_blame=has_self_blame(span.text),
        ))

    teleological = [s for s in sentences if s.is_teleological]
    n_teleo = len(teleological)
    total = len(sentences) or 1

    density = n_teleo / total
    cosmic_count = sum(1 for s in teleological if s.is_cosmic)
    cosmic_ratio = cosmic_count / n_teleo if n_teleo else 0.0
    critique_ratio = (
        sum(1 for s in teleological if s.is_critique_context) / n_teleo if n_teleo else 0.0
    )
    scores = [s.guard.teleology_score for s in teleological]

    infiltration = _infiltration(
        density,
        critique_ratio,
        cosmic_ratio,
        self_blame_cosmic=any(s.is_cosmic and s.has_self_blame for s in teleological),
    )

    summary = DocumentSummary(
        total_sentences=total,
        teleological_sentences=n_teleo,
        teleology_density=density,
        cosmic_sentence_count=cosmic_count,
        cosmic_ratio=cosmic_ratio,
        anthropomorphic_sentence_count=sum(1 for s in teleological if s.is_anthropomorphic),
        average_teleology_score=sum(scores) / n_teleo if n_teleo else 0.0,
        max_teleology_score=max(scores, default=0.0),
        max_severity=max_severity(s.guard.severity for s in teleological),
        document_status=document_status(density, infiltration),
        infiltration_score=infiltration,
        infiltration_label=infiltration_label(infiltration),
    )

    logger.info(
        "Document analyzed",
        extra={
            "sentence_count": len(sentences),
            "document_status": summary.document_status,
            "infiltration_score": round(infiltration, 4),
        },
    )

    return DocumentAnalysis(text=text, summary=summary, sentences=sentences)
