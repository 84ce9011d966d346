"""
Sentence Guard — Per-Text Teleology Payload

Composes segmenter → classifier → rewriter → severity resolver into the
stable payload returned to integrations:

  has_teleology   whether any category produced a rewrite
  teleology_score 0.0 without changes, TELEOLOGY_SCORE otherwise
  categories      distinct categories that produced a change record
  severity        none / info / warn / block
  changes         one record per (sentence, category) whose rewrite differs

has_teleology, a non-zero score, non-empty categories and non-empty
changes always agree, because all four are derived from the change list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from honestra.catalog import PatternCatalog, SEVERITY_NONE, catalog as default_catalog
from honestra.classifier import classify, resolve_severity
from honestra.rewriter import RewriteMode, resolve_mode, rewrite
from honestra.segmenter import segment

logger = logging.getLogger(__name__)

# Binary by construction: the guard has no graded confidence.
TELEOLOGY_SCORE = 0.8


@dataclass(frozen=True)
class ChangeRecord:
    original: str
    rewritten: str
    category: str

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "rewritten": self.rewritten,
            "reason": self.category,
        }


@dataclass
class GuardPayload:
    has_teleology: bool = False
    teleology_score: float = 0.0
    categories: list[str] = field(default_factory=list)
    severity: str = SEVERITY_NONE
    changes: list[ChangeRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "hasTeleology": self.has_teleology,
            "teleologyScore": self.teleology_score,
            "reasons": list(self.categories),
            "severity": self.severity,
            "changes": [c.to_dict() for c in self.changes],
        }


@dataclass
class FilterResult:
    filtered_text: str
    teleology_score: float
    changes: list[ChangeRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "filteredText": self.filtered_text,
            "meta": {
                "teleologyScoreGlobal": self.teleology_score,
                "changes": [c.to_dict() for c in self.changes],
            },
        }


def filter_text(
    text: str,
    mode: Union[RewriteMode, str, None] = None,
    catalog: PatternCatalog = default_catalog,
) -> FilterResult:
    """
    Rewrite every flagged sentence of a text.

    Each flagged sentence is replaced in place by its rewrite for the
    first detected category. Text outside the flagged spans is copied
    verbatim.
    """
    text = text or ""
    resolved = resolve_mode(mode)
    changes: list[ChangeRecord] = []
    output: list[str] = []
    cursor = 0

    for span in segment(text):
        categories = classify(span.text, catalog)
        if not categories:
            continue

        representative = None
        for category in categories:
            rewritten = rewrite(span.text, category, resolved, catalog)
            if representative is None:
                representative = rewritten
            if rewritten != span.text:
                changes.append(ChangeRecord(span.text, rewritten, category))

        output.append(text[cursor:span.start_offset])
        output.append(representative)
        cursor = span.end_offset

    output.append(text[cursor:])

    return FilterResult(
        filtered_text="".join(output),
        teleology_score=TELEOLOGY_SCORE if changes else 0.0,
        changes=changes,
    )


def guard(
    text: str,
    mode: Union[RewriteMode, str, None] = None,
    catalog: PatternCatalog = default_catalog,
) -> GuardPayload:
    """Run the full pipeline and return the guard payload. Never raises on text."""
    result = filter_text(text, mode, catalog)

    # Categories come from the change records, not the raw classifier output
    categories = list(dict.fromkeys(c.category for c in result.changes))
    severity = resolve_severity(categories, catalog)

    if categories:
        logger.debug(
            "Teleology detected",
            extra={"severity": severity, "reasons_count": len(categories)},
        )

    return GuardPayload(
        has_teleology=bool(result.changes),
        teleology_score=result.teleology_score,
        categories=categories,
        severity=severity,
        changes=list(result.changes),
    )
