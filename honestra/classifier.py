"""
Sentence Classifier & Severity Resolver

classify() runs every trigger rule in the catalog against a sentence and
returns the distinct categories that fired, in catalog order.
resolve_severity() folds a category set into a single tier.
"""

from __future__ import annotations

from typing import Iterable

from honestra.catalog import (
    SEVERITY_ORDER,
    PatternCatalog,
    catalog as default_catalog,
)


def classify(sentence: str, catalog: PatternCatalog = default_catalog) -> list[str]:
    """Return every category whose trigger rules match the sentence."""
    if not sentence:
        return []

    found: list[str] = []
    # No short-circuit: all rules are tested, categories deduplicated
    for rule in catalog.triggers:
        if rule.category not in found and rule.matches(sentence):
            found.append(rule.category)
    return found


def severity_rank(severity: str) -> int:
    """Numeric rank of a severity tier; unknown tiers rank as none."""
    try:
        return SEVERITY_ORDER.index(severity)
    except ValueError:
        return 0


def max_severity(severities: Iterable[str]) -> str:
    best = 0
    for severity in severities:
        best = max(best, severity_rank(severity))
    return SEVERITY_ORDER[best]


def resolve_severity(
    categories: Iterable[str],
    catalog: PatternCatalog = default_catalog,
) -> str:
    """
    Map a category set to one severity tier.

    block > warn > info > none. Unknown categories contribute nothing.
    """
    return max_severity(catalog.severity_of(c) for c in categories)
