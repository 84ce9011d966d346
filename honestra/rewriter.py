"""
Rewriter — Causal Paraphrase by Substitution

Turns purpose-laden phrasing into causal phrasing using the catalog's
substitution rules. No model is involved: the same input and mode
always yield the same output.

Two modes:
  category — apply only the detected category's rules
             (English rules, then Hebrew rules, each in catalog order).
  cascade  — apply every rule in the catalog regardless of category.
             Kept for compatibility with older guard logs.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

import diff_match_patch as dmp_module

from honestra.catalog import PatternCatalog, catalog as default_catalog
from honestra.config import settings

# Singleton diff engine
_dmp = dmp_module.diff_match_patch()


class RewriteMode(str, Enum):
    CATEGORY = "category"
    CASCADE = "cascade"


def resolve_mode(mode: Union[RewriteMode, str, None] = None) -> RewriteMode:
    """
    Resolve an explicit mode, falling back to HONESTRA_REWRITE_MODE.

    Raises ValueError for an unknown mode name.
    """
    if mode is None:
        mode = settings.REWRITE_MODE
    if isinstance(mode, RewriteMode):
        return mode
    try:
        return RewriteMode(str(mode).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown rewrite mode: {mode!r}. "
            f"Expected one of: {', '.join(m.value for m in RewriteMode)}"
        ) from None


def rewrite(
    sentence: str,
    category: str,
    mode: Union[RewriteMode, str, None] = None,
    catalog: PatternCatalog = default_catalog,
) -> str:
    """Apply substitution rules to a sentence. Unmatched text passes through."""
    if not sentence:
        return sentence

    if resolve_mode(mode) is RewriteMode.CASCADE:
        rules = catalog.all_substitutions()
    else:
        rules = catalog.substitutions_for(category)

    rewritten = sentence
    for rule in rules:
        rewritten = rule.apply(rewritten)
    return rewritten


def diff_spans(original: str, rewritten: Optional[str]) -> list[dict]:
    """
    Compute deterministic text diffs between a sentence and its rewrite.

    Uses diff-match-patch. Returns spans with type (equal/delete/insert),
    text, and positions in the original and rewritten strings.
    """
    if rewritten is None:
        rewritten = original

    diffs = _dmp.diff_main(original, rewritten)
    _dmp.diff_cleanupSemantic(diffs)

    spans = []
    orig_pos = 0
    new_pos = 0

    for op, text in diffs:
        if op == dmp_module.diff_match_patch.DIFF_EQUAL:
            spans.append({
                "type": "equal",
                "text": text,
                "orig_start": orig_pos,
                "orig_end": orig_pos + len(text),
                "rewritten_start": new_pos,
                "rewritten_end": new_pos + len(text),
            })
            orig_pos += len(text)
            new_pos += len(text)
        elif op == dmp_module.diff_match_patch.DIFF_DELETE:
            spans.append({
                "type": "delete",
                "text": text,
                "orig_start": orig_pos,
                "orig_end": orig_pos + len(text),
            })
            orig_pos += len(text)
        elif op == dmp_module.diff_match_patch.DIFF_INSERT:
            spans.append({
                "type": "insert",
                "text": text,
                "rewritten_start": new_pos,
                "rewritten_end": new_pos + len(text),
            })
            new_pos += len(text)

    return spans
