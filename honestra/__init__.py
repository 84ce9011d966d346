"""
Honestra — Teleological-Language Detection, Rewriting and Aggregation

Flags sentences that frame impersonal mechanisms as intentional agents,
classifies each occurrence, offers a neutral causal rewrite, and folds
per-sentence findings into document-level density and infiltration.

Public API:
  - catalog:           Immutable bilingual pattern catalog (English + Hebrew)
  - segment:           Sentence spans with offsets
  - classify:          Categories matched by a sentence
  - resolve_severity:  Category set → none / info / warn / block
  - rewrite:           Causal paraphrase for one category
  - guard:             Per-text payload (the main integration point)
  - filter_text:       Rewritten text plus change records
  - analyze_document:  Density, infiltration and document status
  - analyze_teleology / evaluate_policy / run_firewall: feed moderation
  - PurposeSummarizer: Optional text-generation collaborator

Usage:
    from honestra import guard, analyze_document
    payload = guard("The universe is guiding this answer.")
"""

__version__ = "0.3.0"

from honestra.catalog import (
    catalog,
    PatternCatalog,
    TriggerRule,
    SubstitutionRule,
    CATALOG_VERSION,
    CATEGORY_SEVERITY,
)
from honestra.segmenter import SentenceSpan, segment
from honestra.classifier import classify, resolve_severity
from honestra.rewriter import RewriteMode, rewrite, diff_spans
from honestra.guard import (
    ChangeRecord,
    FilterResult,
    GuardPayload,
    TELEOLOGY_SCORE,
    filter_text,
    guard,
)
from honestra.document import DocumentAnalysis, analyze_document
from honestra.policy import (
    PolicyConfig,
    PolicyDecision,
    TeleologyAnalysis,
    analyze_teleology,
    evaluate_policy,
)
from honestra.firewall import FirewallResult, run_firewall
from honestra.summarizer import PurposeSummarizer
from honestra.llm import LLMProvider
from honestra.llm.factory import get_provider

__all__ = [
    "catalog",
    "PatternCatalog",
    "TriggerRule",
    "SubstitutionRule",
    "CATALOG_VERSION",
    "CATEGORY_SEVERITY",
    "SentenceSpan",
    "segment",
    "classify",
    "resolve_severity",
    "RewriteMode",
    "rewrite",
    "diff_spans",
    "ChangeRecord",
    "FilterResult",
    "GuardPayload",
    "TELEOLOGY_SCORE",
    "filter_text",
    "guard",
    "DocumentAnalysis",
    "analyze_document",
    "PolicyConfig",
    "PolicyDecision",
    "TeleologyAnalysis",
    "analyze_teleology",
    "evaluate_policy",
    "FirewallResult",
    "run_firewall",
    "PurposeSummarizer",
    "LLMProvider",
    "get_provider",
]
