"""
Classifier & Severity Resolver Tests
"""

import pytest

from honestra.catalog import catalog
from honestra.classifier import classify, max_severity, resolve_severity, severity_rank


class TestClassify:

    def test_neutral_statement(self):
        assert classify("The meeting is scheduled for 3pm Tuesday.") == []

    def test_empty(self):
        assert classify("") == []

    def test_self_reference(self):
        assert classify("I want to help you.") == ["anthropomorphic_self"]

    def test_case_insensitive_english(self):
        assert "cosmic_purpose" in classify("THE UNIVERSE IS GUIDING us")

    def test_deduplicated(self):
        assert classify("I want to go and I want to stay.") == ["anthropomorphic_self"]

    def test_catalog_order(self):
        assert classify("I think the universe is guiding us.") == [
            "anthropomorphic_self",
            "cosmic_purpose",
        ]

    def test_no_short_circuit(self):
        """Every matching category is reported, not just the first."""
        found = classify("They don't want you to know the truth, and everyone is against me.")
        assert "conspiracy" in found
        assert "victim_narrative" in found

    def test_idempotent(self):
        sentence = "The universe is punishing me because I think too much."
        assert classify(sentence) == classify(sentence)

    def test_hebrew(self):
        assert classify("המערכת מענישה אותך") == ["cosmic_purpose"]

    def test_hebrew_negation_same_category(self):
        assert classify("אני לא רוצה לענות") == ["anthropomorphic_self"]

    def test_word_boundary(self):
        """'fate' inside another word must not trigger destiny language."""
        assert classify("The fateful decree was published.") == []


class TestResolveSeverity:

    def test_none(self):
        assert resolve_severity([]) == "none"

    def test_info(self):
        assert resolve_severity(["anthropomorphic_self"]) == "info"

    def test_warn_beats_info(self):
        assert resolve_severity(["anthropomorphic_self", "cosmic_purpose"]) == "warn"

    def test_block_beats_warn(self):
        assert resolve_severity(["cosmic_purpose", "conspiracy"]) == "block"

    def test_unknown_contributes_nothing(self):
        assert resolve_severity(["not_a_category"]) == "none"
        assert resolve_severity(["not_a_category", "tech_animism"]) == "info"

    def test_accepts_generator(self):
        assert resolve_severity(c for c in ["karma"]) == "warn"

    @pytest.mark.parametrize("category", list(catalog.categories))
    def test_adding_block_never_lowers(self, category):
        assert resolve_severity([category, "victim_narrative"]) == "block"

    @pytest.mark.parametrize("category", list(catalog.categories))
    def test_monotonic(self, category):
        base = resolve_severity([category])
        combined = resolve_severity([category, "anthropomorphic_self"])
        assert severity_rank(combined) >= severity_rank(base)


class TestSeverityHelpers:

    def test_rank_order(self):
        assert [severity_rank(s) for s in ("none", "info", "warn", "block")] == [0, 1, 2, 3]

    def test_unknown_rank(self):
        assert severity_rank("catastrophic") == 0

    def test_max_severity(self):
        assert max_severity(["info", "block", "warn"]) == "block"
        assert max_severity([]) == "none"
