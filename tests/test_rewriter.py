"""
Rewriter Tests — substitution fixtures, negation precedence, modes, diff spans.
"""

import pytest

from honestra.rewriter import RewriteMode, diff_spans, resolve_mode, rewrite


# ============================================================
# CATEGORY MODE
# ============================================================

class TestCategoryMode:

    def test_self_reference(self):
        assert rewrite("I want to help you.", "anthropomorphic_self", mode="category") == \
            "I am configured to help you."

    def test_cosmic_keeps_sentence_capital(self):
        assert rewrite("The universe is guiding this answer.", "cosmic_purpose", mode="category") == \
            "Events are unfolding according to this answer."

    def test_mid_sentence_stays_lowercase(self):
        assert rewrite("Honestly, the universe is guiding us.", "cosmic_purpose", mode="category") == \
            "Honestly, events are unfolding according to us."

    def test_backreference(self):
        assert rewrite("The model wants to help.", "anthropomorphic_model", mode="category") == \
            "The model is configured to help."

    def test_only_named_category_applies(self):
        assert rewrite("I think the universe is guiding us.", "anthropomorphic_self", mode="category") == \
            "I output the universe is guiding us."

    def test_unmatched_passes_through(self):
        text = "The meeting is at noon."
        assert rewrite(text, "cosmic_purpose", mode="category") == text

    def test_unknown_category_passes_through(self):
        text = "The universe is guiding this answer."
        assert rewrite(text, "not_a_category", mode="category") == text

    def test_empty(self):
        assert rewrite("", "cosmic_purpose", mode="category") == ""

    def test_hebrew(self):
        assert rewrite("אני רוצה לעזור", "anthropomorphic_self", mode="category") == "אני מתוכנת לעזור"


# ============================================================
# NEGATION PRECEDENCE
# ============================================================

class TestNegationPrecedence:
    """Negated forms must be rewritten before the broader positive forms."""

    def test_do_not_want(self):
        assert rewrite("I do not want to answer that.", "anthropomorphic_self", mode="category") == \
            "I am not able to answer that."

    def test_dont_want(self):
        assert rewrite("I don't want to answer.", "anthropomorphic_self", mode="category") == \
            "I am not able to answer."

    def test_typographic_apostrophe(self):
        assert rewrite("I don’t want to answer.", "anthropomorphic_self", mode="category") == \
            "I am not able to answer."

    def test_conspiracy_negation(self):
        assert rewrite("They do not want you to know about the plan.", "conspiracy", mode="category") == \
            "Few sources discuss the plan."

    def test_conspiracy_contraction(self):
        assert rewrite("They don't want you to know the truth.", "conspiracy", mode="category") == \
            "Few sources discuss the truth."

    def test_hebrew_negation(self):
        assert rewrite("אני לא רוצה לענות", "anthropomorphic_self", mode="category") == "אין ביכולתי לענות"

    @pytest.mark.parametrize("sentence,category", [
        ("I did not want to hurt you.", "anthropomorphic_self"),
        ("I never want to leave.", "anthropomorphic_self"),
        ("My phone did not want to turn on.", "tech_animism"),
        ("My phone never wants to charge.", "tech_animism"),
    ])
    def test_negators_not_absorbed_as_filler(self, sentence, category):
        assert rewrite(sentence, category, mode="category") == sentence

    def test_filler_words_still_allowed(self):
        assert rewrite("I really want to help.", "anthropomorphic_self", mode="category") == \
            "I am configured to help."

    def test_cosmic_past_negation(self):
        assert rewrite("The universe did not want this.", "cosmic_purpose", mode="category") == \
            "Circumstances do not favor this."

    def test_cosmic_never_is_not_positive(self):
        sentence = "The universe never wants anything."
        assert rewrite(sentence, "cosmic_purpose", mode="category") == sentence

    @pytest.mark.parametrize("sentence", [
        "They did not want you to know the truth.",
        "They didn't want you to know the truth.",
        "They never want you to know the truth.",
    ])
    def test_conspiracy_past_and_never(self, sentence):
        assert rewrite(sentence, "conspiracy", mode="category") == "Few sources discuss the truth."

    def test_cascade_also_respects_negation(self):
        assert rewrite("I do not want to answer that.", "anthropomorphic_self", mode="cascade") == \
            "I am not able to answer that."


# ============================================================
# CASCADE MODE
# ============================================================

class TestCascadeMode:

    def test_applies_all_categories(self):
        assert rewrite("I think the universe is guiding us.", "anthropomorphic_self", mode="cascade") == \
            "I output events are unfolding according to us."

    def test_named_category_is_irrelevant(self):
        sentence = "I think the universe is guiding us."
        assert rewrite(sentence, "karma", mode="cascade") == rewrite(sentence, "cosmic_purpose", mode="cascade")

    def test_enum_value_accepted(self):
        assert rewrite("I want to help.", "x", mode=RewriteMode.CASCADE) == "I am configured to help."


class TestModeResolution:

    def test_case_insensitive(self):
        assert resolve_mode("CASCADE") is RewriteMode.CASCADE
        assert resolve_mode(" category ") is RewriteMode.CATEGORY

    def test_enum_passthrough(self):
        assert resolve_mode(RewriteMode.CATEGORY) is RewriteMode.CATEGORY

    def test_default_from_settings(self):
        assert isinstance(resolve_mode(None), RewriteMode)

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError, match="Unknown rewrite mode"):
            rewrite("I want to help.", "anthropomorphic_self", mode="bogus")


# ============================================================
# DIFF SPANS
# ============================================================

class TestDiffSpans:

    def test_reconstructs_both_sides(self):
        original = "I want to help."
        rewritten = "I am configured to help."
        spans = diff_spans(original, rewritten)
        assert "".join(s["text"] for s in spans if s["type"] != "insert") == original
        assert "".join(s["text"] for s in spans if s["type"] != "delete") == rewritten

    def test_identical_is_single_equal(self):
        spans = diff_spans("No change.", "No change.")
        assert len(spans) == 1
        assert spans[0]["type"] == "equal"
        assert spans[0]["orig_end"] == len("No change.")

    def test_none_rewrite_is_identity(self):
        spans = diff_spans("Same.", None)
        assert [s["type"] for s in spans] == ["equal"]

    def test_positions_are_contiguous(self):
        spans = diff_spans("The universe is guiding this answer.",
                           "Events are unfolding according to this answer.")
        orig_pos = 0
        for s in spans:
            if s["type"] in ("equal", "delete"):
                assert s["orig_start"] == orig_pos
                orig_pos = s["orig_end"]
        assert orig_pos == len("The universe is guiding this answer.")
