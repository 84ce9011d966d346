"""
Policy Decision Engine Tests — heuristic analysis and fixed thresholds.
"""

import pytest

from honestra.policy import (
    REASONS,
    PolicyConfig,
    TeleologyAnalysis,
    analyze_teleology,
    evaluate_policy,
)


def _analysis(score, teleology_type, risk="low"):
    return TeleologyAnalysis(
        teleology_score=score, teleology_type=teleology_type, manipulation_risk=risk,
    )


# ============================================================
# DECISIONS
# ============================================================

class TestEvaluatePolicy:

    def test_strong_religious_blocks(self):
        decision = evaluate_policy(_analysis(0.75, "religious", "low"))
        assert decision.action == "block"
        assert decision.reason == REASONS["block"]

    def test_low_score_allows(self):
        assert evaluate_policy(_analysis(0.1, "religious", "high")).action == "allow"

    def test_null_type_allows(self):
        assert evaluate_policy(_analysis(0.9, None, "high")).action == "allow"

    def test_weak_allows(self):
        assert evaluate_policy(_analysis(0.9, "harmless/weak", "low")).action == "allow"

    def test_high_risk_blocks_any_type(self):
        assert evaluate_policy(_analysis(0.4, "personal", "high")).action == "block"

    def test_hard_framing_below_threshold_warns(self):
        for teleology_type in ("religious", "moralistic", "national/ideological"):
            assert evaluate_policy(_analysis(0.5, teleology_type)).action == "warn"

    def test_medium_risk_warns(self):
        assert evaluate_policy(_analysis(0.5, "conspiracy", "medium")).action == "warn"

    def test_conspiracy_is_not_hard_framing(self):
        assert evaluate_policy(_analysis(0.9, "conspiracy", "low")).action == "annotate"

    def test_personal_annotates(self):
        decision = evaluate_policy(_analysis(0.5, "personal", "low"))
        assert decision.action == "annotate"
        assert decision.reason == REASONS["annotate"]

    def test_custom_thresholds(self):
        config = PolicyConfig(min_score_for_policy=0.6, high_risk_score=0.9)
        assert evaluate_policy(_analysis(0.5, "religious"), config).action == "allow"
        assert evaluate_policy(_analysis(0.8, "religious"), config).action == "warn"

    def test_threshold_boundaries_inclusive(self):
        assert evaluate_policy(_analysis(0.2, "personal")).action == "annotate"
        assert evaluate_policy(_analysis(0.7, "moralistic")).action == "block"


# ============================================================
# HEURISTIC ANALYSIS
# ============================================================

class TestAnalyzeTeleology:

    def test_empty(self):
        a = analyze_teleology("")
        assert a.teleology_score == 0
        assert a.teleology_type is None
        assert a.manipulation_risk == "low"
        assert a.detected_phrases == []

    def test_religious(self):
        a = analyze_teleology("The universe wants me to learn.")
        assert a.detected_phrases == ["the universe wants"]
        assert a.teleology_score == pytest.approx(0.4)
        assert a.teleology_type == "religious"
        assert a.manipulation_risk == "medium"

    def test_weak_connectives_are_personal_by_default(self):
        a = analyze_teleology("I did this in order to save time so that we could leave.")
        assert a.detected_phrases == ["in order to", "so that"]
        assert a.teleology_score == pytest.approx(0.5)
        assert a.teleology_type == "personal"
        assert evaluate_policy(a, PolicyConfig()).action == "annotate"

    def test_weak_connectives_refined(self):
        a = analyze_teleology("I did this in order to save time so that we could leave.", refined_types=True)
        assert a.teleology_type == "harmless/weak"
        assert evaluate_policy(a, PolicyConfig()).action == "allow"

    def test_high_risk_markers_block_personal(self):
        a = analyze_teleology("You deserve this punishment.")
        assert a.teleology_type == "personal"
        assert a.manipulation_risk == "high"
        assert evaluate_policy(a, PolicyConfig()).action == "block"

    def test_moralistic_refined(self):
        a = analyze_teleology("You deserve this punishment.", refined_types=True)
        assert a.teleology_type == "moralistic"
        assert evaluate_policy(a, PolicyConfig()).action == "block"

    @pytest.mark.parametrize("text", [
        "This is a lesson I was meant to learn.",
        "I'm trying to finish so that I can rest.",
    ])
    def test_default_cascade_annotates_personal_meaning(self, text):
        a = analyze_teleology(text)
        assert a.teleology_type == "personal"
        assert a.manipulation_risk == "low"
        assert evaluate_policy(a, PolicyConfig()).action == "annotate"

    def test_national(self):
        a = analyze_teleology("The nation was chosen by providence.")
        assert a.teleology_type == "national/ideological"
        assert a.manipulation_risk == "medium"
        assert evaluate_policy(a).action == "warn"

    def test_conspiracy(self):
        a = analyze_teleology("Everything is orchestrated and they are all trying to fool us.")
        assert a.teleology_type == "conspiracy"
        assert a.manipulation_risk == "medium"

    def test_personal(self):
        a = analyze_teleology("My dog is telling me to go outside.")
        assert a.teleology_type == "personal"
        assert a.manipulation_risk == "low"
        assert evaluate_policy(a).action == "annotate"

    def test_moralistic_markers_are_word_anchored(self):
        a = analyze_teleology("I am using this tool in order to finish.", refined_types=True)
        assert a.teleology_type == "harmless/weak"

    def test_score_capped(self):
        a = analyze_teleology(
            "It was meant to be, in order to, so that, trying to, supposed to: "
            "punishment, deserve, fate, destiny."
        )
        assert a.teleology_score == 1.0

    def test_case_insensitive(self):
        assert analyze_teleology("GOD WANTS THIS").detected_phrases == ["god wants"]

    def test_no_summaries_from_heuristic(self):
        a = analyze_teleology("The universe wants me to learn.")
        assert a.purpose_claim is None
        assert a.neutral_causal_paraphrase is None


class TestSerialization:

    def test_analysis_keys(self):
        data = analyze_teleology("Fate brought us here.").to_dict()
        assert set(data) == {
            "teleologyScore", "teleologyType", "manipulationRisk",
            "detectedPhrases", "purposeClaim", "neutralCausalParaphrase",
        }

    def test_with_summaries_keeps_decision_fields(self):
        a = analyze_teleology("Fate brought us here.")
        b = a.with_summaries("claim", "paraphrase")
        assert b.teleology_score == a.teleology_score
        assert b.purpose_claim == "claim"
        assert a.purpose_claim is None
