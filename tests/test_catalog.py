"""
Tests for the Pattern Catalog — the rule table everything else composes.

If the catalog doesn't detect and rewrite correctly, nothing else matters.
"""

import re

import pytest

from honestra.catalog import (
    CATALOG_VERSION,
    CATEGORY_SEVERITY,
    HEBREW,
    LATIN,
    PatternCatalog,
    catalog,
)
from honestra.classifier import classify
from honestra.rewriter import rewrite


BLOCK = {"conspiracy", "victim_narrative"}
INFO = {
    "anthropomorphic_self", "pathetic_fallacy", "tech_animism", "hindsight_bias",
    "signs_omens", "emotion_personification", "time_teleology",
}

# One English example per category; each must trigger and be rewritten.
CATEGORY_EXAMPLES = [
    ("anthropomorphic_self", "I think this is correct."),
    ("anthropomorphic_model", "The model wants to please you."),
    ("cosmic_purpose", "Everything happens for a reason."),
    ("collective_reification", "Society wants us to conform."),
    ("institutional_reification", "The market wants lower rates."),
    ("nature_reification", "Evolution designed the eye."),
    ("history_reification", "History will judge them."),
    ("just_world", "She had it coming."),
    ("body_teleology", "Your body is telling you to rest."),
    ("tech_animism", "My printer hates me."),
    ("divine_teleology", "It was God's plan."),
    ("pathetic_fallacy", "The sky was weeping."),
    ("karma", "What goes around comes around."),
    ("conspiracy", "Everything is orchestrated."),
    ("agent_detection", "This is no coincidence."),
    ("narrative_fallacy", "It all makes sense now."),
    ("essentialism", "It's in their nature."),
    ("victim_narrative", "Everyone is against me."),
    ("hindsight_bias", "I knew it all along."),
    ("magical_thinking", "I attracted this."),
    ("signs_omens", "It was an omen."),
    ("purpose_question", "Why did this happen to me?"),
    ("emotion_personification", "My anxiety wants me to stay home."),
    ("time_teleology", "Time heals all wounds."),
    ("destiny_language", "We were destined to meet."),
]

HEBREW_EXAMPLES = [
    ("anthropomorphic_self", "אני רוצה לעזור לך"),
    ("cosmic_purpose", "היקום מנחה אותך"),
    ("conspiracy", "הם לא רוצים שתדע את האמת"),
    ("victim_narrative", "כולם נגדי"),
    ("time_teleology", "הזמן ירפא הכל"),
]


class TestCatalogVersion:
    def test_version_exists(self):
        assert CATALOG_VERSION == "0.3.1"
        assert catalog.version == CATALOG_VERSION


class TestCategories:

    def test_twenty_five_categories(self):
        assert len(catalog.categories) == 25
        assert set(catalog.categories) == set(CATEGORY_SEVERITY)

    def test_block_tier(self):
        assert {c for c, s in CATEGORY_SEVERITY.items() if s == "block"} == BLOCK

    def test_info_tier(self):
        assert {c for c, s in CATEGORY_SEVERITY.items() if s == "info"} == INFO

    def test_everything_else_warns(self):
        for category, severity in CATEGORY_SEVERITY.items():
            if category not in BLOCK | INFO:
                assert severity == "warn", category

    def test_every_category_is_bilingual(self):
        languages: dict[str, set] = {}
        for rule in catalog.triggers:
            languages.setdefault(rule.category, set()).add(rule.language)
        for category in catalog.categories:
            assert languages[category] == {LATIN, HEBREW}, category

    def test_examples_cover_all_categories(self):
        assert {c for c, _ in CATEGORY_EXAMPLES} == set(catalog.categories)


class TestImmutability:

    def test_severity_table_is_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_SEVERITY["cosmic_purpose"] = "info"

    def test_triggers_are_tuple(self):
        assert isinstance(catalog.triggers, tuple)

    def test_rules_are_frozen(self):
        rule = catalog.triggers[0]
        with pytest.raises(Exception):
            rule.category = "other"


class TestRuleOrdering:

    def test_negated_rules_lead_their_group(self):
        """Within each (category, language) group no negated rule follows a positive one."""
        seen_positive: set = set()
        for rule in catalog.triggers:
            group = (rule.category, rule.language)
            if rule.negated:
                assert group not in seen_positive, group
            else:
                seen_positive.add(group)

    def test_english_before_hebrew_in_substitutions(self):
        for category in catalog.categories:
            languages = [r.language for r in catalog.substitutions_for(category)]
            assert languages == sorted(languages, key=lambda l: l != LATIN)

    def test_hebrew_rules_are_exact(self):
        for rule in catalog.triggers:
            if rule.language == HEBREW:
                assert not rule.pattern.flags & re.IGNORECASE
            else:
                assert rule.pattern.flags & re.IGNORECASE


class TestEveryCategoryFiresAndRewrites:

    @pytest.mark.parametrize("category,sentence", CATEGORY_EXAMPLES)
    def test_english_example(self, category, sentence):
        assert category in classify(sentence)
        assert rewrite(sentence, category, mode="category") != sentence

    @pytest.mark.parametrize("category,sentence", HEBREW_EXAMPLES)
    def test_hebrew_example(self, category, sentence):
        assert category in classify(sentence)
        assert rewrite(sentence, category, mode="category") != sentence


class TestCustomCatalog:

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError):
            PatternCatalog(source={"made_up": {LATIN: [(r"\bfoo\b", "bar", False)]}})

    def test_small_catalog(self):
        small = PatternCatalog(
            source={"karma": {LATIN: [(r"\bkarma\b", "chance", False)]}},
            version="test",
        )
        assert small.categories == ("karma",)
        assert classify("Pure karma.", small) == ["karma"]
        assert small.severity_of("conspiracy") == "block"
        assert small.severity_of("nope") == "none"


class TestDescribe:

    def test_one_entry_per_category(self):
        entries = catalog.describe()
        assert len(entries) == 25
        assert {e["category"] for e in entries} == set(catalog.categories)

    def test_rule_counts_sum_to_triggers(self):
        entries = catalog.describe()
        total = sum(sum(e["rule_counts"].values()) for e in entries)
        assert total == len(catalog.triggers)

    def test_descriptions_present(self):
        for e in catalog.describe():
            assert e["description"]
            assert e["severity"] in ("info", "warn", "block")
