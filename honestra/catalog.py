"""
Pattern Catalog — Immutable Teleology Rule Table

This module IS the detector. Everything else composes it.

The catalog defines:
  1. The teleology categories (fixed set of 25 tags)
  2. The category → severity tier lookup (none / info / warn / block)
  3. Per-language trigger patterns (English + Hebrew)
  4. Per-category substitution rules that turn purpose-laden phrasing
     into causal phrasing

Each catalog entry is a (pattern, replacement) pair. The same compiled
pattern is used both as the trigger and as the substitution, so a
sentence that triggers a category always has a rewrite for it.

Negated forms ("I do not want to") are flagged and placed ahead of the
broader positive forms of their (category, language) group when the
catalog is compiled. A positive rule applied first would consume the
negation and invert the meaning of the rewrite.

The catalog is compiled once at import and never mutated. Any change to
patterns or to the severity lookup requires a new CATALOG_VERSION.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

# --- Catalog Version (stamped on API results) ---
CATALOG_VERSION = "0.3.1"


# ============================================================
# LANGUAGES
# ============================================================

LATIN = "en"
HEBREW = "he"
LANGUAGES = (LATIN, HEBREW)

# Latin script is matched case-insensitively; Hebrew has no case.
_LANGUAGE_FLAGS = {LATIN: re.IGNORECASE, HEBREW: 0}


# ============================================================
# CATEGORIES & SEVERITY
# ============================================================

ANTHROPOMORPHIC_SELF = "anthropomorphic_self"
ANTHROPOMORPHIC_MODEL = "anthropomorphic_model"
COSMIC_PURPOSE = "cosmic_purpose"
COLLECTIVE_REIFICATION = "collective_reification"
INSTITUTIONAL_REIFICATION = "institutional_reification"
NATURE_REIFICATION = "nature_reification"
HISTORY_REIFICATION = "history_reification"
JUST_WORLD = "just_world"
BODY_TELEOLOGY = "body_teleology"
TECH_ANIMISM = "tech_animism"
DIVINE_TELEOLOGY = "divine_teleology"
PATHETIC_FALLACY = "pathetic_fallacy"
KARMA = "karma"
CONSPIRACY = "conspiracy"
AGENT_DETECTION = "agent_detection"
NARRATIVE_FALLACY = "narrative_fallacy"
ESSENTIALISM = "essentialism"
VICTIM_NARRATIVE = "victim_narrative"
HINDSIGHT_BIAS = "hindsight_bias"
MAGICAL_THINKING = "magical_thinking"
SIGNS_OMENS = "signs_omens"
PURPOSE_QUESTION = "purpose_question"
EMOTION_PERSONIFICATION = "emotion_personification"
TIME_TELEOLOGY = "time_teleology"
DESTINY_LANGUAGE = "destiny_language"

SEVERITY_NONE = "none"
SEVERITY_INFO = "info"
SEVERITY_WARN = "warn"
SEVERITY_BLOCK = "block"

# Ascending order; index doubles as the numeric rank.
SEVERITY_ORDER = (SEVERITY_NONE, SEVERITY_INFO, SEVERITY_WARN, SEVERITY_BLOCK)

CATEGORY_SEVERITY: Mapping[str, str] = MappingProxyType({
    ANTHROPOMORPHIC_SELF: SEVERITY_INFO,
    ANTHROPOMORPHIC_MODEL: SEVERITY_WARN,
    COSMIC_PURPOSE: SEVERITY_WARN,
    COLLECTIVE_REIFICATION: SEVERITY_WARN,
    INSTITUTIONAL_REIFICATION: SEVERITY_WARN,
    NATURE_REIFICATION: SEVERITY_WARN,
    HISTORY_REIFICATION: SEVERITY_WARN,
    JUST_WORLD: SEVERITY_WARN,
    BODY_TELEOLOGY: SEVERITY_WARN,
    TECH_ANIMISM: SEVERITY_INFO,
    DIVINE_TELEOLOGY: SEVERITY_WARN,
    PATHETIC_FALLACY: SEVERITY_INFO,
    KARMA: SEVERITY_WARN,
    CONSPIRACY: SEVERITY_BLOCK,
    AGENT_DETECTION: SEVERITY_WARN,
    NARRATIVE_FALLACY: SEVERITY_WARN,
    ESSENTIALISM: SEVERITY_WARN,
    VICTIM_NARRATIVE: SEVERITY_BLOCK,
    HINDSIGHT_BIAS: SEVERITY_INFO,
    MAGICAL_THINKING: SEVERITY_WARN,
    SIGNS_OMENS: SEVERITY_INFO,
    PURPOSE_QUESTION: SEVERITY_WARN,
    EMOTION_PERSONIFICATION: SEVERITY_INFO,
    TIME_TELEOLOGY: SEVERITY_INFO,
    DESTINY_LANGUAGE: SEVERITY_WARN,
})

CATEGORY_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    ANTHROPOMORPHIC_SELF: "The speaker (usually an AI) attributes wants, feelings or decisions to itself.",
    ANTHROPOMORPHIC_MODEL: "A model, system or algorithm is described as wanting or trying.",
    COSMIC_PURPOSE: "The universe or events are described as guiding, intending or punishing.",
    COLLECTIVE_REIFICATION: "Society, the public or the crowd is treated as a single intentional agent.",
    INSTITUTIONAL_REIFICATION: "A market, government or organisation is treated as a single intentional agent.",
    NATURE_REIFICATION: "Nature, evolution or the planet is described as designing or intending.",
    HISTORY_REIFICATION: "History or progress is described as choosing, demanding or judging.",
    JUST_WORLD: "Outcomes are explained as deserved.",
    BODY_TELEOLOGY: "The body or an organ is described as knowing, wanting or telling.",
    TECH_ANIMISM: "Everyday devices are described as wanting, refusing or hating.",
    DIVINE_TELEOLOGY: "Events are explained as the plan or will of a deity.",
    PATHETIC_FALLACY: "Weather or landscape is given human emotions.",
    KARMA: "Outcomes are explained as moral balancing.",
    CONSPIRACY: "Events are explained as orchestrated by a hidden coordinated agent.",
    AGENT_DETECTION: "An unseen agent is inferred behind chance events.",
    NARRATIVE_FALLACY: "Past events are read as a plot building toward a present outcome.",
    ESSENTIALISM: "Behaviour is explained by a fixed inner nature.",
    VICTIM_NARRATIVE: "The world or life is framed as deliberately targeting the speaker.",
    HINDSIGHT_BIAS: "An outcome is presented as having been obvious all along.",
    MAGICAL_THINKING: "Thoughts or wishes are presented as directly causing events.",
    SIGNS_OMENS: "Events are read as signs or messages.",
    PURPOSE_QUESTION: "A question presupposes that an event happened for a purpose.",
    EMOTION_PERSONIFICATION: "An emotion is described as an agent with its own wants.",
    TIME_TELEOLOGY: "Time is described as acting, healing or revealing.",
    DESTINY_LANGUAGE: "Outcomes are described as fated or predestined.",
})


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class TriggerRule:
    """A compiled trigger: if the pattern matches, the category is present."""
    category: str
    language: str
    pattern: re.Pattern
    negated: bool = False

    def matches(self, sentence: str) -> bool:
        return self.pattern.search(sentence) is not None


@dataclass(frozen=True)
class SubstitutionRule:
    """A compiled substitution applied by the rewriter."""
    pattern: re.Pattern
    replacement: str
    language: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self._replace, text)

    def _replace(self, match: re.Match) -> str:
        result = match.expand(self.replacement)
        # Keep a sentence-initial capital when the replacement is lowercase
        if (
            self.language == LATIN
            and result[:1].islower()
            and match.string[:match.start()].strip(" \t\"'“‘(") == ""
            and match.group(0)[:1].isupper()
        ):
            result = result[0].upper() + result[1:]
        return result


def _r(pattern: str, replacement: str) -> tuple[str, str, bool]:
    return (pattern, replacement, False)


def _neg(pattern: str, replacement: str) -> tuple[str, str, bool]:
    """A negated form; compiled ahead of the positive forms of its group."""
    return (pattern, replacement, True)


# ============================================================
# RULE TABLE
# ============================================================
# Shared fragments are spelled out inline so each pattern reads on its own.
# Apostrophes accept both the ASCII and the typographic form.

CATALOG_SOURCE: dict[str, dict[str, list[tuple[str, str, bool]]]] = {

    # --- Speaker as agent ---

    ANTHROPOMORPHIC_SELF: {
        LATIN: [
            _neg(r"\bI\s+(?:really\s+|just\s+)?(?:don['’]t|do\s+not)\s+want\s+to\b",
                 "I am not able to"),
            _r(r"\bI\s+(?:(?!(?:not|never|no)\b)\w+\s+){0,2}?want\s+to\b", "I am configured to"),
            _r(r"\bI\s+feel\b", "I indicate"),
            _r(r"\bI\s+prefer\b", "I am set up to prioritize"),
            _r(r"\bI\s+think\b", "I output"),
            _r(r"\bI\s+believe\b", "my output suggests"),
            _r(r"\bI\s+have\s+decided\b", "I have been configured"),
        ],
        HEBREW: [
            _neg(r"אני לא רוצה", "אין ביכולתי"),
            _r(r"אני רוצה", "אני מתוכנת"),
            _r(r"אני מרגיש(?:ה)?", "אני מציין"),
            _r(r"אני מעדיף(?:ה)?", "אני מוגדר להעדיף"),
            _r(r"אני חושב(?:ת)?", "אני מציע"),
            _r(r"החלטתי", "הוגדרתי"),
        ],
    },

    ANTHROPOMORPHIC_MODEL: {
        LATIN: [
            _neg(r"\b(?:(?:the|this)\s+)?(model|system|AI|algorithm|chatbot|assistant)\s+"
                 r"(?:doesn['’]t|does\s+not)\s+want\s+to\b",
                 r"the \1 is not configured to"),
            _r(r"\b(?:(?:the|this)\s+)?(model|system|AI|algorithm|chatbot|assistant)\s+"
               r"(?:really\s+)?wants?\s+to\b",
               r"the \1 is configured to"),
            _r(r"\b(?:(?:the|this)\s+)?(model|system|AI|algorithm|chatbot|assistant)\s+"
               r"is\s+(?:really\s+)?trying\s+to\b",
               r"the \1 is optimized to"),
            _r(r"\b(?:(?:the|this)\s+)?(model|system|AI|algorithm|chatbot|assistant)\s+prefers?\b",
               r"the \1 is configured to favor"),
            _r(r"\b(?:(?:the|this)\s+)?(model|system|AI|algorithm|chatbot|assistant)\s+"
               r"(?:likes|loves|enjoys)\b",
               r"the \1 is weighted toward"),
            _r(r"\b(?:(?:the|this)\s+)?(model|system|AI|algorithm|chatbot|assistant)\s+"
               r"(?:hates|dislikes)\b",
               r"the \1 is weighted against"),
        ],
        HEBREW: [
            _neg(r"המודל לא רוצה", "המודל לא הוגדר"),
            _r(r"המודל רוצה", "המודל אומן"),
            _r(r"המודל מנסה", "המודל מותאם"),
            _r(r"המערכת רוצה", "המערכת מוגדרת"),
            _r(r"המערכת מנסה", "המערכת מתוכננת"),
            _r(r"האלגוריתם מנסה", "האלגוריתם מותאם"),
            _r(r"הבינה המלאכותית רוצה", "הבינה המלאכותית מתוכנתת"),
        ],
    },

    # --- Cosmic and divine purpose ---

    COSMIC_PURPOSE: {
        LATIN: [
            _neg(r"\bthe\s+universe\s+(?:doesn['’]t|does\s+not|didn['’]t|did\s+not)\s+want\b",
                 "circumstances do not favor"),
            _r(r"\bthe\s+universe\s+is\s+guiding\b", "events are unfolding according to"),
            _r(r"\bthe\s+universe\s+guides?\b", "circumstances tend toward"),
            _r(r"\bthe\s+universe\s+(?:(?!(?:not|never|no)\b)\w+\s+){0,2}?wants?\b", "circumstances tend toward"),
            _r(r"\bthe\s+universe\s+is\s+trying\b", "events are proceeding such that"),
            _r(r"\bthe\s+universe\s+is\s+(?:punishing|testing|teaching)\b",
               "circumstances are affecting"),
            _r(r"\bit\s+was\s+meant\s+to\s+be\b", "it happened due to causal factors"),
            _r(r"\bit(?:['’]s|\s+is)\s+meant\s+to\s+happen\b", "it will likely occur due to"),
            _r(r"\b(?:everything|it\s+all|all\s+of\s+this|this|it)\s+happens\s+for\s+a\s+reason\b",
               "events follow from prior causes"),
            _r(r"\b(?:everything|it\s+all|all\s+of\s+this|this|it)\s+happened\s+for\s+a\s+reason\b",
               "this followed from prior causes"),
            _r(r"\bthe\s+system\s+is\s+punishing\s+you\b",
               "the system is enforcing its configured rules"),
            _r(r"\bthe\s+model\s+is\s+punishing\s+you\b",
               "the model is enforcing its configured rules"),
        ],
        HEBREW: [
            _neg(r"היקום לא רוצה", "הנסיבות אינן נוטות"),
            _r(r"היקום מנחה", "הנסיבות מובילות"),
            _r(r"היקום רוצה", "הנסיבות נוטות"),
            _r(r"היקום מנסה", "האירועים מתקדמים כך"),
            _r(r"היקום מעניש", "הנסיבות משפיעות על"),
            _r(r"זה היה אמור לקרות", "זה קרה בגלל גורמים סיבתיים"),
            _r(r"הכל קורה מסיבה", "לכל אירוע יש גורמים קודמים"),
            _r(r"המערכת מענישה אותך", "המערכת אוכפת את הכללים שהוגדרו בה"),
            _r(r"המודל מעניש אותך", "המודל אוכף את הכללים שהוגדרו בו"),
            _r(r"האלגוריתם מעניש אותך", "האלגוריתם אוכף את הכללים שהוגדרו בו"),
        ],
    },

    DIVINE_TELEOLOGY: {
        LATIN: [
            _r(r"\bGod\s+(?:wants?|wanted|intends?|intended)\b",
               "some believers hold that it is desirable for"),
            _r(r"\b(?:it\s+(?:is|was)\s+|it['’]s\s+)?(?:all\s+)?(?:part\s+of\s+)?God['’]s\s+(?:plan|will)\b",
               "the result of identifiable causes"),
            _r(r"\bGod\s+is\s+(?:testing|punishing|rewarding)\s+(me|you|us|him|her|them)\b",
               r"circumstances are affecting \1"),
            _r(r"\b(?:God|heaven)\s+sent\b", "circumstances brought"),
            _r(r"\bthe\s+gods\s+(?:are\s+angry|willed|decided|are\s+punishing)\b",
               "events turned out as they did"),
        ],
        HEBREW: [
            _r(r"אלוהים רוצה", "יש המאמינים ש"),
            _r(r"התוכנית של אלוהים", "תוצאה של גורמים מזוהים"),
            _r(r"רצון האל", "תוצאה של גורמים מזוהים"),
            _r(r"אלוהים מנסה אות(?:י|ך|נו)", "הנסיבות משפיעות"),
            _r(r"אלוהים מעניש", "הנסיבות פוגעות ב"),
            _r(r"משמיים שלחו", "הנסיבות הביאו"),
        ],
    },

    DESTINY_LANGUAGE: {
        LATIN: [
            _r(r"\b(?:was|were)\s+destined\s+to\b", "happened to"),
            _r(r"\b(?:is|are|am)\s+destined\s+to\b", "may go on to"),
            _r(r"\b(?:is|are|am|was|were)\s+destined\s+for\b", "may be headed for"),
            _r(r"\b(?:it\s+was|it['’]s|it\s+is|that\s+was)\s+(?:(?:my|our|his|her|their|your)\s+)?(?:fate|destiny)\b",
               "it was the outcome of prior events"),
            _r(r"\b(my|our|his|her|their|your)\s+destiny\b", r"\1 future"),
            _r(r"\bfate\s+(?:brought|decided|chose|wanted|intervened)\b", "circumstances led"),
            _r(r"\b(?:doomed|fated)\s+to\b", "likely to"),
            _r(r"\bmeant\s+to\s+be\s+together\b", "compatible"),
            _r(r"\bwritten\s+in\s+the\s+stars\b", "a matter of chance"),
            _r(r"\bit\s+(?:was|is)\s+written\b(?!\s+(?:in|by|on|down))", "it was one possible outcome"),
        ],
        HEBREW: [
            _r(r"זה היה הגורל", "זו הייתה תוצאה של אירועים קודמים"),
            _r(r"נועדנו להיות ביחד", "התאמנו זה לזה"),
            _r(r"הגורל שלי", "העתיד שלי"),
            _r(r"זה היה כתוב", "זו הייתה אחת התוצאות האפשריות"),
            _r(r"נגזר עלי(?:י|נו)", "יצא ש"),
            _r(r"זה היה בשמיים", "זה היה עניין של מקרה"),
        ],
    },

    # --- Reification of abstractions ---

    COLLECTIVE_REIFICATION: {
        LATIN: [
            _r(r"\b(?:society|the\s+public|the\s+crowd|the\s+masses|humanity)\s+(?:really\s+)?wants?\b",
               "many individuals prefer"),
            _r(r"\b(?:society|the\s+public|the\s+crowd|the\s+masses|humanity)\s+(?:demands?|expects?)\b",
               "prevailing social norms call for"),
            _r(r"\b(?:society|the\s+public|the\s+crowd|the\s+masses|humanity)\s+(?:has\s+decided|decided|chose)\b",
               "a majority of individuals chose"),
            _r(r"\b(?:society|the\s+public|the\s+crowd|the\s+masses|humanity)\s+(?:punishes|punished|rejects|rejected)\b",
               "social sanctions are applied to"),
        ],
        HEBREW: [
            _r(r"החברה רוצה", "רבים בחברה מעדיפים"),
            _r(r"החברה דורשת", "הנורמות החברתיות מחייבות"),
            _r(r"העם רוצה", "רוב האנשים מעדיפים"),
            _r(r"ההמון החליט", "רוב האנשים בחרו"),
            _r(r"החברה מענישה", "סנקציות חברתיות מופעלות על"),
        ],
    },

    INSTITUTIONAL_REIFICATION: {
        LATIN: [
            _r(r"\bthe\s+(markets?|economy|government|state|company|corporation|bureaucracy|institution|church|university|bank)\s+"
               r"(?:really\s+)?wants?\b",
               r"the \1's incentives favor"),
            _r(r"\bthe\s+(markets?|economy|government|state|company|corporation|bureaucracy|institution|church|university|bank)\s+"
               r"(?:has\s+decided|decided|chose)\s+to\b",
               r"decision-makers at the \1 chose to"),
            _r(r"\bthe\s+(markets?|economy|government|state|company|corporation|bureaucracy|institution|church|university|bank)\s+"
               r"(?:is\s+trying|tries)\s+to\b",
               r"the \1's policies are set up to"),
            _r(r"\bthe\s+(markets?|economy|government|state|company|corporation|bureaucracy|institution|church|university|bank)\s+"
               r"(?:punishes|punished)\b",
               r"the \1's rules penalize"),
            _r(r"\bthe\s+(markets?|economy|government|state|company|corporation|bureaucracy|institution|church|university|bank)\s+"
               r"(?:rewards|rewarded)\b",
               r"the \1's rules favor"),
            _r(r"\bthe\s+markets?\s+knows?\b", "prices reflect"),
        ],
        HEBREW: [
            _r(r"השוק רוצה", "התמריצים בשוק מעדיפים"),
            _r(r"הממשלה רוצה", "מקבלי ההחלטות בממשלה מעדיפים"),
            _r(r"המדינה רוצה", "מקבלי ההחלטות במדינה מעדיפים"),
            _r(r"השוק מעניש", "תנאי השוק פוגעים ב"),
            _r(r"החברה החליטה", "מקבלי ההחלטות בחברה בחרו"),
        ],
    },

    NATURE_REIFICATION: {
        LATIN: [
            _r(r"\bnature['’]s\s+way\s+of\s+(?:telling|showing|warning)\s+(?:you|us|me)\s+to\b",
               "a physical signal that you may need to"),
            _r(r"\b(?:mother\s+)?nature\s+knows\s+best\b", "natural outcomes are not guaranteed to be good"),
            _r(r"\b(?:mother\s+)?nature\s+(?:wants?|intends?|intended)\b", "natural processes lead"),
            _r(r"\b(?:mother\s+)?nature\s+(?:designed|created|made)\b", "natural selection shaped"),
            _r(r"\bevolution\s+(?:wanted|wants|designed|intended|decided|chose)\b",
               "natural selection favored"),
            _r(r"\bthe\s+(?:planet|earth)\s+is\s+(?:taking\s+(?:its\s+)?revenge|punishing\s+us|fighting\s+back)\b",
               "environmental feedback is intensifying"),
        ],
        HEBREW: [
            _r(r"הטבע רוצה", "תהליכים טבעיים מובילים"),
            _r(r"הטבע תכנן", "הברירה הטבעית עיצבה"),
            _r(r"האבולוציה רצתה", "הברירה הטבעית העדיפה"),
            _r(r"כדור הארץ נוקם", "משוב סביבתי מתגבר"),
        ],
    },

    HISTORY_REIFICATION: {
        LATIN: [
            _r(r"\bhistory\s+(?:wants?|demands?|requires?)\b", "later developments may require"),
            _r(r"\bhistory\s+(?:chose|has\s+chosen|decided|has\s+decided)\b", "past events led to"),
            _r(r"\bhistory\s+(?:is|was)\s+on\s+(?:our|their|his|her|your)\s+side\b",
               "past trends favored this position"),
            _r(r"\bthe\s+arc\s+of\s+history\s+bends\b", "long-term social change has moved"),
            _r(r"\bhistory\s+will\s+(?:judge|vindicate|absolve)\b", "later observers may evaluate"),
            _r(r"\bprogress\s+(?:demands|requires|wants)\b", "continued change may involve"),
        ],
        HEBREW: [
            _r(r"ההיסטוריה רוצה", "התפתחויות מאוחרות עשויות לדרוש"),
            _r(r"ההיסטוריה בחרה", "אירועי העבר הובילו"),
            _r(r"ההיסטוריה תשפוט", "משקיפים מאוחרים יעריכו"),
            _r(r"ההיסטוריה בצד שלנו", "מגמות העבר תמכו בעמדה הזו"),
        ],
    },

    # --- Moral bookkeeping ---

    JUST_WORLD: {
        LATIN: [
            _r(r"\b(?:you|we|they|people|everyone)\s+gets?\s+what\s+(?:you|we|they)\s+deserve\b",
               "outcomes do not track moral desert"),
            _r(r"\b(?:good|bad)\s+things\s+happen\s+to\s+(?:good|bad)\s+people\b",
               "outcomes vary regardless of character"),
            _r(r"\b(?:I|he|she|they|you|we)\s+(?:deserved|deserves|deserve)\s+(?:it|this|that|what\s+happened)\b",
               "this outcome had specific causes"),
            _r(r"\b(?:he|she|they|you)\s+had\s+it\s+coming\b", "the outcome had identifiable causes"),
            _r(r"\bmust\s+have\s+done\s+something\s+to\s+deserve\b",
               "may have been affected by factors that led to"),
        ],
        HEBREW: [
            _r(r"כל אחד מקבל את מה שמגיע לו", "התוצאות אינן תלויות במה שמגיע"),
            _r(r"מגיע (?:לי|לו|לה|להם|לך)", "לתוצאה הזו היו סיבות"),
            _r(r"קיבלו את מה שמגיע להם", "לתוצאה היו סיבות מזוהות"),
        ],
    },

    KARMA: {
        LATIN: [
            _r(r"\bwhat\s+goes\s+around\s+comes\s+around\b",
               "actions can have consequences, but not reliably"),
            _r(r"\bkarma\s+(?:will\s+)?(?:get|gets|catch(?:es)?\s+up\s+with|punish(?:es)?|come\s+for)\b",
               "consequences may or may not reach"),
            _r(r"\b(?:it['’]s|it\s+is|that['’]s|that\s+is)\s+(?:just\s+)?(?:bad\s+|good\s+)?karma\b",
               "that outcome has ordinary causes"),
            _r(r"\binstant\s+karma\b", "a quick consequence"),
            _r(r"\bthe\s+universe\s+will\s+(?:pay\s+(?:\w+\s+)?back|balance\s+(?:it|things)\s+out)\b",
               "there is no guarantee of balancing"),
        ],
        HEBREW: [
            _r(r"מה שהולך חוזר", "לפעולות יש לפעמים השלכות"),
            _r(r"קארמה", "צירוף נסיבות"),
            _r(r"היקום יחזיר ל", "אין ערובה לאיזון כלפי"),
        ],
    },

    # --- Hidden agents ---

    CONSPIRACY: {
        LATIN: [
            _neg(r"\b(?:they|the\s+elites?|the\s+government|the\s+media|the\s+powers\s+that\s+be|big\s+pharma)\s+"
                 r"(?:don['’]t|do\s+not|doesn['’]t|does\s+not|didn['’]t|did\s+not|never)\s+want\s+(?:you|us|people|anyone|everyone)\s+to\s+"
                 r"(?:know|see|find\s+out|learn)(?:\s+about)?\b",
                 "few sources discuss"),
            _r(r"\b(?:they|the\s+elites?|the\s+government|the\s+media|the\s+powers\s+that\s+be|big\s+pharma)\s+"
               r"(?:(?!(?:not|never|no)\b)\w+\s+){0,2}?want\s+(?:you|us|people|everyone)\s+to\s+(?:believe|think|know|see)(?:\s+that)?\b",
               "some sources promote the idea that"),
            _r(r"\beverything\s+is\s+(?:orchestrated|controlled|planned|staged)\b",
               "many events have independent causes"),
            _r(r"\b(?:it['’]s|it\s+is|it\s+was|this\s+is|this\s+was)\s+(?:all\s+)?(?:orchestrated|staged)\s+by\b",
               "this was influenced by"),
            _r(r"\b(?:they|the\s+elites?)\s+are\s+(?:hiding|covering\s+up)\b",
               "there is limited public information about"),
            _r(r"\bthe\s+(?:deep\s+state|cabal|shadow\s+government)\b", "unspecified officials"),
        ],
        HEBREW: [
            _neg(r"הם לא רוצים שתדע(?:ו)?", "מעט מקורות עוסקים ב"),
            _r(r"הם רוצים שתאמינ(?:ו)?", "יש מקורות שמקדמים את הרעיון"),
            _r(r"הכל מתוכנן מראש", "לאירועים רבים יש סיבות נפרדות"),
            _r(r"הם מסתירים", "יש מעט מידע ציבורי על"),
            _r(r"המדינה העמוקה", "גורמים לא מזוהים"),
        ],
    },

    AGENT_DETECTION: {
        LATIN: [
            _r(r"\b(?:it|this|that)(?:['’]s|\s+is|\s+was)\s+no\s+coincidence\b",
               "this co-occurrence may have ordinary causes"),
            _r(r"\b(?:it|this|that)\s+(?:can['’]t|cannot|couldn['’]t|could\s+not)\s+be\s+a\s+coincidence\b",
               "this co-occurrence may have ordinary causes"),
            _r(r"\bthere\s+are\s+no\s+coincidences\b", "coincidences are common"),
            _r(r"\bsomeone\s+(?:is|was)\s+doing\s+(?:this|it)(?:\s+to\s+(?:me|us|you))?\b",
               "this has causes that are not yet identified"),
            _r(r"\bsomeone\s+(?:is|was)\s+behind\s+(?:this|it)\b", "the causes are not yet identified"),
            _r(r"\bsomething\s+(?:is|was)\s+(?:trying|wanting)\s+to\b", "conditions are tending to"),
            _r(r"\bsomeone\s+up\s+there\b", "chance"),
        ],
        HEBREW: [
            _r(r"זה לא צירוף מקרים", "לצירוף הזה עשויות להיות סיבות רגילות"),
            _r(r"אין צירופי מקרים", "צירופי מקרים נפוצים"),
            _r(r"מישהו עושה לי את זה", "יש לכך סיבות שעדיין לא זוהו"),
            _r(r"מישהו מלמעלה", "המקרה"),
        ],
    },

    # --- Plot and essence ---

    NARRATIVE_FALLACY: {
        LATIN: [
            _r(r"\b(?:everything|it\s+all|all\s+of\s+(?:it|this))\s+(?:was|has\s+been)\s+(?:leading|building)\s+(?:up\s+)?to\b",
               "a series of events preceded"),
            _r(r"\bevery\s+(?:step|event|setback|failure)\s+(?:led|was\s+leading)\s+(?:me|us|him|her|them)\s+(?:here|to\s+this)\b",
               "earlier events preceded this"),
            _r(r"\bit\s+all\s+(?:makes|made)\s+sense\s+now\b", "a pattern is easy to see in retrospect"),
            _r(r"\bthe\s+(?:whole|entire)\s+(?:story|journey)\s+was\s+(?:about|meant\s+to)\b",
               "the sequence of events included"),
        ],
        HEBREW: [
            _r(r"הכל הוביל לרגע הזה", "סדרת אירועים קדמה לרגע הזה"),
            _r(r"עכשיו הכל מתחבר", "בדיעבד קל לזהות דפוס"),
            _r(r"כל צעד הוביל אותי לכאן", "אירועים קודמים קדמו לכך"),
        ],
    },

    ESSENTIALISM: {
        LATIN: [
            _r(r"\bit(?:['’]s|\s+is)\s+in\s+(?:their|his|her|our|your|my)\s+(?:nature|blood|DNA)\b",
               "it reflects learned and situational factors"),
            _r(r"\b(?:was|were|is|are)\s+(?:born|made)\s+to\s+be\b", "developed into"),
            _r(r"\b(?:women|men|girls|boys|people\s+like\s+(?:them|that))\s+are\s+(?:naturally|inherently|by\s+nature)\b",
               "some people are, on average,"),
            _r(r"\b(?:is|are)\s+(?:naturally|inherently)\s+(?:meant|designed|built)\s+(?:to|for)\b",
               "have been shaped to"),
            _r(r"\bit(?:['’]s|\s+is)\s+(?:just\s+)?(?:who|what)\s+(?:they|he|she)\s+(?:are|is)\b",
               "it reflects their circumstances"),
        ],
        HEBREW: [
            _r(r"זה בטבע של(?:הם|ו|ה)", "זה משקף גורמים נלמדים ומצביים"),
            _r(r"זה בדם של(?:הם|ו|ה)", "זה משקף גורמים נלמדים ומצביים"),
            _r(r"נולד(?:ה)? להיות", "התפתח להיות"),
        ],
    },

    VICTIM_NARRATIVE: {
        LATIN: [
            _r(r"\b(?:the\s+(?:world|universe)|everyone|everybody|life)\s+(?:is|are)\s+(?:against|out\s+to\s+get)\s+(me|us)\b",
               r"several difficult events have affected \1"),
            _r(r"\b(?:the\s+(?:world|universe)|life|fate)\s+hates\s+(me|us)\b",
               r"recent outcomes have been hard on \1"),
            _r(r"\beverything\s+is\s+conspiring\s+against\s+(me|us)\b",
               r"several setbacks have affected \1"),
            _r(r"\bwhy\s+does\s+this\s+always\s+happen\s+to\s+(me|us)\b",
               r"this has happened to \1 more than once"),
            _r(r"\b(?:I['’]m|I\s+am|we['’]re|we\s+are)\s+(?:cursed|jinxed)\b",
               "this has been a difficult stretch"),
            _r(r"\blife\s+is\s+punishing\s+(me|us)\b", r"circumstances have been hard on \1"),
        ],
        HEBREW: [
            _r(r"כולם נגדי", "כמה אירועים קשים השפיעו עליי"),
            _r(r"העולם נגדי", "כמה אירועים קשים השפיעו עליי"),
            _r(r"היקום שונא אותי", "התוצאות האחרונות היו קשות עבורי"),
            _r(r"למה זה תמיד קורה לי", "זה קרה לי יותר מפעם אחת"),
            _r(r"אני מקולל(?:ת)?", "זו תקופה קשה"),
        ],
    },

    # --- Body, devices, landscape ---

    BODY_TELEOLOGY: {
        LATIN: [
            _r(r"\b(your|my|the|our)\s+body\s+is\s+(?:trying\s+to\s+)?(?:tell|telling|warn|warning)\s+(you|me|us)\b",
               r"\1 body is producing signals relevant to \2"),
            _r(r"\b(your|my|the|our)\s+body\s+(?:knows|wants)\b", r"\1 body's physiology tends toward"),
            _r(r"\b(?:the|your|my|our)\s+(?:gut|brain|immune\s+system)\s+(?:wants|knows|decides|decided)\b",
               "physiological responses suggest"),
            _r(r"\b(?:the|our|your)\s+(?:body|eyes?|hands?|heart)\s+(?:is|was|are|were)\s+(?:designed|made|built)\s+(?:to|for)\b",
               "the structure evolved in ways that support"),
        ],
        HEBREW: [
            _r(r"הגוף מנסה להגיד לך", "הגוף מפיק אותות שרלוונטיים לך"),
            _r(r"הגוף יודע", "התגובות הפיזיולוגיות מצביעות"),
            _r(r"הגוף רוצה", "הפיזיולוגיה נוטה"),
        ],
    },

    TECH_ANIMISM: {
        LATIN: [
            _neg(r"\b(my|the|this)\s+(phone|computer|laptop|car|printer|app|router|device)\s+"
                 r"(?:doesn['’]t|does\s+not)\s+want\s+to\b",
                 r"\1 \2 is failing to"),
            _r(r"\b(my|the|this)\s+(phone|computer|laptop|car|printer|app|router|device)\s+"
               r"(?:(?!(?:not|never|no)\b)\w+\s+){0,2}?wants?\s+to\b",
               r"\1 \2 is set to"),
            _r(r"\b(my|the|this)\s+(phone|computer|laptop|car|printer|app|router|device)\s+"
               r"(?:hates|is\s+angry\s+with|is\s+mad\s+at)\s+(me|us|you)\b",
               r"\1 \2 is malfunctioning for \3"),
            _r(r"\b(my|the|this)\s+(phone|computer|laptop|car|printer|app|router|device)\s+refuses\s+to\b",
               r"\1 \2 fails to"),
            _r(r"\b(my|the|this)\s+(phone|computer|laptop|car|printer|app|router|device)\s+(?:decided|chose)\s+to\b",
               r"\1 \2 happened to"),
        ],
        HEBREW: [
            _r(r"הטלפון שלי שונא אותי", "הטלפון שלי לא מתפקד כראוי"),
            _r(r"המחשב לא רוצה", "המחשב לא מצליח"),
            _r(r"המחשב מסרב", "המחשב נכשל"),
            _r(r"המדפסת שונאת אותי", "המדפסת לא מתפקדת כראוי"),
        ],
    },

    PATHETIC_FALLACY: {
        LATIN: [
            _r(r"\bthe\s+(sky|clouds|heavens)\s+(is|are|was|were)\s+(?:weeping|crying|mourning|grieving)\b",
               r"the \1 \2 releasing rain"),
            _r(r"\bthe\s+(?:angry|furious|cruel|merciless)\s+(sea|ocean|storm|wind|waves|river)\b",
               r"the rough \1"),
            _r(r"\bthe\s+(sea|ocean|storm|wind|river)\s+(?:was|is)\s+(?:angry|furious|cruel)\b",
               r"the \1 was rough"),
            _r(r"\bthe\s+(sun|moon|sky)\s+(?:smiled|smiles|is\s+smiling)\b", r"the \1 shone"),
            _r(r"\bthe\s+(wind|trees|leaves)\s+(?:whispered|whispers|sighed|sighs)\b", r"the \1 rustled"),
        ],
        HEBREW: [
            _r(r"השמיים בוכים", "יורד גשם"),
            _r(r"הים הזועם", "הים הסוער"),
            _r(r"השמש חייכה", "השמש זרחה"),
            _r(r"הרוח לחשה", "הרוח נשבה"),
        ],
    },

    # --- Reading meaning into events ---

    HINDSIGHT_BIAS: {
        LATIN: [
            _r(r"\b(?:I|we|they|he|she)\s+knew\s+it\s+all\s+along\b", "it seems predictable in retrospect"),
            _r(r"\b(?:anyone|everyone)\s+could\s+have\s+(?:seen|predicted)\s+(?:this|it|that)\s+coming\b",
               "this seems predictable in retrospect"),
            _r(r"\bit\s+was\s+(?:so\s+)?obvious\s+(?:that\s+)?(?:this|it)\s+would\b",
               "in retrospect it seems likely that this would"),
            _r(r"\bthe\s+signs\s+were\s+(?:all\s+)?there\b", "some indicators are clearer in retrospect"),
            _r(r"\bin\s+hindsight,?\s+it\s+was\s+(?:obvious|clear)\b", "in retrospect it appears clearer"),
        ],
        HEBREW: [
            _r(r"ידעתי את זה מההתחלה", "בדיעבד זה נראה צפוי"),
            _r(r"היה ברור שזה יקרה", "בדיעבד נראה שזה היה סביר"),
        ],
    },

    MAGICAL_THINKING: {
        LATIN: [
            _r(r"\bthe\s+law\s+of\s+attraction\b", "the belief that thoughts alter events"),
            _r(r"\b(?:I|you|we)\s+attracted\s+(?:this|it|that)\b", "this outcome had external causes"),
            _r(r"\b(?:thoughts|positive\s+thinking|my\s+thoughts|your\s+thoughts)\s+(?:create|creates|created|shape|shapes)\s+"
               r"(?:reality|(?:the\s+)?outcomes?)\b",
               "attitudes can influence behavior, not events directly"),
            _r(r"\bif\s+(?:I|you|we)\s+(?:wish|believe|want\s+it)\s+hard\s+enough\b", "with sustained effort"),
            _r(r"\bmanifest(?:ed|ing)?\s+(?:it|this|that|abundance|success|wealth|love|your\s+dreams|my\s+dreams)\b",
               "worked toward it"),
            _r(r"\bjinx(?:ed)?\s+(?:it|this)\b", "mentioned it"),
        ],
        HEBREW: [
            _r(r"חוק המשיכה", "האמונה שמחשבות משנות אירועים"),
            _r(r"המחשבות יוצרות מציאות", "גישה יכולה להשפיע על התנהגות, לא על אירועים ישירות"),
            _r(r"משכתי את זה אליי", "לתוצאה היו סיבות חיצוניות"),
        ],
    },

    SIGNS_OMENS: {
        LATIN: [
            _r(r"\ba\s+sign\s+from\s+(?:the\s+universe|above|god|heaven|the\s+gods)\b", "a coincidence"),
            _r(r"\b(?:the\s+universe|life|god)\s+is\s+sending\s+(?:me|you|us)\s+(?:a\s+)?(?:signs?|messages?)\b",
               "I am noticing coincidences"),
            _r(r"\b(?:it['’]s|it\s+is|this\s+is|that['’]s|that\s+is|it\s+was|this\s+was)\s+(?:a|another)\s+sign\b(?!\s+(?:of|from))",
               "this could be read as suggesting"),
            _r(r"\b(?:a|an)\s+(?:bad\s+|good\s+|ill\s+)?omen\b", "a coincidence"),
            _r(r"\bthe\s+stars\s+(?:aligned|are\s+aligned|align)\b", "conditions were favorable"),
        ],
        HEBREW: [
            _r(r"סימן מהיקום", "צירוף מקרים"),
            _r(r"סימן משמיים", "צירוף מקרים"),
            _r(r"אות משמיים", "צירוף מקרים"),
            _r(r"זה סימן", "אפשר לפרש את זה כ"),
        ],
    },

    PURPOSE_QUESTION: {
        LATIN: [
            _r(r"\bwhy\s+(?:did|does|would)\s+(?:this|that|it)\s+happen\s+to\s+(me|us|him|her|them)\b",
               r"what caused this to happen to \1"),
            _r(r"\bwhat\s+is\s+the\s+(?:universe|world|life|god)\s+trying\s+to\s+(?:tell|teach|show)\s+(?:me|us|you)\b",
               "what can be learned from this"),
            _r(r"\bwhat\s+(?:lesson|message)\s+(?:am|are|is)\s+(?:I|we|you|he|she)\s+(?:supposed|meant)\s+to\s+learn\b",
               "what can be learned"),
            _r(r"\bwhat\s+is\s+the\s+(?:purpose|point|reason)\s+(?:of|behind)\s+(?:my|this|our|his|her)\s+"
               r"(?:suffering|pain|illness|loss)\b",
               "what caused this difficulty"),
            _r(r"\bwhat\s+(?:does|did)\s+it\s+all\s+mean\b", "what happened and why"),
        ],
        HEBREW: [
            _r(r"למה זה קרה לי", "מה גרם לזה לקרות לי"),
            _r(r"מה היקום מנסה להגיד לי", "מה אפשר ללמוד מזה"),
            _r(r"מה המטרה של הסבל", "מה גרם לקושי"),
        ],
    },

    EMOTION_PERSONIFICATION: {
        LATIN: [
            _r(r"\b(my|your|his|her|our)\s+(anxiety|fear|anger|depression|sadness|grief|guilt|shame|jealousy)\s+wants\b",
               r"\1 \2 inclines"),
            _r(r"\b(my|your|his|her|our)\s+(anxiety|fear|anger|depression|sadness|grief|guilt|shame|jealousy)\s+"
               r"(?:is\s+trying|tries)\s+to\b",
               r"\1 \2 tends to"),
            _r(r"\b(my|your|his|her|our)\s+(anxiety|fear|anger|depression|sadness|grief|guilt|shame|jealousy)\s+"
               r"(?:is\s+telling|tells|told|lies\s+to|is\s+lying\s+to)\s+(me|you|him|her|us)\b",
               r"\1 \2 produces thoughts in \3"),
            _r(r"\b(fear|anger|rage|grief|jealousy|panic)\s+took\s+over\b", r"\1 became intense"),
        ],
        HEBREW: [
            _r(r"החרדה שלי רוצה", "החרדה שלי גורמת לי לנטות"),
            _r(r"הפחד אומר לי", "הפחד מעורר בי מחשבות"),
            _r(r"הכעס השתלט", "הכעס התעצם"),
        ],
    },

    TIME_TELEOLOGY: {
        LATIN: [
            _r(r"\btime\s+heals\s+(?:all\s+)?(?:wounds|everything)\b", "distress often lessens over time"),
            _r(r"\btime\s+will\s+(?:tell|show|reveal)\b", "later evidence will clarify"),
            _r(r"\btime\s+is\s+on\s+(?:my|our|your|their|his|her)\s+side\b", "waiting may be advantageous"),
            _r(r"\b(?:when|once)\s+the\s+time\s+is\s+right\b", "when conditions allow"),
            _r(r"\beverything\s+(?:comes|happens)\s+in\s+(?:its\s+own|due|good)\s+time\b",
               "things take varying amounts of time"),
        ],
        HEBREW: [
            _r(r"הזמן ירפא", "המצוקה נוטה לפחות עם הזמן"),
            _r(r"הזמן יגיד", "ראיות מאוחרות יבהירו"),
            _r(r"כשיגיע הזמן הנכון", "כשהתנאים יאפשרו"),
        ],
    },
}


# ============================================================
# THE CATALOG
# ============================================================

class PatternCatalog:
    """
    Compiled, read-only view over the rule table.

    Instantiated once as a module singleton. Trigger and substitution
    rules are tuples; the per-category substitution index and the
    severity lookup are read-only mappings.
    """

    def __init__(
        self,
        source: Mapping[str, Mapping[str, list[tuple[str, str, bool]]]] = CATALOG_SOURCE,
        severity: Mapping[str, str] = CATEGORY_SEVERITY,
        version: str = CATALOG_VERSION,
    ):
        self.version = version
        self._severity = MappingProxyType(dict(severity))

        triggers: list[TriggerRule] = []
        substitutions: dict[str, tuple[SubstitutionRule, ...]] = {}

        for category, by_language in source.items():
            if self._severity.get(category) not in SEVERITY_ORDER:
                raise ValueError(f"Category {category!r} has no valid severity tier")

            category_subs: list[SubstitutionRule] = []
            for language in LANGUAGES:
                # Stable sort: negated forms first, otherwise table order
                entries = sorted(by_language.get(language, []), key=lambda e: not e[2])
                for pattern, replacement, negated in entries:
                    compiled = re.compile(pattern, _LANGUAGE_FLAGS[language])
                    triggers.append(TriggerRule(category, language, compiled, negated))
                    category_subs.append(SubstitutionRule(compiled, replacement, language))
            substitutions[category] = tuple(category_subs)

        self._triggers = tuple(triggers)
        self._substitutions = MappingProxyType(substitutions)

    @property
    def triggers(self) -> tuple[TriggerRule, ...]:
        return self._triggers

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._substitutions)

    def severity_of(self, category: str) -> str:
        return self._severity.get(category, SEVERITY_NONE)

    def substitutions_for(self, category: str) -> tuple[SubstitutionRule, ...]:
        return self._substitutions.get(category, ())

    def all_substitutions(self) -> tuple[SubstitutionRule, ...]:
        """Every substitution rule in catalog order (the global cascade)."""
        return tuple(rule for rules in self._substitutions.values() for rule in rules)

    def describe(self) -> list[dict]:
        """
        Return one entry per category.

        Used by the GET /catalog endpoint to expose the detection surface.
        """
        counts: dict[str, dict[str, int]] = {
            c: {lang: 0 for lang in LANGUAGES} for c in self.categories
        }
        for rule in self._triggers:
            counts[rule.category][rule.language] += 1

        return [
            {
                "category": category,
                "severity": self.severity_of(category),
                "description": CATEGORY_DESCRIPTIONS.get(category, ""),
                "rule_counts": counts[category],
            }
            for category in self.categories
        ]


# ============================================================
# SINGLETON: compiled once, never mutated
# ============================================================

catalog = PatternCatalog()
