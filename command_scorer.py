"""Relevance scoring of a single command against a query and text context."""

from __future__ import annotations

from models import ActionKind, Command, CommandCategory, TextContext

EXACT_MATCH_SCORE = 100
PREFIX_MATCH_SCORE = 50
PARTIAL_MATCH_SCORE = 20

CONTEXT_MATCH_BOOST = 50
CONTEXT_CONFLICT_PENALTY = 20
SINGLE_WORD_BOOST = 40
UNIVERSAL_BOOST = 10

_WIDGET_CATEGORIES = {
    "currency": CommandCategory.CURRENCY,
    "unit_converter": CommandCategory.UNIT,
    "time_converter": CommandCategory.TIME,
    "definition": CommandCategory.DEFINITION,
    "translator": CommandCategory.TRANSLATION,
    "text_analyser": CommandCategory.TEXT_ANALYSIS,
}

_ACTION_CATEGORIES = {
    ActionKind.CONVERT_CURRENCY: CommandCategory.CURRENCY,
    ActionKind.CONVERT_UNIT: CommandCategory.UNIT,
    ActionKind.CONVERT_TIME: CommandCategory.TIME,
    ActionKind.DEFINITION: CommandCategory.DEFINITION,
    ActionKind.TRANSLATE: CommandCategory.TRANSLATION,
    ActionKind.ANALYZE_TEXT: CommandCategory.TEXT_ANALYSIS,
}

# Substrings searched in the label and keywords of uncategorised commands.
_FALLBACK_TERMS = {
    CommandCategory.CURRENCY: ("currency",),
    CommandCategory.UNIT: ("unit",),
    CommandCategory.TIME: ("time",),
    CommandCategory.DEFINITION: ("define", "definition", "dictionary"),
    CommandCategory.TRANSLATION: ("translat",),
    CommandCategory.TEXT_ANALYSIS: ("analys", "analyz"),
}


def explicit_category(command: Command) -> CommandCategory | None:
    """Category from the command's own tags, or None when it has none."""
    if command.category is not None:
        return command.category
    if command.widget_type is not None:
        return _WIDGET_CATEGORIES.get(command.widget_type)
    action_type = command.action_type
    if action_type is not None:
        return _ACTION_CATEGORIES.get(action_type.kind)
    return None


def in_category(command: Command, category: CommandCategory) -> bool:
    """Resolve membership: explicit tag first, then a label/keyword substring."""
    tagged = explicit_category(command)
    if tagged is not None:
        return tagged == category

    terms = _FALLBACK_TERMS.get(category, ())
    haystack = [command.label.lower()] + [k.lower() for k in command.keywords]
    return any(term in text for term in terms for text in haystack)


def is_universal(command: Command) -> bool:
    return in_category(command, CommandCategory.TRANSLATION) or in_category(
        command, CommandCategory.TEXT_ANALYSIS
    )


def base_score(command: Command, query: str) -> int:
    """Lexical tier of the query against the label/description; 0 excludes."""
    needle = query.lower().strip()
    label = command.label.lower()
    description = (command.description or "").lower()

    if label == needle:
        return EXACT_MATCH_SCORE
    if label.startswith(needle):
        return PREFIX_MATCH_SCORE
    if needle in label or needle in description:
        return PARTIAL_MATCH_SCORE
    return 0


def context_boost(command: Command, context: TextContext) -> int:
    if not context.is_valid:
        return 0

    boost = 0
    is_currency = in_category(command, CommandCategory.CURRENCY)
    is_unit = in_category(command, CommandCategory.UNIT)

    if context.is_currency:
        if is_currency:
            boost += CONTEXT_MATCH_BOOST
        if is_unit:
            boost -= CONTEXT_CONFLICT_PENALTY

    if context.is_unit:
        if is_unit:
            boost += CONTEXT_MATCH_BOOST
        if is_currency:
            boost -= CONTEXT_CONFLICT_PENALTY

    if context.is_time and in_category(command, CommandCategory.TIME):
        boost += CONTEXT_MATCH_BOOST

    if context.is_single_word and in_category(command, CommandCategory.DEFINITION):
        boost += SINGLE_WORD_BOOST

    if is_universal(command):
        boost += UNIVERSAL_BOOST

    return boost


def score_command(command: Command, query: str, context: TextContext) -> int:
    """Base tier plus context boosts; boosts never apply to a non-match."""
    score = base_score(command, query)
    if score == 0:
        return 0
    return score + context_boost(command, context)
