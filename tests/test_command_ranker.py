from __future__ import annotations

from command_ranker import (
    SUGGESTED_LIMIT,
    build_sections,
    clipboard_shortcut_index,
    rank_commands,
    score_commands,
)
from models import ActionKind, ActionType, ActionVariant, ClipboardEntry, Command, WidgetVariant


def _action(command_id: str, label: str, kind: ActionKind, target: str = "") -> Command:
    return Command(command_id, label, ActionVariant(ActionType(kind, target)))


def _widget(command_id: str, label: str, widget_type: str) -> Command:
    return Command(command_id, label, WidgetVariant(widget_type))


def _entry(n: int) -> ClipboardEntry:
    return ClipboardEntry(id=f"clip-{n}", content=f"content {n}", preview=f"content {n}", timestamp=n)


CONVERT_USD = _action("convert_usd", "Convert to USD", ActionKind.CONVERT_CURRENCY, "USD")
CONVERT_KG = _action("convert_to_kg", "Convert to Kilograms", ActionKind.CONVERT_UNIT, "kg")
CONVERT_FT = _action("convert_to_ft", "Convert to Feet", ActionKind.CONVERT_UNIT, "ft")
TRANSLATE = _action("translate_de", "Translate to German", ActionKind.TRANSLATE, "de")
CURRENCY_WIDGET = _widget("widget_currency", "Currency Converter", "currency")

CATALOG = [CONVERT_KG, CONVERT_USD, CONVERT_FT, TRANSLATE, CURRENCY_WIDGET]


def test_empty_query_returns_catalog_unchanged() -> None:
    assert rank_commands(CATALOG, "", "100 USD") == CATALOG
    assert rank_commands(CATALOG, "   ", "100 USD") == CATALOG


def test_empty_query_returns_a_copy() -> None:
    ranked = rank_commands(CATALOG, "", "")
    ranked.pop()

    assert len(CATALOG) == 5


def test_query_without_matches_returns_nothing() -> None:
    assert rank_commands(CATALOG, "zzz", "100 USD") == []


def test_currency_context_puts_currency_first() -> None:
    ranked = rank_commands(CATALOG, "convert", "100 USD")

    assert ranked[0] == CONVERT_USD
    assert ranked.index(CURRENCY_WIDGET) < ranked.index(CONVERT_KG)


def test_unit_context_puts_units_before_currency() -> None:
    ranked = rank_commands(CATALOG, "convert", "5kg")

    assert ranked[:2] == [CONVERT_KG, CONVERT_FT]
    assert ranked.index(CONVERT_USD) > ranked.index(CONVERT_FT)


def test_equal_scores_keep_catalog_order() -> None:
    ranked = rank_commands([CONVERT_FT, CONVERT_KG], "convert", "")

    assert ranked == [CONVERT_FT, CONVERT_KG]


def test_score_commands_reports_context_adjusted_scores() -> None:
    scored = score_commands(CATALOG, "convert", "100 USD")
    by_id = {item.command.id: item.score for item in scored}

    assert by_id["convert_usd"] == 100
    assert by_id["convert_to_kg"] == 30
    assert "translate_de" not in by_id


def test_sections_split_widgets_and_actions() -> None:
    sections = build_sections(CATALOG, "conv")

    assert sections.widgets == [CURRENCY_WIDGET]
    assert sections.suggested == [CONVERT_KG, CONVERT_USD, CONVERT_FT, TRANSLATE][:SUGGESTED_LIMIT]
    assert sections.actions == []
    assert sections.clipboard == []


def test_suggested_takes_first_four_actions() -> None:
    extra = _action("count_words", "Count Words", ActionKind.ANALYZE_TEXT, "words")
    sections = build_sections(CATALOG + [extra], "")

    assert [c.id for c in sections.suggested] == ["convert_to_kg", "convert_usd", "convert_to_ft", "translate_de"]
    assert sections.actions == [extra]


def test_clipboard_section_only_when_query_empty() -> None:
    history = [_entry(n) for n in range(7)]

    assert len(build_sections(CATALOG, "", history).clipboard) == 5
    assert build_sections(CATALOG, "  ", history).clipboard == []
    assert build_sections(CATALOG, "x", history).clipboard == []


def test_empty_sections() -> None:
    assert build_sections([], "zzz").is_empty() is True


def test_clipboard_shortcut_index() -> None:
    history = [_entry(n) for n in range(3)]

    assert clipboard_shortcut_index("1", "", history) == 0
    assert clipboard_shortcut_index("3", "", history) == 2
    assert clipboard_shortcut_index("4", "", history) is None
    assert clipboard_shortcut_index("0", "", history) is None
    assert clipboard_shortcut_index("6", "", [_entry(n) for n in range(7)]) is None
    assert clipboard_shortcut_index("2", "a", history) is None
    assert clipboard_shortcut_index("2", " ", history) is None
    assert clipboard_shortcut_index("a", "", history) is None
    assert clipboard_shortcut_index("²", "", history) is None
