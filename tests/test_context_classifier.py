from __future__ import annotations

import pytest

from context_classifier import classify
from models import TextContext


def test_empty_text_is_not_valid() -> None:
    assert classify("") == TextContext()
    assert classify("   \n\t") == TextContext()
    assert classify("   ").is_valid is False


def test_currency_code_amount() -> None:
    ctx = classify("100 USD")

    assert ctx.is_valid is True
    assert ctx.is_currency is True
    assert ctx.is_unit is False
    assert ctx.has_numbers is True
    assert ctx.is_single_word is False


def test_token_with_digits_is_not_single_word() -> None:
    ctx = classify("v2")

    assert ctx.has_numbers is True
    assert ctx.is_single_word is False


@pytest.mark.parametrize("text", ["$5", "$ 5", "5€", "£20", "¥ 300", "20 eur", "7gbp"])
def test_currency_forms(text: str) -> None:
    assert classify(text).is_currency is True


def test_unit_quantity_is_not_single_word() -> None:
    ctx = classify("5kg")

    assert ctx.is_unit is True
    assert ctx.is_currency is False
    assert ctx.has_numbers is True
    assert ctx.is_single_word is False


@pytest.mark.parametrize("text", ["12 miles", "3 ft", "250 g", "1.5 km"])
def test_unit_forms(text: str) -> None:
    assert classify(text).is_unit is True


def test_words_containing_unit_or_code_letters_do_not_match() -> None:
    assert classify("background").is_unit is False
    assert classify("musd").is_currency is False
    assert classify("10 musd").is_currency is False
    assert classify("5 background").is_unit is False


@pytest.mark.parametrize("text", ["14:30", "4pm", "4 PM", "10:15am", "noon UTC", "call me now"])
def test_time_forms(text: str) -> None:
    assert classify(text).is_time is True


def test_plain_word_is_single_word() -> None:
    ctx = classify("  serendipity  ")

    assert ctx.is_single_word is True
    assert ctx.has_numbers is False
    assert ctx.is_currency is False
    assert ctx.is_unit is False
    assert ctx.is_time is False


def test_flags_are_independent() -> None:
    ctx = classify("$5 at 4pm")

    assert ctx.is_currency is True
    assert ctx.is_time is True
    assert ctx.is_single_word is False
