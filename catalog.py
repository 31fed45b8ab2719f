"""Built-in command catalog ordered by usage history."""

from __future__ import annotations

import math
import threading
import time
from typing import Callable, Optional

from models import ActionKind, ActionType, ActionVariant, Command, CommandCategory, WidgetVariant

MAX_COUNT_SCORE = 100.0
RECENCY_SCORE = 50.0
RECENCY_DECAY_DAYS = 30.0

_LANGUAGES = [
    ("en", "English"), ("zh", "Chinese"), ("es", "Spanish"), ("fr", "French"),
    ("de", "German"), ("ar", "Arabic"), ("pt", "Portuguese"), ("ru", "Russian"),
    ("ja", "Japanese"), ("hi", "Hindi"), ("it", "Italian"), ("nl", "Dutch"),
    ("pl", "Polish"), ("tr", "Turkish"), ("hy", "Armenian"), ("fa", "Persian"),
    ("vi", "Vietnamese"), ("id", "Indonesian"), ("ko", "Korean"), ("bn", "Bengali"),
    ("ur", "Urdu"), ("th", "Thai"), ("sv", "Swedish"), ("da", "Danish"),
    ("fi", "Finnish"), ("hu", "Hungarian"),
]

_CURRENCIES = [
    ("USD", "US Dollar", ("dollar", "dollars", "$")),
    ("EUR", "Euro", ("euro", "euros", "€")),
    ("GBP", "British Pound", ("pound", "pounds", "£")),
    ("JPY", "Japanese Yen", ("yen", "¥")),
    ("AUD", "Australian Dollar", ("australian dollar",)),
    ("CAD", "Canadian Dollar", ("canadian dollar",)),
    ("CHF", "Swiss Franc", ("franc", "francs")),
    ("CNY", "Chinese Yuan", ("yuan",)),
    ("INR", "Indian Rupee", ("rupee", "rupees")),
    ("MXN", "Mexican Peso", ("peso", "pesos")),
]

_UNITS = [
    ("mm", "Millimeters", ("millimeter", "millimetre")),
    ("cm", "Centimeters", ("centimeter", "centimetre")),
    ("m", "Meters", ("meter", "metre")),
    ("km", "Kilometers", ("kilometer", "kilometre")),
    ("in", "Inches", ("inch",)),
    ("ft", "Feet", ("foot",)),
    ("yd", "Yards", ("yard",)),
    ("mi", "Miles", ("mile",)),
    ("g", "Grams", ("gram",)),
    ("kg", "Kilograms", ("kilogram", "kilo")),
    ("oz", "Ounces", ("ounce",)),
    ("lb", "Pounds", ("lbs", "pound")),
    ("ml", "Milliliters", ("milliliter", "millilitre")),
    ("l", "Liters", ("liter", "litre")),
    ("gal", "Gallons", ("gallon",)),
    ("c", "Celsius", ("°c",)),
    ("f", "Fahrenheit", ("°f",)),
    ("kmh", "Kilometers per Hour", ("km/h", "kph")),
    ("mph", "Miles per Hour", ("m/h",)),
]

_TIMEZONES = [
    ("UTC", "UTC"),
    ("America/New_York", "New York"),
    ("Europe/London", "London"),
    ("Asia/Tokyo", "Tokyo"),
]


def _widget(widget_type: str, label: str, description: str, keywords: tuple[str, ...],
            category: Optional[CommandCategory]) -> Command:
    return Command(
        id=f"widget_{widget_type}",
        label=label,
        description=description,
        keywords=keywords,
        category=category,
        variant=WidgetVariant(widget_type),
    )


def _action(command_id: str, label: str, kind: ActionKind, target: str,
            keywords: tuple[str, ...], category: CommandCategory,
            description: Optional[str] = None) -> Command:
    return Command(
        id=command_id,
        label=label,
        description=description,
        keywords=keywords,
        category=category,
        variant=ActionVariant(ActionType(kind, target)),
    )


def default_commands() -> list[Command]:
    """Every widget and action the palette offers, widgets first."""
    commands = [
        _widget("translator", "Translator", "Translate text between languages",
                ("translate", "translation", "language"), CommandCategory.TRANSLATION),
        _widget("currency", "Currency Converter", "Convert amounts with live rates",
                ("currency", "money", "exchange", "rate"), CommandCategory.CURRENCY),
        _widget("unit_converter", "Unit Converter", "Convert length, mass, volume and more",
                ("unit", "units", "convert", "measure"), CommandCategory.UNIT),
        _widget("time_converter", "Time Zone Converter", "Convert times between zones",
                ("time", "timezone", "clock"), CommandCategory.TIME),
        _widget("definition", "Definition Lookup", "Look up a word in the dictionary",
                ("define", "dictionary", "meaning"), CommandCategory.DEFINITION),
        _widget("text_analyser", "Text Analyser", "Count words, characters and reading time",
                ("analyse", "analyze", "count", "words"), CommandCategory.TEXT_ANALYSIS),
        _widget("clipboard", "Clipboard History", "Recently copied text",
                ("clipboard", "clip", "history", "paste"), CommandCategory.GENERAL),
        _widget("settings", "Settings", "Hotkey and API key preferences",
                ("settings", "config", "preferences"), CommandCategory.GENERAL),
    ]

    for code, name in _LANGUAGES:
        commands.append(_action(
            f"translate_{code}", f"Translate to {name}", ActionKind.TRANSLATE, code,
            (name.lower(), code, f"to {name.lower()}"), CommandCategory.TRANSLATION,
        ))

    for code, name, extra in _CURRENCIES:
        commands.append(_action(
            f"convert_{code.lower()}", f"Convert to {code}", ActionKind.CONVERT_CURRENCY, code,
            (code.lower(), name.lower()) + extra, CommandCategory.CURRENCY, description=name,
        ))

    for symbol, name, extra in _UNITS:
        commands.append(_action(
            f"convert_to_{symbol}", f"Convert to {name}", ActionKind.CONVERT_UNIT, symbol,
            (symbol, name.lower()) + extra, CommandCategory.UNIT,
        ))

    for zone, name in _TIMEZONES:
        commands.append(_action(
            f"time_{zone.lower().replace('/', '_')}", f"Time in {name}", ActionKind.CONVERT_TIME, zone,
            ("time", "timezone", name.lower()), CommandCategory.TIME,
        ))

    commands.extend([
        _action("define_word", "Quick Definition", ActionKind.DEFINITION, "definition",
                ("define", "meaning", "dictionary"), CommandCategory.DEFINITION),
        _action("find_synonyms", "Find Synonyms", ActionKind.DEFINITION, "synonyms",
                ("synonym", "similar"), CommandCategory.DEFINITION),
        _action("find_antonyms", "Find Antonyms", ActionKind.DEFINITION, "antonyms",
                ("antonym", "opposite"), CommandCategory.DEFINITION),
        _action("count_words", "Count Words", ActionKind.ANALYZE_TEXT, "words",
                ("words", "count"), CommandCategory.TEXT_ANALYSIS),
        _action("count_chars", "Count Characters", ActionKind.ANALYZE_TEXT, "characters",
                ("characters", "chars", "count"), CommandCategory.TEXT_ANALYSIS),
        _action("reading_time", "Reading Time", ActionKind.ANALYZE_TEXT, "reading_time",
                ("reading", "minutes"), CommandCategory.TEXT_ANALYSIS),
    ])
    return commands


class UsageMetrics:
    """Per-command use counts and last-use timestamps (epoch seconds)."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}
        self._last_used: dict[str, float] = {}

    def record(self, command_id: str) -> None:
        with self._lock:
            self._counts[command_id] = self._counts.get(command_id, 0) + 1
            self._last_used[command_id] = self._clock()

    def count(self, command_id: str) -> int:
        with self._lock:
            return self._counts.get(command_id, 0)

    def score(self, command_id: str) -> float:
        with self._lock:
            score = min(float(self._counts.get(command_id, 0)), MAX_COUNT_SCORE)
            last_used = self._last_used.get(command_id)
            if last_used is not None:
                days_ago = max(self._clock() - last_used, 0.0) / 86400.0
                score += RECENCY_SCORE * math.exp(-days_ago / RECENCY_DECAY_DAYS)
            return score


class BuiltinCommandCatalog:
    def __init__(self, commands: Optional[list[Command]] = None,
                 metrics: Optional[UsageMetrics] = None) -> None:
        self._commands = commands if commands is not None else default_commands()
        self._metrics = metrics or UsageMetrics()

    @property
    def metrics(self) -> UsageMetrics:
        return self._metrics

    async def load_command_catalog(self, context_hint: Optional[str] = None) -> list[Command]:
        return sorted(self._commands, key=lambda cmd: self._metrics.score(cmd.id), reverse=True)

    async def record_usage(self, command_id: str) -> None:
        self._metrics.record(command_id)
