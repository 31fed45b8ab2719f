"""Core data models for the palette."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class PaletteState(str, Enum):
    HIDDEN = "HIDDEN"
    FOCUSED = "FOCUSED"
    READY = "READY"


class PopoverState(str, Enum):
    CLOSED = "CLOSED"
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class SelectionKind(str, Enum):
    WIDGET = "widget"
    ACTION = "action"


class CommandCategory(str, Enum):
    CURRENCY = "currency"
    UNIT = "unit"
    TIME = "time"
    DEFINITION = "definition"
    TRANSLATION = "translation"
    TEXT_ANALYSIS = "text_analysis"
    GENERAL = "general"


class ActionKind(str, Enum):
    TRANSLATE = "Translate"
    CONVERT_CURRENCY = "ConvertCurrency"
    CONVERT_UNIT = "ConvertUnit"
    CONVERT_TIME = "ConvertTimeAction"
    DEFINITION = "DefinitionAction"
    ANALYZE_TEXT = "AnalyzeText"


@dataclass(frozen=True)
class ActionType:
    kind: ActionKind
    target: str = ""


@dataclass(frozen=True)
class WidgetVariant:
    widget_type: str


@dataclass(frozen=True)
class ActionVariant:
    action_type: ActionType


CommandVariant = Union[WidgetVariant, ActionVariant]


@dataclass(frozen=True)
class Command:
    """A palette entry: either opens a widget or runs an inline action."""

    id: str
    label: str
    variant: CommandVariant
    description: Optional[str] = None
    keywords: tuple[str, ...] = ()
    category: Optional[CommandCategory] = None

    def __post_init__(self) -> None:
        if not isinstance(self.variant, (WidgetVariant, ActionVariant)):
            raise TypeError(f"command {self.id!r} needs a widget or action variant")

    @property
    def is_widget(self) -> bool:
        return isinstance(self.variant, WidgetVariant)

    @property
    def is_action(self) -> bool:
        return isinstance(self.variant, ActionVariant)

    @property
    def widget_type(self) -> Optional[str]:
        if isinstance(self.variant, WidgetVariant):
            return self.variant.widget_type
        return None

    @property
    def action_type(self) -> Optional[ActionType]:
        if isinstance(self.variant, ActionVariant):
            return self.variant.action_type
        return None


@dataclass(frozen=True)
class TextContext:
    is_currency: bool = False
    is_unit: bool = False
    is_time: bool = False
    is_single_word: bool = False
    has_numbers: bool = False
    is_valid: bool = False


@dataclass(frozen=True)
class ScoredCommand:
    command: Command
    score: int


@dataclass(frozen=True)
class ClipboardEntry:
    id: str
    content: str
    preview: str
    timestamp: int


@dataclass
class CaptureResult:
    text: str
    source: str


@dataclass
class ActionResult:
    result: str
    metadata: Optional[dict[str, Any]] = None


@dataclass
class PasteResult:
    success: bool
    reason: str
    clipboard_restored: bool


@dataclass(frozen=True)
class Selection:
    id: str
    kind: SelectionKind


@dataclass
class Popover:
    state: PopoverState = PopoverState.CLOSED
    content: str = ""

    @property
    def is_open(self) -> bool:
        return self.state != PopoverState.CLOSED


@dataclass
class PaletteSession:
    """Mutable state of one visible palette; owned by the controller."""

    query: str = ""
    captured_text: str = ""
    commands: list[Command] = field(default_factory=list)
    loading_commands: bool = False
    selection: Optional[Selection] = None
    popover: Popover = field(default_factory=Popover)
    executing_id: Optional[str] = None

    def reset(self) -> None:
        self.query = ""
        self.captured_text = ""
        self.commands = []
        self.loading_commands = False
        self.selection = None
        self.popover = Popover()
        self.executing_id = None
