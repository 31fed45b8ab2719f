"""Filtering, ordering and sectioning of the command catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from command_scorer import base_score, context_boost
from context_classifier import classify
from models import ClipboardEntry, Command, ScoredCommand

SUGGESTED_LIMIT = 4
CLIPBOARD_DISPLAY_LIMIT = 5


@dataclass
class PaletteSections:
    clipboard: list[ClipboardEntry] = field(default_factory=list)
    suggested: list[Command] = field(default_factory=list)
    widgets: list[Command] = field(default_factory=list)
    actions: list[Command] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.clipboard or self.suggested or self.widgets or self.actions)


def score_commands(
    commands: Sequence[Command], query: str, captured_text: str
) -> list[ScoredCommand]:
    """Score every lexically matching command, best first.

    Commands whose label and description do not contain the query are dropped;
    everything else is kept, including commands pushed negative by context
    penalties. Ties keep catalog order.
    """
    context = classify(captured_text)
    scored: list[ScoredCommand] = []
    for command in commands:
        base = base_score(command, query)
        if base == 0:
            continue
        scored.append(ScoredCommand(command=command, score=base + context_boost(command, context)))
    # sorted() is stable, so equal scores stay in catalog order
    return sorted(scored, key=lambda item: item.score, reverse=True)


def rank_commands(commands: Sequence[Command], query: str, captured_text: str) -> list[Command]:
    if not query or not query.strip():
        return list(commands)
    return [item.command for item in score_commands(commands, query, captured_text)]


def build_sections(
    ranked: Sequence[Command], query: str, clipboard: Sequence[ClipboardEntry] = ()
) -> PaletteSections:
    widgets = [cmd for cmd in ranked if cmd.is_widget]
    actions = [cmd for cmd in ranked if cmd.is_action]
    suggested = actions[:SUGGESTED_LIMIT]
    suggested_ids = {cmd.id for cmd in suggested}

    history: list[ClipboardEntry] = []
    if query == "":
        history = list(clipboard[:CLIPBOARD_DISPLAY_LIMIT])

    return PaletteSections(
        clipboard=history,
        suggested=suggested,
        widgets=widgets,
        actions=[cmd for cmd in actions if cmd.id not in suggested_ids],
    )


def clipboard_shortcut_index(
    key: str, query: str, clipboard: Sequence[ClipboardEntry]
) -> Optional[int]:
    """Map a "1".."5" keypress to a clipboard entry index while the query is empty.

    Any typed character, a space included, sends digits to the query field.
    """
    if query != "":
        return None
    if len(key) != 1 or key not in "0123456789":
        return None
    number = int(key)
    if number < 1 or number > CLIPBOARD_DISPLAY_LIMIT:
        return None
    if number > len(clipboard):
        return None
    return number - 1
