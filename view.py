from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rich.text import Text

from config import LINE_WIDTH
from session import DELIMITER, SessionStatus, TypingSession


class CharState(Enum):
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    SKIPPED = "skipped"
    CURSOR = "cursor"
    UNTYPED = "untyped"


@dataclass(frozen=True)
class Cell:
    char: str
    state: CharState


@dataclass(frozen=True)
class SessionView:
    """Read-only snapshot of a session, enough to draw one frame."""

    cells: tuple[Cell, ...]
    status: SessionStatus
    elapsed_s: float
    remaining_s: float
    clock_text: str
    wpm: int
    accuracy: float
    version: int

    @property
    def timed_out(self) -> bool:
        return self.status is SessionStatus.TIMED_OUT


@dataclass(frozen=True)
class RenderStyle:
    ghost: str = "bright_black"
    correct: str = "green"
    incorrect: str = "red"
    cursor: str = "black on white"

    def for_state(self, state: CharState) -> str:
        if state is CharState.MATCHED:
            return self.correct
        if state is CharState.MISMATCHED:
            return self.incorrect
        if state is CharState.CURSOR:
            return self.cursor
        return self.ghost


def _cell_for(index: int, ghost_char: str, typed_text: str, cursor: int) -> Cell:
    if index < len(typed_text):
        typed_char = typed_text[index]
        if typed_char == ghost_char:
            return Cell(ghost_char, CharState.MATCHED)
        if typed_char == DELIMITER and ghost_char != DELIMITER:
            return Cell(ghost_char, CharState.SKIPPED)
        return Cell(typed_char, CharState.MISMATCHED)
    if index == cursor:
        return Cell(ghost_char, CharState.CURSOR)
    return Cell(ghost_char, CharState.UNTYPED)


def build_view(session: TypingSession) -> SessionView:
    typed_text = session.typed_text
    cursor = session.cursor
    cells = tuple(
        _cell_for(i, ch, typed_text, cursor) for i, ch in enumerate(session.ghost_text)
    )
    return SessionView(
        cells=cells,
        status=session.status,
        elapsed_s=session.clock.elapsed_s,
        remaining_s=session.clock.remaining_s,
        clock_text=session.clock.view(),
        wpm=session.wpm,
        accuracy=session.accuracy,
        version=session.version,
    )


def render_ghost_text(
    view: SessionView,
    style: RenderStyle | None = None,
    width: int = LINE_WIDTH,
) -> Text:
    """Style each cell and wrap at the first delimiter past ``width`` columns."""
    style = style or RenderStyle()
    text = Text()
    line_length = 0
    for cell in view.cells:
        if line_length >= width and cell.char == DELIMITER and cell.state is not CharState.CURSOR:
            text.append("\n")
            line_length = 0
            continue
        text.append(cell.char, style=style.for_state(cell.state))
        line_length += 1
    return text


def render_status(view: SessionView) -> str:
    return f"TIME: {view.clock_text}\nWPM:  {view.wpm}\nACC:  {view.accuracy:.2f}%"


def render_summary(view: SessionView) -> str:
    return f"WPM: {view.wpm}\nACC: {view.accuracy:.2f}%"
