from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Iterable, Union

from clock import SessionClock
from config import DURATION_S, MIN_ELAPSED_S
from metrics import compute_accuracy, compute_wpm, mark_errors


logger = logging.getLogger(__name__)

DELIMITER = " "


class SessionStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Character:
    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"Character expects exactly one character, got {self.char!r}")


@dataclass(frozen=True)
class Space:
    pass


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Tick:
    interval_s: float


InputEvent = Union[Quit, Character, Space, Backspace, Tick]


class TypingSession:
    """Ghost text, typed text and metrics for a single timed run.

    Every mutation goes through :meth:`handle`, one event at a time. Events
    arriving after the clock has run out are ignored, apart from Quit.
    """

    def __init__(
        self,
        ghost_text: str,
        duration_s: float = DURATION_S,
        min_elapsed_s: float = MIN_ELAPSED_S,
    ) -> None:
        if not ghost_text:
            raise ValueError("ghost text must not be empty")
        self.ghost_text = ghost_text
        self.typed_text = ""
        self.error_positions: set[int] = set()
        self.max_typed = 0
        self.wpm = 0
        self.accuracy = 100.0
        self.status = SessionStatus.IDLE
        self.clock = SessionClock(duration_s)
        self.min_elapsed_s = min_elapsed_s
        self.version = 0
        # set when a word-skip stops on a delimiter the user has not typed yet
        self._on_skip_boundary = False

    @property
    def cursor(self) -> int:
        return len(self.typed_text)

    @property
    def is_running(self) -> bool:
        return self.status is SessionStatus.RUNNING

    @property
    def timed_out(self) -> bool:
        return self.status is SessionStatus.TIMED_OUT

    def handle(self, event: InputEvent) -> bool:
        """Apply one event. Returns False when the caller should stop (Quit)."""
        if isinstance(event, Quit):
            logger.info("Quit requested in state %s", self.status.value)
            return False
        if isinstance(event, Tick):
            self.tick(event.interval_s)
        elif isinstance(event, Character):
            self.type_char(event.char)
        elif isinstance(event, Space):
            self.skip_word()
        elif isinstance(event, Backspace):
            self.backspace()
        else:
            raise TypeError(f"unknown input event: {event!r}")
        return True

    def handle_all(self, events: Iterable[InputEvent]) -> bool:
        for event in events:
            if not self.handle(event):
                return False
        return True

    def type_char(self, char: str) -> None:
        if self.timed_out:
            return
        cursor = self.cursor
        if cursor >= len(self.ghost_text):
            logger.debug("Ignoring %r past the end of the ghost text", char)
            return

        if self.status is SessionStatus.IDLE:
            self.status = SessionStatus.RUNNING
            self.clock.start()
            logger.info("Session started (%.1fs)", self.clock.total_s)

        if self.ghost_text[cursor] == DELIMITER:
            if self._on_skip_boundary and cursor + 1 < len(self.ghost_text):
                # starting the next word after a skip: the delimiter is typed for the user
                self.typed_text += DELIMITER
            else:
                # over-typing a word: stretch the ghost text to keep indices aligned
                self.ghost_text = self.ghost_text[:cursor] + DELIMITER + self.ghost_text[cursor:]
        self._on_skip_boundary = False

        self.typed_text += char
        self._after_edit()

    def skip_word(self) -> None:
        if self.timed_out:
            return
        cursor = self.cursor
        if cursor >= len(self.ghost_text):
            return

        next_delimiter = self.ghost_text.find(DELIMITER, cursor)
        if next_delimiter == -1:
            next_delimiter = len(self.ghost_text)
        offset = next_delimiter - cursor
        # a mid-word skip stops on the delimiter; the next word starts after it
        self._on_skip_boundary = offset > 0 and next_delimiter < len(self.ghost_text)
        if offset == 0:
            # already on the boundary: the space itself is typed
            offset = 1

        self.typed_text += DELIMITER * offset
        self._after_edit()

    def backspace(self) -> None:
        if self.timed_out:
            return
        self._on_skip_boundary = False
        cursor = self.cursor
        if 0 < cursor < len(self.ghost_text):
            if self.ghost_text[cursor] == DELIMITER and self.ghost_text[cursor - 1] == DELIMITER:
                self.ghost_text = self.ghost_text[: cursor - 1] + self.ghost_text[cursor:]
        if cursor == 0:
            return

        self.typed_text = self.typed_text[:-1]
        self._after_edit()

    def tick(self, interval_s: float) -> None:
        if not self.is_running:
            return
        expired = self.clock.advance(interval_s)

        wpm = compute_wpm(len(self.typed_text), self.clock.elapsed_s, self.min_elapsed_s)
        if wpm is not None:
            self.wpm = wpm
        self.version += 1

        if expired:
            self.status = SessionStatus.TIMED_OUT
            logger.info("Session timed out: wpm=%d accuracy=%.2f", self.wpm, self.accuracy)

    def update_accuracy(self) -> None:
        typed_len = len(self.typed_text)
        if typed_len == 0:
            return
        mark_errors(self.ghost_text, self.typed_text, self.error_positions)
        if typed_len > self.max_typed:
            self.max_typed = typed_len
            self.accuracy = compute_accuracy(typed_len, len(self.error_positions))

    def _after_edit(self) -> None:
        if self.is_running:
            self.update_accuracy()
        self.version += 1
