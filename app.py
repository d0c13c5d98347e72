from __future__ import annotations

import logging
import sys
from typing import Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Button, Footer, Static

from config import SessionConfig, parse_args, setup_logging
from session import Backspace, Character, InputEvent, Quit, Space, Tick, TypingSession
from view import RenderStyle, SessionView, build_view, render_ghost_text, render_status, render_summary
from words import EmptyCorpusError, generate_ghost_text


logger = logging.getLogger(__name__)

QUIT_KEYS = ("escape", "ctrl+c")


def key_to_event(key: str, character: str | None) -> InputEvent | None:
    """Map a Textual key to an engine event, or None for keys the engine ignores."""
    if key in QUIT_KEYS:
        return Quit()
    if key == "space":
        return Space()
    if key == "backspace":
        return Backspace()
    if character is not None and len(character) == 1 and character.isprintable():
        return Character(character)
    return None


class TypingScreen(Screen):
    BINDINGS = [
        ("escape", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    def __init__(self, session: TypingSession, config: SessionConfig, style: RenderStyle | None = None) -> None:
        super().__init__()
        self.session = session
        self.session_config = config
        self.ghost_style = style or RenderStyle()
        self._ticker: Timer | None = None
        self._rendered_version = -1

    def compose(self) -> ComposeResult:
        with Vertical(id="session"):
            yield Static("Type the stuff:", id="prompt")
            yield Static("", id="status")
            yield Static("", id="ghost-text")
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_view()

    def on_key(self, event: events.Key) -> None:
        input_event = key_to_event(event.key, event.character)
        if input_event is None:
            return
        event.stop()
        event.prevent_default()
        self.feed_event(input_event)

    def action_request_quit(self) -> None:
        self.feed_event(Quit())

    def feed_event(self, input_event: InputEvent) -> None:
        if not self.session.handle(input_event):
            self.app.exit()
            return

        if self.session.is_running and self._ticker is None:
            self._ticker = self.set_interval(self.session_config.tick_interval_s, self._on_tick)

        view = self._refresh_view()
        if view.timed_out and self._ticker is not None:
            self._finish_session(view)

    def _on_tick(self) -> None:
        self.feed_event(Tick(self.session_config.tick_interval_s))

    def _finish_session(self, view: SessionView) -> None:
        self._ticker.stop()
        self._ticker = None
        self.app.push_screen(SummaryScreen(view))

    def _refresh_view(self) -> SessionView:
        view = build_view(self.session)
        if view.version == self._rendered_version:
            return view
        self._rendered_version = view.version
        self.query_one("#status", Static).update(render_status(view))
        self.query_one("#ghost-text", Static).update(
            render_ghost_text(view, self.ghost_style, self.session_config.line_width)
        )
        return view


class SummaryScreen(Screen):
    BINDINGS = [
        ("enter", "close", "Quit"),
        ("escape", "close", "Quit"),
    ]

    def __init__(self, view: SessionView) -> None:
        super().__init__()
        self.result_view = view

    def compose(self) -> ComposeResult:
        with Vertical(id="summary"):
            yield Static("Session Summary", id="summary-title")
            yield Static(render_summary(self.result_view), id="summary-body")
            yield Button("Quit", id="quit", variant="error")
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "quit":
            self.app.exit()

    def action_close(self) -> None:
        self.app.exit()


class TypingTrainerApp(App):
    CSS = """
    #session, #summary {
        padding: 1 2;
    }

    #prompt, #summary-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #status {
        height: auto;
        margin-bottom: 1;
    }

    #ghost-text {
        height: auto;
    }

    #summary-body {
        margin-bottom: 1;
    }
    """

    TITLE = "Ghost Typer"

    def __init__(self, ghost_text: str, config: SessionConfig | None = None, style: RenderStyle | None = None) -> None:
        super().__init__()
        self.session_config = config or SessionConfig()
        self.session = TypingSession(ghost_text, duration_s=self.session_config.duration_s)
        self.ghost_style = style or RenderStyle()

    def on_mount(self) -> None:
        self.push_screen(TypingScreen(self.session, self.session_config, self.ghost_style))


def main(argv: Sequence[str] | None = None) -> int:
    config = parse_args(argv)
    setup_logging(config.log_level, config.log_file)

    try:
        ghost_text = generate_ghost_text(config.word_count, config.words_source)
    except (OSError, EmptyCorpusError) as exc:
        logger.error("Unable to load word list from %s: %s", config.words_source, exc)
        return 1

    TypingTrainerApp(ghost_text, config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
