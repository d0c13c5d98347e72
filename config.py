from __future__ import annotations

import argparse
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Sequence

from textual.logging import TextualHandler


DURATION_S = 10.0
WORD_COUNT = 200
WORDS_SOURCE = "words.txt"
TICK_INTERVAL_S = 1.0
# Below this many elapsed seconds WPM is not computed.
MIN_ELAPSED_S = 0.1
LINE_WIDTH = 80

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass
class SessionConfig:
    words_source: str = WORDS_SOURCE
    word_count: int = WORD_COUNT
    duration_s: float = DURATION_S
    tick_interval_s: float = TICK_INTERVAL_S
    line_width: int = LINE_WIDTH
    log_level: str = "WARNING"
    log_file: Path | None = None


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghost-typer",
        description="Terminal typing-speed trainer: type over the ghost text before the clock runs out.",
    )
    parser.add_argument(
        "--words",
        default=WORDS_SOURCE,
        help="word list file or http(s) URL, one word per line (default: %(default)s)",
    )
    parser.add_argument(
        "--count",
        type=_positive_int,
        default=WORD_COUNT,
        help="number of words in the ghost text (default: %(default)s)",
    )
    parser.add_argument(
        "--duration",
        type=_positive_float,
        default=DURATION_S,
        help="session length in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--width",
        type=_positive_int,
        default=LINE_WIDTH,
        help="wrap the ghost text after this many columns (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: %(default)s)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="also write logs to this file")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> SessionConfig:
    args = build_parser().parse_args(argv)
    return SessionConfig(
        words_source=args.words,
        word_count=args.count,
        duration_s=args.duration,
        line_width=args.width,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def setup_logging(level: str = "WARNING", log_file: Path | None = None) -> None:
    # stdout belongs to the terminal UI, so console output goes through Textual.
    handlers: list[logging.Handler] = [TextualHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
