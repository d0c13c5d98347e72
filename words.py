from __future__ import annotations

import logging
import random
from pathlib import Path

import requests

from config import WORD_COUNT, WORDS_SOURCE


logger = logging.getLogger(__name__)

USER_AGENT = "ghost-typer/0.1 (python requests)"
FETCH_TIMEOUT_S = 8


class EmptyCorpusError(ValueError):
    """The word list contained no usable words."""


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _read_source(source: str | Path) -> str:
    if _is_url(source):
        response = requests.get(
            source,
            timeout=FETCH_TIMEOUT_S,
            allow_redirects=True,
            headers={"User-Agent": USER_AGENT, "Accept": "text/plain"},
        )
        response.raise_for_status()
        return response.text
    return Path(source).read_text(encoding="utf-8")


def load_words(source: str | Path = WORDS_SOURCE) -> list[str]:
    """Read a newline-delimited word list from a file path or an http(s) URL.

    I/O failures propagate as ``OSError`` (``requests`` errors included).
    """
    text = _read_source(source)
    # a line holding "ice cream" yields two words, never one with a space inside
    words = text.split()
    logger.debug("Loaded %d words from %s", len(words), source)
    return words


def generate_ghost_text(
    count: int = WORD_COUNT,
    source: str | Path = WORDS_SOURCE,
    rng: random.Random | None = None,
) -> str:
    if count < 1:
        raise ValueError(f"word count must be positive, got {count}")

    words = load_words(source)
    if not words:
        raise EmptyCorpusError(f"no words found in {source}")

    rng = rng or random.Random()
    return " ".join(rng.choice(words) for _ in range(count))
