from __future__ import annotations

import random
from unittest.mock import MagicMock, patch

import pytest
import requests

from words import EmptyCorpusError, generate_ghost_text, load_words


@pytest.fixture
def word_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("alpha\nbeta\n\n  gamma  \n", encoding="utf-8")
    return path


def test_load_words_from_file_skips_blank_lines(word_file):
    assert load_words(word_file) == ["alpha", "beta", "gamma"]


def test_generate_ghost_text_uses_single_spaces(word_file):
    text = generate_ghost_text(25, word_file, rng=random.Random(7))
    words = text.split(" ")

    assert len(words) == 25
    assert set(words) <= {"alpha", "beta", "gamma"}
    assert "  " not in text


def test_generate_ghost_text_is_deterministic_with_seeded_rng(word_file):
    first = generate_ghost_text(10, word_file, rng=random.Random(3))
    second = generate_ghost_text(10, word_file, rng=random.Random(3))
    assert first == second


def test_missing_word_list_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        generate_ghost_text(5, tmp_path / "nope.txt")


def test_empty_word_list_fails_fast(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("\n\n", encoding="utf-8")

    with pytest.raises(EmptyCorpusError):
        generate_ghost_text(5, path)


def test_count_must_be_positive(word_file):
    with pytest.raises(ValueError):
        generate_ghost_text(0, word_file)


def test_load_words_from_url():
    response = MagicMock()
    response.text = "one\ntwo\nthree\n"
    with patch("words.requests.get", return_value=response) as get:
        words = load_words("https://example.com/words.txt")

    assert words == ["one", "two", "three"]
    response.raise_for_status.assert_called_once()
    assert get.call_args.kwargs["timeout"] > 0


def test_url_failure_is_an_oserror():
    with patch("words.requests.get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(OSError):
            load_words("http://example.com/words.txt")


def test_multi_word_lines_become_separate_words(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("ice cream\nsoda\n", encoding="utf-8")

    assert load_words(path) == ["ice", "cream", "soda"]
