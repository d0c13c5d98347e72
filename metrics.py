from __future__ import annotations

import math

from config import MIN_ELAPSED_S


def mark_errors(ghost_text: str, typed_text: str, error_positions: set[int]) -> set[int]:
    """Add every index where the typed char differs from the ghost char.

    Positions are never removed, so a fixed mistake still counts.
    """
    for i, ch in enumerate(typed_text):
        if i >= len(ghost_text):
            break
        if ch != ghost_text[i]:
            error_positions.add(i)
    return error_positions


def compute_accuracy(typed_len: int, error_count: int) -> float:
    if typed_len <= 0:
        return 100.0
    correct = max(0, typed_len - error_count)
    return 100.0 * correct / typed_len


def compute_wpm(typed_len: int, elapsed_s: float, min_elapsed_s: float = MIN_ELAPSED_S) -> int | None:
    """Gross WPM over the raw typed length, or None while too little time has passed."""
    if elapsed_s < min_elapsed_s:
        return None
    # (typed_len / 5) words * (60 / elapsed) minutes, kept in one division
    return max(0, math.floor(typed_len * 60.0 / (5.0 * elapsed_s)))
