"""Nearest-match suggestions for unknown command names."""

from __future__ import annotations

from typing import Iterable


MAX_SUGGESTION_DISTANCE = 3


def lev_distance(left: str, right: str) -> int:
    """Return the unit-cost insert/delete/substitute edit distance."""

    if not left:
        return len(right)
    if not right:
        return len(left)

    previous = list(range(len(right) + 1))
    for row, left_char in enumerate(left, start=1):
        current = [row]
        for column, right_char in enumerate(right, start=1):
            substitution = previous[column - 1] + (left_char != right_char)
            current.append(min(previous[column] + 1, current[column - 1] + 1, substitution))
        previous = current
    return previous[-1]


def suggest(unknown: str, candidates: Iterable[str]) -> str | None:
    """Return the closest candidate within `MAX_SUGGESTION_DISTANCE` edits.

    Ties go to the candidate encountered first.
    """

    best: str | None = None
    best_distance = MAX_SUGGESTION_DISTANCE + 1
    for candidate in candidates:
        distance = lev_distance(unknown, candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best
