"""Simplified SM-2 review scheduling.

A review rates recall as "hard", "medium" or "easy". Each rating maps to a
fixed branch: hard cards come back the same day, medium cards in one or three
days, easy cards in four, seven, or (reviews + 1) * EF days. The ease factor
moves down on hard/medium and up on easy, always within [1.3, 2.5].

The "easy" interval for a card with two or more reviews is computed from the
ease factor *before* this review's +0.1 adjustment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from .time import add_days, ensure_utc, utc_now


Quality = Literal["hard", "medium", "easy"]
QUALITIES: tuple[Quality, ...] = ("hard", "medium", "easy")

MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 2.5
DEFAULT_EASE_FACTOR = 2.5

HARD_EASE_PENALTY = 0.2
MEDIUM_EASE_PENALTY = 0.15
EASY_EASE_BONUS = 0.1


@dataclass(frozen=True)
class ReviewOutcome:
    ease_factor: float
    next_review_at: datetime
    interval_days: int


def _clamp_ease_factor(ef: float) -> float:
    return min(MAX_EASE_FACTOR, max(MIN_EASE_FACTOR, ef))


def round_half_up(value: float) -> int:
    # round() would use banker's rounding: 4.5 -> 4
    return int(math.floor(value + 0.5))


def compute_next_review(
    quality: Quality,
    times_reviewed: int,
    current_ease_factor: float | None = None,
    now: datetime | None = None,
) -> ReviewOutcome:
    """Schedule the next review of a card.

    Args:
        quality: Self-reported recall quality ("hard", "medium" or "easy")
        times_reviewed: Completed reviews before this one
        current_ease_factor: Card's ease factor; None means a new card (2.5)
        now: Review time; defaults to the current UTC time

    Returns:
        The new ease factor, the next review timestamp and the interval in days.

    Raises:
        ValueError: If quality is not one of "hard", "medium", "easy"
    """
    now = utc_now() if now is None else ensure_utc(now)
    ef = DEFAULT_EASE_FACTOR if current_ease_factor is None else _clamp_ease_factor(current_ease_factor)
    n = max(0, times_reviewed)

    if quality == "hard":
        interval = 0
        ef_prime = ef - HARD_EASE_PENALTY
    elif quality == "medium":
        interval = 1 if n == 0 else 3
        ef_prime = ef - MEDIUM_EASE_PENALTY
    elif quality == "easy":
        if n == 0:
            interval = 4
        elif n == 1:
            interval = 7
        else:
            interval = round_half_up((n + 1) * ef)
        ef_prime = ef + EASY_EASE_BONUS
    else:
        raise ValueError(f"Invalid quality: {quality!r}")

    return ReviewOutcome(
        ease_factor=_clamp_ease_factor(ef_prime),
        next_review_at=add_days(now, interval),
        interval_days=interval,
    )
