"""Due-card predicate and review aggregates for dashboards.

Cards are any objects exposing ``timesReviewed``, ``nextReviewAt`` and
``lastReviewedAt`` (plus ``difficulty``/``category``/``subjectId`` for the
breakdowns). Timestamps may be ISO strings or datetimes; all comparisons are
on UTC dates.
"""

from __future__ import annotations

import calendar
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable

from .scheduler import round_half_up
from .time import as_utc_datetime, utc_date


# Rough time spent per reviewed card, in minutes
MINUTES_PER_REVIEW = 0.5

DIFFICULTIES = ("easy", "medium", "hard")


@dataclass(frozen=True)
class ReviewSummary:
    total: int
    reviewed: int
    due_today: int


@dataclass(frozen=True)
class CalendarDay:
    date: date
    reviewed: int = 0
    pending: int = 0

    @property
    def count(self) -> int:
        return self.reviewed


@dataclass(frozen=True)
class DayCount:
    date: date
    count: int


@dataclass(frozen=True)
class DifficultyDayCount:
    """Reviews on one day, split by the cards' authoring difficulty."""

    date: date
    easy: int = 0
    medium: int = 0
    hard: int = 0
    total: int = 0


@dataclass(frozen=True)
class StudyStreak:
    days: int
    last_reviewed_at: datetime | None = None


@dataclass(frozen=True)
class SubjectStats:
    summary: ReviewSummary
    by_difficulty: dict[str, int]
    by_category: dict[str, int]
    study_time_minutes: int
    weekly_activity: list[DayCount] = field(default_factory=list)
    upcoming_reviews: list[DayCount] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardStats:
    summary: ReviewSummary
    by_difficulty: dict[str, int]
    by_category: dict[str, int]
    study_time_minutes: int
    streak: StudyStreak
    weekly_activity: list[DifficultyDayCount] = field(default_factory=list)
    pending_by_subject: list[tuple[str, int]] = field(default_factory=list)


def is_due(next_review_at: str | datetime | None, now: datetime) -> bool:
    """A card is due when it was never scheduled or its review date is today or earlier."""
    due_date = utc_date(next_review_at)
    if due_date is None:
        return True
    return due_date <= utc_date(now)


def summarize_reviews(cards: Iterable[Any], now: datetime) -> ReviewSummary:
    total = reviewed = due_today = 0
    for card in cards:
        total += 1
        if card.timesReviewed > 0:
            reviewed += 1
        if is_due(card.nextReviewAt, now):
            due_today += 1
    return ReviewSummary(total=total, reviewed=reviewed, due_today=due_today)


def study_time_minutes(reviewed: int) -> int:
    return round_half_up(reviewed * MINUTES_PER_REVIEW)


def breakdown(cards: Iterable[Any]) -> tuple[dict[str, int], dict[str, int]]:
    """Count cards by difficulty (always all three keys) and by category."""
    by_difficulty = dict.fromkeys(DIFFICULTIES, 0)
    by_category: Counter[str] = Counter()
    for card in cards:
        if card.difficulty in by_difficulty:
            by_difficulty[card.difficulty] += 1
        by_category[card.category] += 1
    return by_difficulty, dict(by_category)


def calendar_month(cards: Iterable[Any], year: int, month: int) -> list[CalendarDay]:
    """Per-day review activity for a month.

    ``reviewed`` counts cards last reviewed on the day, ``pending`` counts cards
    scheduled for the day.
    """
    reviewed: Counter[date] = Counter()
    pending: Counter[date] = Counter()
    for card in cards:
        last = utc_date(card.lastReviewedAt)
        if last is not None:
            reviewed[last] += 1
        nxt = utc_date(card.nextReviewAt)
        if nxt is not None:
            pending[nxt] += 1

    _, days_in_month = calendar.monthrange(year, month)
    days = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        days.append(CalendarDay(date=day, reviewed=reviewed[day], pending=pending[day]))
    return days


def cards_due_on(cards: Iterable[Any], day: date) -> list[Any]:
    return [card for card in cards if utc_date(card.nextReviewAt) == day]


def _last_seven_days(now: datetime) -> list[date]:
    today = utc_date(now)
    return [today - timedelta(days=offset) for offset in range(6, -1, -1)]


def weekly_activity(cards: Iterable[Any], now: datetime) -> list[DayCount]:
    """Reviews per day over the last seven days, oldest first, ending today."""
    counts = Counter(utc_date(card.lastReviewedAt) for card in cards)
    return [DayCount(date=day, count=counts[day]) for day in _last_seven_days(now)]


def weekly_activity_by_difficulty(cards: Iterable[Any], now: datetime) -> list[DifficultyDayCount]:
    """Like `weekly_activity`, with each day split into easy/medium/hard."""
    per_day: dict[date, Counter[str]] = {day: Counter() for day in _last_seven_days(now)}
    for card in cards:
        counts = per_day.get(utc_date(card.lastReviewedAt))
        if counts is None:
            continue
        counts["total"] += 1
        if card.difficulty in DIFFICULTIES:
            counts[card.difficulty] += 1

    return [
        DifficultyDayCount(
            date=day,
            easy=counts["easy"],
            medium=counts["medium"],
            hard=counts["hard"],
            total=counts["total"],
        )
        for day, counts in per_day.items()
    ]


def upcoming_reviews(cards: Iterable[Any], now: datetime, days: int = 7) -> list[DayCount]:
    """Scheduled reviews per date from today through ``days`` days ahead.

    Only dates with at least one scheduled card are returned, and at most
    ``days`` of them (the earliest).
    """
    today = utc_date(now)
    horizon = today + timedelta(days=days)
    counts: Counter[date] = Counter()
    for card in cards:
        nxt = utc_date(card.nextReviewAt)
        if nxt is not None and today <= nxt <= horizon:
            counts[nxt] += 1
    return [DayCount(date=day, count=counts[day]) for day in sorted(counts)[:days]]


def study_streak(cards: Iterable[Any], now: datetime) -> StudyStreak:
    """Consecutive days with at least one review.

    The run ends today, or yesterday when nothing has been reviewed yet today;
    anything older means the streak is broken. Only each card's latest review
    is known, so earlier reviews of a re-reviewed card do not count.
    """
    reviewed_at = [as_utc_datetime(card.lastReviewedAt) for card in cards if card.lastReviewedAt]
    if not reviewed_at:
        return StudyStreak(days=0)

    last_reviewed_at = max(reviewed_at)
    day = last_reviewed_at.date()
    if (utc_date(now) - day).days > 1:
        return StudyStreak(days=0, last_reviewed_at=last_reviewed_at)

    review_days = {value.date() for value in reviewed_at}
    streak = 0
    while day in review_days:
        streak += 1
        day -= timedelta(days=1)
    return StudyStreak(days=streak, last_reviewed_at=last_reviewed_at)


def pending_by_subject(cards: Iterable[Any], now: datetime) -> list[tuple[str, int]]:
    """Due card counts per subject id, largest first (ties by subject id)."""
    counts = Counter(card.subjectId for card in cards if is_due(card.nextReviewAt, now))
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def subject_stats(cards: Iterable[Any], now: datetime) -> SubjectStats:
    cards = list(cards)
    summary = summarize_reviews(cards, now)
    by_difficulty, by_category = breakdown(cards)

    return SubjectStats(
        summary=summary,
        by_difficulty=by_difficulty,
        by_category=by_category,
        study_time_minutes=study_time_minutes(summary.reviewed),
        weekly_activity=weekly_activity(cards, now),
        upcoming_reviews=upcoming_reviews(cards, now),
    )


def dashboard_stats(cards: Iterable[Any], now: datetime) -> DashboardStats:
    """User-wide aggregates over every flashcard the user owns."""
    cards = list(cards)
    summary = summarize_reviews(cards, now)
    by_difficulty, by_category = breakdown(cards)

    return DashboardStats(
        summary=summary,
        by_difficulty=by_difficulty,
        by_category=by_category,
        study_time_minutes=study_time_minutes(summary.reviewed),
        streak=study_streak(cards, now),
        weekly_activity=weekly_activity_by_difficulty(cards, now),
        pending_by_subject=pending_by_subject(cards, now),
    )
