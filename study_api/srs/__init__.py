"""SRS helpers (simplified SM-2 scheduling + due-card aggregates)."""

from .scheduler import (
    DEFAULT_EASE_FACTOR,
    MAX_EASE_FACTOR,
    MIN_EASE_FACTOR,
    QUALITIES,
    Quality,
    ReviewOutcome,
    compute_next_review,
    round_half_up,
)
from .due import (
    CalendarDay,
    DashboardStats,
    DayCount,
    DifficultyDayCount,
    ReviewSummary,
    StudyStreak,
    SubjectStats,
    calendar_month,
    cards_due_on,
    dashboard_stats,
    is_due,
    pending_by_subject,
    study_streak,
    subject_stats,
    summarize_reviews,
    upcoming_reviews,
    weekly_activity,
    weekly_activity_by_difficulty,
)
from .time import (
    utc_now,
    utc_now_iso,
    utc_datetime_to_iso_z,
    parse_iso_z,
    as_utc_datetime,
    utc_date,
)

__all__ = [
    "DEFAULT_EASE_FACTOR",
    "MAX_EASE_FACTOR",
    "MIN_EASE_FACTOR",
    "QUALITIES",
    "Quality",
    "ReviewOutcome",
    "compute_next_review",
    "round_half_up",
    "CalendarDay",
    "DashboardStats",
    "DayCount",
    "DifficultyDayCount",
    "ReviewSummary",
    "StudyStreak",
    "SubjectStats",
    "calendar_month",
    "cards_due_on",
    "dashboard_stats",
    "is_due",
    "pending_by_subject",
    "study_streak",
    "subject_stats",
    "summarize_reviews",
    "upcoming_reviews",
    "weekly_activity",
    "weekly_activity_by_difficulty",
    "utc_now",
    "utc_now_iso",
    "utc_datetime_to_iso_z",
    "parse_iso_z",
    "as_utc_datetime",
    "utc_date",
]
