"""API routers module."""

from .subjects import router as subjects_router
from .flashcards import router as flashcards_router
from .reviews import router as reviews_router
from .study import router as study_router
from .stats import router as stats_router
from .dashboard import router as dashboard_router
from .search import router as search_router

__all__ = [
    "subjects_router",
    "flashcards_router",
    "reviews_router",
    "study_router",
    "stats_router",
    "dashboard_router",
    "search_router",
]
