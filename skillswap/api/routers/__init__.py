"""API routers."""

from .activities import router as activities_router
from .exchanges import router as exchanges_router
from .health import router as health_router
from .realtime import router as realtime_router
from .reviews import router as reviews_router
from .sessions import router as sessions_router
from .skill_matches import router as skill_matches_router
from .skills import router as skills_router

__all__ = [
    "activities_router",
    "exchanges_router",
    "health_router",
    "realtime_router",
    "reviews_router",
    "sessions_router",
    "skill_matches_router",
    "skills_router",
]
