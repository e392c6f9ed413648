"""
API routers package.

Each router owns one resource; all are mounted under /api/v1.
"""

from mathprep.api.routers.admin import router as admin_router
from mathprep.api.routers.flags import router as flags_router
from mathprep.api.routers.friends import router as friends_router
from mathprep.api.routers.health import router as health_router
from mathprep.api.routers.leaderboard import router as leaderboard_router
from mathprep.api.routers.practice import router as practice_router
from mathprep.api.routers.profiles import router as profiles_router
from mathprep.api.routers.questions import router as questions_router
from mathprep.api.routers.rewards import router as rewards_router
from mathprep.api.routers.timed_tests import router as tests_router

__all__ = [
    "admin_router",
    "flags_router",
    "friends_router",
    "health_router",
    "leaderboard_router",
    "practice_router",
    "profiles_router",
    "questions_router",
    "rewards_router",
    "tests_router",
]
