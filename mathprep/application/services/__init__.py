"""
Application services.

Each service wraps one AsyncSession and owns the commit for its use case.
"""

from mathprep.application.services.admin_service import AdminService
from mathprep.application.services.flag_service import FlagService
from mathprep.application.services.friend_service import FriendService
from mathprep.application.services.leaderboard_service import LeaderboardService
from mathprep.application.services.practice_service import PracticeService
from mathprep.application.services.profile_service import ProfileService
from mathprep.application.services.question_service import QuestionService
from mathprep.application.services.reward_service import RewardService
from mathprep.application.services.test_service import TestService

__all__ = [
    "AdminService",
    "FlagService",
    "FriendService",
    "LeaderboardService",
    "PracticeService",
    "ProfileService",
    "QuestionService",
    "RewardService",
    "TestService",
]
