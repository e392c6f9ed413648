"""
CRUD operations package.

Each CRUD class wraps one model; module-level singletons are what services use.
"""

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.CRUD.profile_crud import ProfileCRUD
from mathprep.boundary.db.CRUD.question_crud import ALL_TOPICS, QuestionCRUD
from mathprep.boundary.db.CRUD.attempt_crud import PracticeAttemptCRUD
from mathprep.boundary.db.CRUD.progress_crud import PracticeSessionCRUD
from mathprep.boundary.db.CRUD.leaderboard_crud import LeaderboardCRUD
from mathprep.boundary.db.CRUD.reward_crud import BadgeCRUD, UserAchievementCRUD, UserBadgeCRUD
from mathprep.boundary.db.CRUD.flag_crud import QuestionFlagCRUD
from mathprep.boundary.db.CRUD.friend_crud import FriendRelationshipCRUD

profile_crud = ProfileCRUD()
question_crud = QuestionCRUD()
attempt_crud = PracticeAttemptCRUD()
progress_crud = PracticeSessionCRUD()
leaderboard_crud = LeaderboardCRUD()
badge_crud = BadgeCRUD()
user_badge_crud = UserBadgeCRUD()
achievement_crud = UserAchievementCRUD()
flag_crud = QuestionFlagCRUD()
friend_crud = FriendRelationshipCRUD()

__all__ = [
    "ALL_TOPICS",
    "BaseCRUD",
    "ProfileCRUD",
    "QuestionCRUD",
    "PracticeAttemptCRUD",
    "PracticeSessionCRUD",
    "LeaderboardCRUD",
    "BadgeCRUD",
    "UserBadgeCRUD",
    "UserAchievementCRUD",
    "QuestionFlagCRUD",
    "FriendRelationshipCRUD",
    "profile_crud",
    "question_crud",
    "attempt_crud",
    "progress_crud",
    "leaderboard_crud",
    "badge_crud",
    "user_badge_crud",
    "achievement_crud",
    "flag_crud",
    "friend_crud",
]
