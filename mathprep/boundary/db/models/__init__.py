"""
Database models package.

Exports:
  - ProfileModel, UserRole, GRADE_LEVELS: Profiles and roles
  - QuestionModel: Question bank
  - PracticeAttemptModel, PracticeSessionModel, SessionType: Practice history
  - LeaderboardEntryModel: Ranking statistics
  - BadgeModel, UserBadgeModel, UserAchievementModel: Rewards
  - QuestionFlagModel, FlagType, FlagStatus: Question reports
  - FriendRelationshipModel, FriendStatus: Friendships

Dependencies: sqlalchemy, mathprep.boundary.db.base
System role: Database model definitions for domain entities
"""

from mathprep.boundary.db.models.profile_model import GRADE_LEVELS, ProfileModel, UserRole
from mathprep.boundary.db.models.question_model import QuestionModel
from mathprep.boundary.db.models.practice_model import (
    PracticeAttemptModel,
    PracticeSessionModel,
    SessionType,
)
from mathprep.boundary.db.models.leaderboard_model import LeaderboardEntryModel
from mathprep.boundary.db.models.reward_model import BadgeModel, UserAchievementModel, UserBadgeModel
from mathprep.boundary.db.models.flag_model import FlagStatus, FlagType, QuestionFlagModel
from mathprep.boundary.db.models.friend_model import FriendRelationshipModel, FriendStatus

__all__ = [
    "GRADE_LEVELS",
    "ProfileModel",
    "UserRole",
    "QuestionModel",
    "PracticeAttemptModel",
    "PracticeSessionModel",
    "SessionType",
    "LeaderboardEntryModel",
    "BadgeModel",
    "UserBadgeModel",
    "UserAchievementModel",
    "QuestionFlagModel",
    "FlagType",
    "FlagStatus",
    "FriendRelationshipModel",
    "FriendStatus",
]
