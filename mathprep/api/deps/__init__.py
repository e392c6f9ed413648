"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_admin_service,
    get_current_user_id,
    get_flag_service,
    get_friend_service,
    get_leaderboard_service,
    get_practice_service,
    get_profile_service,
    get_question_service,
    get_reward_service,
    get_settings_dependency,
    get_test_service,
    require_admin,
)

__all__ = [
    "get_admin_service",
    "get_current_user_id",
    "get_flag_service",
    "get_friend_service",
    "get_leaderboard_service",
    "get_practice_service",
    "get_profile_service",
    "get_question_service",
    "get_reward_service",
    "get_settings_dependency",
    "get_test_service",
    "require_admin",
]
