"""
Badges and achievements.

Badge requirements live as JSON on badge rows; achievements are a fixed
catalogue evaluated from practice history.

Dependencies: None (pure domain layer)
System role: Reward eligibility rules
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

DIVISION_MASTER_ACCURACY = 80.0
DIVISION_MASTER_MIN_ATTEMPTS = 50
ENTHUSIAST_SESSIONS = 10
EXPLORER_TOPICS = 5


@dataclass(frozen=True)
class AchievementDefinition:
    achievement_type: str
    name: str
    description: str
    points: int
    icon: str


ACHIEVEMENTS: tuple[AchievementDefinition, ...] = (
    AchievementDefinition("first_practice", "First Steps", "Complete your first practice session", 10, "🎯"),
    AchievementDefinition(
        "practice_enthusiast", "Practice Enthusiast", f"Complete {ENTHUSIAST_SESSIONS} practice sessions", 50, "🔥"
    ),
    AchievementDefinition("perfectionist", "Perfectionist", "Score 100% on a practice session", 30, "⭐"),
    AchievementDefinition("topic_explorer", "Topic Explorer", f"Practice {EXPLORER_TOPICS} different topics", 40, "🧭"),
    AchievementDefinition(
        "division_master",
        "Division Master",
        f"Reach {DIVISION_MASTER_ACCURACY:.0f}% accuracy over {DIVISION_MASTER_MIN_ATTEMPTS} attempts in one division",
        100,
        "👑",
    ),
)

DEFAULT_BADGES: tuple[dict[str, Any], ...] = (
    {"name": "Sharp Shooter", "description": "Score 90% or better in a session", "icon": "🎯",
     "requirements": {"type": "score", "threshold": 0.9}},
    {"name": "Perfect Round", "description": "Score 100% in a session", "icon": "💯",
     "requirements": {"type": "score", "threshold": 1.0}},
    {"name": "Three-Day Streak", "description": "Practice three days in a row", "icon": "📅",
     "requirements": {"type": "streak", "days": 3}},
    {"name": "Week Warrior", "description": "Practice seven days in a row", "icon": "🔥",
     "requirements": {"type": "streak", "days": 7}},
    {"name": "Topic Regular", "description": "Complete the same topic five times", "icon": "📚",
     "requirements": {"type": "topic_completion", "count": 5}},
)


@dataclass(frozen=True)
class RewardContext:
    """What a just-finished session tells us about the user."""

    accuracy: float
    current_streak: int
    topic_completion_count: int


@dataclass(frozen=True)
class PracticeSnapshot:
    """Aggregate history used to evaluate achievements."""

    sessions_completed: int
    perfect_session: bool
    distinct_topics: int
    division_accuracy: Mapping[str, tuple[int, int]]


@dataclass(frozen=True)
class AchievementStats:
    total_achievements: int
    total_points_earned: int
    completion_percentage: int


def badge_earned(requirements: Mapping[str, Any], context: RewardContext) -> bool:
    """Evaluate one badge's requirement JSON; unknown types never award."""
    kind = requirements.get("type")
    if kind == "score":
        return round(context.accuracy, 2) >= round(float(requirements.get("threshold", 1.0)) * 100, 2)
    if kind == "streak":
        return context.current_streak >= int(requirements.get("days", 0))
    if kind == "topic_completion":
        return context.topic_completion_count >= int(requirements.get("count", 0))
    return False


def badges_to_award(badges: Iterable[Any], earned_ids: set, context: RewardContext) -> list[Any]:
    """Badges newly earned by this session, skipping ones already held."""
    return [
        badge
        for badge in badges
        if badge.id not in earned_ids and badge_earned(badge.requirements or {}, context)
    ]


def achievement_unlocked(achievement_type: str, snapshot: PracticeSnapshot) -> bool:
    if achievement_type == "first_practice":
        return snapshot.sessions_completed >= 1
    if achievement_type == "practice_enthusiast":
        return snapshot.sessions_completed >= ENTHUSIAST_SESSIONS
    if achievement_type == "perfectionist":
        return snapshot.perfect_session
    if achievement_type == "topic_explorer":
        return snapshot.distinct_topics >= EXPLORER_TOPICS
    if achievement_type == "division_master":
        return any(
            total >= DIVISION_MASTER_MIN_ATTEMPTS and correct / total * 100 >= DIVISION_MASTER_ACCURACY
            for correct, total in snapshot.division_accuracy.values()
        )
    return False


def achievements_to_unlock(
    unlocked_types: set[str],
    snapshot: PracticeSnapshot,
) -> list[AchievementDefinition]:
    """Catalogue entries newly unlocked by the snapshot."""
    return [
        definition
        for definition in ACHIEVEMENTS
        if definition.achievement_type not in unlocked_types
        and achievement_unlocked(definition.achievement_type, snapshot)
    ]


def achievement_stats(points_awarded: Iterable[int]) -> AchievementStats:
    points = list(points_awarded)
    return AchievementStats(
        total_achievements=len(points),
        total_points_earned=sum(points),
        completion_percentage=round(len(points) / len(ACHIEVEMENTS) * 100),
    )
