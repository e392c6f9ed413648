"""
Leaderboard service orchestrator.

Dependencies: mathprep.boundary.db.CRUD, mathprep.core.leaderboard
System role: Ranked leaderboard queries
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD import leaderboard_crud
from mathprep.core.exceptions import ValidationError
from mathprep.core.leaderboard import rank_entries

logger = logging.getLogger(__name__)

ORDER_FIELDS = ("average_score", "points")


class LeaderboardService:
    """Leaderboard service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_leaderboard(
        self,
        grade_level: str | None = None,
        division: str | None = None,
        topic: str | None = None,
        order_by: str = "average_score",
        limit: int | None = 100,
    ) -> list[dict]:
        """
        Ranked leaderboard rows for the given filters.

        Args:
            grade_level: Grade level to match
            division: Division to match
            topic: Topic to match
            order_by: "average_score" or "points"
            limit: Maximum rows after ranking

        Returns:
            list[dict]: Rows with a 1-based rank
        """
        if order_by not in ORDER_FIELDS:
            raise ValidationError(
                f"Cannot order leaderboard by {order_by}",
                field="order_by",
                details={"allowed": list(ORDER_FIELDS)},
            )

        entries = await leaderboard_crud.query(self.db, grade_level=grade_level, division=division, topic=topic)
        ranked = rank_entries(entries, order_by)  # type: ignore[arg-type]
        if limit is not None:
            ranked = ranked[:limit]

        return [
            {
                "rank": r.rank,
                "user_id": r.entry.user_id,
                "username": r.entry.username,
                "grade_level": r.entry.grade_level,
                "division": r.entry.division,
                "topic": r.entry.topic,
                "average_score": r.entry.average_score,
                "attempts": r.entry.attempts,
                "perfect_scores": r.entry.perfect_scores,
                "questions_attempted": r.entry.questions_attempted,
                "points": r.entry.points,
                "last_updated": r.entry.last_updated,
            }
            for r in ranked
        ]

    async def get_filter_options(self) -> dict:
        return {
            "divisions": await leaderboard_crud.distinct_values(self.db, "division"),
            "topics": await leaderboard_crud.distinct_values(self.db, "topic"),
            "grade_levels": await leaderboard_crud.distinct_values(self.db, "grade_level"),
        }
