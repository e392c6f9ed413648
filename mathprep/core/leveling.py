"""
XP and level progression.

Dependencies: math (stdlib)
System role: XP rewards per answer and level-up arithmetic
"""

import math
from dataclasses import dataclass
from typing import Any

DEFAULT_XP_REWARD = 10


@dataclass(frozen=True)
class LevelState:
    level: int
    xp: int
    levels_gained: int
    xp_to_next_level: int

    @property
    def leveled_up(self) -> bool:
        return self.levels_gained > 0


def xp_for_next_level(level: int) -> int:
    """XP needed to advance from level to level + 1: floor(100 * 1.5^(level-1))."""
    return math.floor(100 * 1.5 ** (max(level, 1) - 1))


def xp_for_answer(question: Any, is_correct: bool, answer_streak_before: int) -> int:
    """
    XP earned by one answer.

    Every answer earns the question's base reward; correct answers add the
    accuracy bonus, and continuing a streak adds the stamina bonus.
    """
    gained = question.xp_reward or DEFAULT_XP_REWARD
    if is_correct:
        gained += question.accuracy_bonus or 0
        if answer_streak_before > 0:
            gained += question.stamina_bonus or 0
    return gained


def apply_xp(level: int, xp: int, gained: int) -> LevelState:
    """
    Add XP and roll over as many levels as it pays for.

    Args:
        level: Current level (>= 1)
        xp: XP carried within the current level
        gained: XP to add (>= 0)

    Returns:
        LevelState: New level, leftover XP and levels gained
    """
    if gained < 0:
        raise ValueError("gained XP cannot be negative")

    new_level = max(level, 1)
    new_xp = xp + gained
    needed = xp_for_next_level(new_level)
    while new_xp >= needed:
        new_xp -= needed
        new_level += 1
        needed = xp_for_next_level(new_level)

    return LevelState(
        level=new_level,
        xp=new_xp,
        levels_gained=new_level - max(level, 1),
        xp_to_next_level=needed,
    )
