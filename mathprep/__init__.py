"""
MathPrep: math-competition practice API.

Question bank, adaptive practice, XP/levels, streaks, leaderboards,
rewards, question flags and friends on top of PostgreSQL.
"""

__version__ = "0.1.0"
