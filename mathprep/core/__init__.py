"""
Core domain logic.

Pure, stateless transforms recomputed from stored rows on every request:
adaptive selection, streaks, XP/levels, scoring, leaderboard aggregation,
rewards, test assembly and question import normalization.
"""
