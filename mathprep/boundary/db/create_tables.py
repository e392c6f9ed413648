"""
Database table management script.

Creates all tables defined in ORM models and seeds the default badge
catalogue.

Dependencies: sqlalchemy, mathprep.configs
System role: Database schema initialization

Usage:
    python -m mathprep.boundary.db.create_tables          # create + seed
    python -m mathprep.boundary.db.create_tables --drop   # drop everything
"""

import sys

from sqlalchemy import select
from sqlalchemy.orm import Session

from mathprep.boundary.db.base import Base
from mathprep.boundary.db.connection import get_engine, get_session_factory
from mathprep.boundary.db.models import BadgeModel  # registers every model with Base.metadata
from mathprep.core.rewards import DEFAULT_BADGES


def seed_badges(session: Session) -> int:
    """
    Insert catalogue badges that are missing by name.

    Returns:
        int: Number of badges inserted
    """
    existing = set(session.execute(select(BadgeModel.name)).scalars().all())
    added = 0
    for badge in DEFAULT_BADGES:
        if badge["name"] in existing:
            continue
        session.add(BadgeModel(**badge))
        added += 1
    session.commit()
    return added


def create_all_tables() -> None:
    """
    Create all database tables and seed badges.

    Idempotent: CREATE TABLE IF NOT EXISTS per model and seeding skips
    badges that already exist.

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully.")

    SessionFactory = get_session_factory()
    with SessionFactory() as session:
        added = seed_badges(session)
    print(f"Seeded {added} badge(s).")


def drop_all_tables() -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    print("All tables dropped successfully.")


if __name__ == "__main__":
    if "--drop" in sys.argv[1:]:
        drop_all_tables()
    else:
        create_all_tables()
