"""
Bulk question import from a JSON file.

Usage:
    python -m mathprep.scripts.import_questions questions.json
    python -m mathprep.scripts.import_questions questions.json --batch-size 50
    python -m mathprep.scripts.import_questions questions.json --dry-run

The file holds a JSON array of question records using either "options"
(a list) or "answer_choices" ({"A": ..., "E": ...}).

Dependencies: mathprep.application.services, mathprep.boundary.db
System role: Operator tool for loading the question bank
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

from mathprep.application.services.question_service import QuestionService
from mathprep.boundary.db import dispose_async_engine, get_async_session_factory
from mathprep.configs import get_settings
from mathprep.core.exceptions import MathPrepException
from mathprep.core.importer import normalize_questions

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def load_payload(path: Path) -> object:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


async def run_import(payload: object, batch_size: int) -> dict:
    SessionFactory = get_async_session_factory()
    try:
        async with SessionFactory() as session:
            return await QuestionService(session, import_batch_size=batch_size).import_questions(payload)
    finally:
        await dispose_async_engine()


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m mathprep.scripts.import_questions FILE [--batch-size N] [--dry-run]")
        sys.exit(1)

    path = Path(sys.argv[1])
    batch_size = get_settings().practice.import_batch_size
    dry_run = "--dry-run" in sys.argv

    if "--batch-size" in sys.argv:
        idx = sys.argv.index("--batch-size")
        if idx + 1 < len(sys.argv) and sys.argv[idx + 1].isdigit() and int(sys.argv[idx + 1]) > 0:
            batch_size = int(sys.argv[idx + 1])
        else:
            logger.error("--batch-size needs a positive integer")
            sys.exit(1)

    try:
        payload = load_payload(path)
        if dry_run:
            rows = normalize_questions(payload)
            logger.info(f"Dry run: {len(rows)} question(s) valid in {path}")
            sys.exit(0)

        result = asyncio.run(run_import(payload, batch_size))
        logger.info(f"Imported {result['imported']} question(s) in {result['batches']} batch(es)")
        sys.exit(0)

    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read {path}: {e}")
        sys.exit(1)
    except MathPrepException as e:
        logger.error(f"Invalid import file: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
