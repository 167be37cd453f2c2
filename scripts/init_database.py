"""
Create the database schema and seed reference data (MPA ratings and genres),
optionally loading directors from a JSON file.
Safe to run repeatedly: existing tables and reference rows are left untouched.
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import argparse
import json
import logging
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from filmorate_service.config import get_database_url
from filmorate_service.models import Base, Director, Genre, MpaRating

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

MPA_RATINGS: Dict[int, str] = {
    1: 'G',
    2: 'PG',
    3: 'PG-13',
    4: 'R',
    5: 'NC-17',
}

GENRES: Dict[int, str] = {
    1: 'Comedy',
    2: 'Drama',
    3: 'Animation',
    4: 'Thriller',
    5: 'Documentary',
    6: 'Action',
}


def create_schema(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    logger.info("Creating tables...")
    Base.metadata.create_all(engine)
    logger.info(f"✓ Schema ready ({len(Base.metadata.tables)} tables)")


def seed_reference_data(db: Session) -> int:
    """
    Insert missing MPA ratings and genres.

    Args:
        db: Database session

    Returns:
        Number of rows inserted
    """
    inserted = 0

    existing_mpa = {row[0] for row in db.query(MpaRating.id).all()}
    for mpa_id, name in MPA_RATINGS.items():
        if mpa_id not in existing_mpa:
            db.add(MpaRating(id=mpa_id, name=name))
            inserted += 1

    existing_genres = {row[0] for row in db.query(Genre.id).all()}
    for genre_id, name in GENRES.items():
        if genre_id not in existing_genres:
            db.add(Genre(id=genre_id, name=name))
            inserted += 1

    db.commit()
    logger.info(f"✓ Seeded {inserted} reference rows")
    return inserted


def load_directors(path: Path) -> Dict[int, str]:
    """
    Read directors from a JSON file.

    Args:
        path: File holding a list of {"id": int, "name": str} objects

    Returns:
        Dict mapping director ID to name
    """
    with open(path, 'r', encoding='utf-8') as f:
        entries = json.load(f)

    directors = {int(entry['id']): entry['name'] for entry in entries}
    logger.info(f"Loaded {len(directors)} directors from {path}")
    return directors


def seed_directors(db: Session, directors: Dict[int, str]) -> int:
    """
    Insert directors that do not exist yet. Existing names are not changed.

    Returns:
        Number of rows inserted
    """
    existing = {row[0] for row in db.query(Director.id).all()}

    inserted = 0
    for director_id, name in directors.items():
        if director_id not in existing:
            db.add(Director(id=director_id, name=name))
            inserted += 1

    db.commit()
    logger.info(f"✓ Seeded {inserted} directors")
    return inserted


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description='Create the Filmorate schema and seed reference data'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='Database URL (default: DATABASE_URL from config)'
    )
    parser.add_argument(
        '--skip-seed',
        action='store_true',
        help='Only create tables, do not insert reference data'
    )
    parser.add_argument(
        '--directors-file',
        type=Path,
        default=None,
        help='JSON file with a list of {"id", "name"} directors to insert'
    )

    args = parser.parse_args()

    database_url = args.database_url or get_database_url()
    if not database_url:
        logger.error("No database URL configured")
        sys.exit(1)

    engine = create_engine(database_url, pool_pre_ping=True)

    try:
        create_schema(engine)

        if not args.skip_seed:
            db = sessionmaker(bind=engine)()
            try:
                seed_reference_data(db)
                if args.directors_file:
                    seed_directors(db, load_directors(args.directors_file))
            finally:
                db.close()

        logger.info("\n✓ Database initialized")

    except Exception as e:
        logger.error(f"\n✗ Error: {e}", exc_info=True)
        sys.exit(1)

    finally:
        engine.dispose()


if __name__ == '__main__':
    main()
