# scripts/seed_data.py
import sys
import argparse
from pathlib import Path

# Add parent directory to path so we can import team_directory modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from team_directory.core.config import Settings
from team_directory.core.logging import configure_logging, logger
from team_directory.db.init_db import init_db
from team_directory.db.session import Database


def seed_database(database: Database) -> bool:
    """Seed the database with initial data"""
    db = database.session()
    try:
        return init_db(db)
    finally:
        db.close()


def main():
    """Main entry point for the script"""
    parser = argparse.ArgumentParser(description='Seed database for the Team Directory API')
    parser.add_argument('--database-url', type=str, help='Override SQLALCHEMY_DATABASE_URI')
    parser.add_argument('--create-tables', action='store_true', help='Create missing tables first')

    args = parser.parse_args()

    settings = Settings(SQLALCHEMY_DATABASE_URI=args.database_url) if args.database_url else Settings()
    configure_logging(settings)
    database = Database.from_settings(settings)

    try:
        if args.create_tables:
            database.create_all()
        logger.info("Seeding database...")
        if seed_database(database):
            logger.info("Database seeded successfully.")
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
