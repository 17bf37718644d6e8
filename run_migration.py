"""
Quick script to bring the database schema up to date.
Run this with: python run_migration.py

Uses DATABASE_URL (or DB_URL) from the environment / .env, same as the API.
"""
import os

from alembic import command
from alembic.config import Config

from jobtracker.core.config import settings

ALEMBIC_INI = os.path.join(os.path.dirname(os.path.abspath(__file__)), "alembic.ini")


def main() -> int:
    print("Connecting to database...")
    config = Config(ALEMBIC_INI)

    try:
        command.upgrade(config, "head")
    except Exception as e:
        print(f"\n❌ Migration failed: {e}")
        print("\nPlease check:")
        print("  1. Database is running")
        print("  2. DATABASE_URL is correct")
        print("  3. You have permission to create tables")
        return 1

    print("\n✅ All migrations completed successfully!")
    print(f"Tables users and jobs are ready for {settings.PROJECT_NAME}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
