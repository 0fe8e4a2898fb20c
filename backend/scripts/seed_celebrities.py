#!/usr/bin/env python3
"""
Celebrity Seed Script
Fills an empty directory with the curated set of verified celebrities.

Usage:
    python -m scripts.seed_celebrities

Honours DATA_DIR / DATABASE_URL like the server does.
"""
import sys
import os

# Add the parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from penpal.config import load_settings
from penpal.database import Database
from penpal.logging_config import setup_logging
from penpal.services.seed import seed_celebrities


def main() -> int:
    settings = load_settings()
    setup_logging(settings.log_level)

    database = Database(settings.database_url)
    database.init_db()

    db = database.session()
    try:
        added = seed_celebrities(db)
    finally:
        db.close()
        database.dispose()

    if added:
        print(f"Seeded {added} celebrities.")
    else:
        print("Directory already populated; nothing to do.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
