#!/usr/bin/env python3
"""
Create the PetMeal tables in the configured database (DATABASE_URL).
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect

from domain.models.database import engine, init_database

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("init_db")


def main() -> int:
    try:
        init_database()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}", exc_info=True)
        return 1

    tables = inspect(engine).get_table_names()
    logger.info(f"Database ready with {len(tables)} tables: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
