"""
Creates the SynergySphere tables in the database named by DATABASE_URL.

    python setup_db.py            # create missing tables
    python setup_db.py --reset    # drop everything first
    python setup_db.py --describe # also log each table's columns
"""
import argparse

from synergysphere.config.settings import settings
from synergysphere.database.session import Database
from synergysphere.utils.db_utils import log_table_schema, setup_schema
from synergysphere.utils.logger import setup_logging

def main():
    parser = argparse.ArgumentParser(description="Create the SynergySphere database schema.")
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    parser.add_argument("--describe", action="store_true", help="log the columns of every table")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL)
    database = Database.from_settings(settings)
    try:
        database.ping()
        tables = setup_schema(database, reset=args.reset)
        if args.describe:
            for table in tables:
                log_table_schema(database.engine, table)
    finally:
        database.dispose()

if __name__ == "__main__":
    main()
