#!/usr/bin/env python3
"""
Create the employee database and load the sample employees.

The schema is created (or migrated) first; the two sample employees are
only inserted when the ``employees`` table is empty, so running the
script twice is harmless.

Usage:
    python seed_employees.py --db ./employee.db
"""

import argparse
import asyncio
import sys

from employee_api.app.core.db import get_database_path, init_db
from employee_api.app.core.logging_config import setup_logging
from employee_api.app.core.seed import seed_employees
from employee_api.app.services.employee_repository import SqliteEmployeeRepository


def main() -> int:
    ap = argparse.ArgumentParser(description="Create and seed the employee database (SQLite).")
    ap.add_argument("--db", help="Path to the SQLite DB file (defaults to DATABASE_URL or ./employee.db)")
    ap.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = ap.parse_args()

    setup_logging(args.log_level)
    db_path = get_database_path(args.db)
    init_db(db_path)

    inserted = asyncio.run(seed_employees(SqliteEmployeeRepository(db_path)))
    if inserted:
        print(f"[+] Inserted {inserted} employees into {db_path}")
    else:
        print(f"[=] {db_path} already contains employees; nothing inserted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
