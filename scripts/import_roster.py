"""Replace the student roster from a CSV file (columns: SID, OEN, first_name, last_name).

Usage: python scripts/import_roster.py students.csv
"""

from __future__ import annotations

import argparse
import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from presence_kiosk.core.exceptions import ValidationError
from presence_kiosk.database.connection import DBConfig, DatabaseConnection
from presence_kiosk.students.mysql_student_repository import MySQLStudentRepository
from presence_kiosk.students.service import RosterService

logger = logging.getLogger("import_roster")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("csv_path", type=Path)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_dict(dict(settings.DB_CONFIG)))
    service = RosterService(MySQLStudentRepository(conn))

    try:
        count = service.import_csv_bytes(args.csv_path.read_bytes())
    except ValidationError as e:
        raise SystemExit(f"Invalid roster file: {e}")
    logger.info("Imported %d student(s) from %s", count, args.csv_path)


if __name__ == "__main__":
    main()
