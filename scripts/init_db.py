from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.intern_attendance.intern_attendance.database.bootstrap import apply_schema
from src.intern_attendance.intern_attendance.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    schema_path = REPO_ROOT / "database" / "schema.sql"
    count = apply_schema(DatabaseConnection.get_instance(config), schema_path=schema_path)
    print(f"OK: applied {count} statements from schema.sql -> {config.user}@{config.host}:{config.port}/{config.database}")


if __name__ == "__main__":
    main()
