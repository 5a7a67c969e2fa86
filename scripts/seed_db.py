from __future__ import annotations

import importlib
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workforce_hub.workforce_hub.common.logging_setup import setup_logging
from src.workforce_hub.workforce_hub.database.bootstrap import apply_seed_sql, ensure_admin_user

logger = logging.getLogger("workforce_hub.scripts.seed_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(level=str(getattr(settings, "LOG_LEVEL", "INFO")))
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_admin_user(
        db_config,
        username=os.getenv("ADMIN_USERNAME", "admin"),
        password=os.getenv("ADMIN_PASSWORD", "admin123"),
    )
    logger.info(
        "Seeded database -> %s@%s:%s/%s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )


if __name__ == "__main__":
    main()
