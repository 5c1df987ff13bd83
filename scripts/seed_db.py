from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_system.employee_system.database.bootstrap import DEMO_USERS, ensure_demo_users

logger = logging.getLogger("seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(db_config)

    logger.info("Seeded %s/%s", db_config.get("host"), db_config.get("database"))
    for _, email, password, role in DEMO_USERS:
        logger.info("  %-6s %s / %s", role.value, email, password)


if __name__ == "__main__":
    main()
