"""Wipe the database and load the demo data.

Run after scripts/init_db.py. Logs in afterwards with admin@admin.com / admin123
or john@example.com / password123.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv  # noqa: E402

from config import get_settings_module  # noqa: E402
from shift_scheduler.common.log import configure_logging  # noqa: E402
from shift_scheduler.container import build_container  # noqa: E402
from shift_scheduler.database.bootstrap import seed_demo_data  # noqa: E402


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    seed_demo_data(build_container(db_config=db_config))

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
