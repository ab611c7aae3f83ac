from __future__ import annotations

import importlib
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dotenv import load_dotenv

from irs_timesheet.config import get_settings_module
from irs_timesheet.database.bootstrap import apply_schema
from irs_timesheet.database.seed import DEMO_USERS, seed_demo_data
from irs_timesheet.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    container = build_container(db_config=db_config)
    result = seed_demo_data(container.identity, container.users_repo, container.timesheets_repo)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(accounts={result['accounts']}, new weeks={result['weeks']})"
    )
    print("Login credentials:")
    for u in DEMO_USERS:
        print(f"  {u['role'].value}: {u['email']} / {u['password']}")


if __name__ == "__main__":
    main()
