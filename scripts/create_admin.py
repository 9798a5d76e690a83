"""Create an admin account.

Signup only ever creates employees, so the first admin comes from here.
"""

from __future__ import annotations

import argparse
import getpass
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv  # noqa: E402

from config import get_settings_module  # noqa: E402
from shift_scheduler.container import build_container  # noqa: E402
from shift_scheduler.core.enums import Role  # noqa: E402
from shift_scheduler.core.exceptions import DomainError  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an admin account.")
    parser.add_argument("--name", required=True, help="Display name")
    parser.add_argument("--email", required=True, help="Login email (will be lower-cased)")
    parser.add_argument("--phone", default="", help="Optional phone number")
    parser.add_argument("--password", help="Password (omit to be prompted securely)")
    return parser.parse_args()


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def main() -> None:
    args = _parse_args()
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))

    try:
        admin = container.user_service.create_account(
            name=args.name,
            email=args.email,
            password=args.password or _prompt_password(),
            role=Role.ADMIN,
            phone=args.phone,
        )
    except DomainError as e:
        raise SystemExit(f"Could not create admin: {e}")

    print(f"Created admin: id={admin.user_id} email={admin.email}")


if __name__ == "__main__":
    main()
