from __future__ import annotations

import importlib
import sys

from dotenv import load_dotenv

from daily_report.config import get_settings_module
from daily_report.core.enums import ErrorKind
from daily_report.core.messages import error_message
from daily_report.database.bootstrap import ensure_admin_employee
from daily_report.employees.password_policy import PasswordPolicy


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    policy = PasswordPolicy(hash_method=settings.PASSWORD_HASH_METHOD)
    result = policy.validate(settings.ADMIN_PASSWORD)
    if result is not ErrorKind.SUCCESS:
        print(f"ERROR: ADMIN_PASSWORD rejected: {error_message(result)}", file=sys.stderr)
        return 1

    created = ensure_admin_employee(
        db_config,
        code=settings.ADMIN_CODE,
        name=settings.ADMIN_NAME,
        password_hash=policy.hash(settings.ADMIN_PASSWORD),
    )
    state = "created" if created else "already present"
    print(
        f"OK: Administrator '{settings.ADMIN_CODE}' {state} -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
