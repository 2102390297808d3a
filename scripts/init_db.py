from __future__ import annotations

import importlib

from dotenv import load_dotenv

from hostel_system.common.log import configure_logging
from hostel_system.config import get_settings_module
from hostel_system.database.bootstrap import apply_schema, ensure_default_admin, list_tables


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    created = ensure_default_admin(
        db_config,
        username=settings.DEFAULT_ADMIN_USERNAME,
        password=settings.DEFAULT_ADMIN_PASSWORD,
    )
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)}, admin {'created' if created else 'exists'})"
    )


if __name__ == "__main__":
    main()
