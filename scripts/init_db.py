from __future__ import annotations

import importlib

from dotenv import load_dotenv

from hr_portal.config import get_settings_module
from hr_portal.database.bootstrap import SCHEMA_PATH, apply_schema
from hr_portal.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    schema_path = getattr(settings, "SCHEMA_PATH", None) or SCHEMA_PATH
    count = apply_schema(DatabaseConnection.get_instance(config), database=config.database, schema_path=schema_path)
    print(
        "OK: Applied schema.sql -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} (statements={count})"
    )


if __name__ == "__main__":
    main()
