from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.web import error_response, session_role, session_token
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import DomainError
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import SCHEMA_PATH, apply_schema
from .database.connection import DatabaseConnection, DBConfig
from .employees.controller import register as register_employees
from .holidays.controller import register as register_holidays
from .leaves.controller import register as register_leaves

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    backend = getattr(settings, "DATA_BACKEND", "api")
    db_config = getattr(settings, "DB_CONFIG", {})
    logger.info("settings=%s backend=%s", settings_module, backend)

    if container is None:
        if backend == "api" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
            apply_schema(
                conn,
                database=DBConfig.from_dict(db_config).database,
                schema_path=getattr(settings, "SCHEMA_PATH", None) or SCHEMA_PATH,
            )

        container = build_container(
            backend=backend,
            api_base_url=getattr(settings, "API_BASE_URL", ""),
            api_timeout=float(getattr(settings, "API_TIMEOUT_SECONDS", 10)),
            token_provider=session_token,
            role_provider=session_role,
            db_config=db_config,
            leave_lead_days=getattr(settings, "LEAVE_LEAD_DAYS", 0),
            demo_users=getattr(settings, "DEMO_USERS", []),
        )

    app.extensions["hr_portal"] = container
    app.register_error_handler(DomainError, error_response)

    register_auth(app, container)
    register_leaves(app, container)
    register_holidays(app, container)
    register_attendance(app, container)
    register_employees(app, container)
    register_dashboard(app, container)

    return app
