from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, session

from .common.web import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .reports.controller import register as register_reports
from .timesheets.controller import register as register_timesheets
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            notify_channel=getattr(settings, "NOTIFY_CHANNEL", "share"),
            smtp_config=getattr(settings, "SMTP_CONFIG", None),
        )

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            from .database.seed import seed_demo_data

            seed_demo_data(container.identity, container.users_repo, container.timesheets_repo)

    @app.before_request
    def refresh_session_user():
        # Role or block changes take effect on the next request.
        user_id = session.get("user_id")
        if not user_id:
            return None
        s_user = container.auth_service.current_account(str(user_id))
        if s_user is None:
            session.clear()
            return None
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        return None

    register_error_handlers(app)
    register_users(app, container)
    register_timesheets(app, container)
    register_reports(app, container)

    return app
