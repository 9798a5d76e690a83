from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, redirect, url_for

from config import get_settings_module

from .common.datetime_utils import format_clock
from .common.errors import register_error_handlers
from .common.log import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables, seed_demo_data
from .payroll.controller import register as register_payroll
from .payroll.model import format_money
from .shifts.controller import register as register_shifts
from .timeoff.controller import register as register_timeoff
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "database" / "schema.sql"


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

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
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(db_config=db_config)

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_demo_data(container)
            logger.info("demo seed ready")

    app.extensions["shift_scheduler"] = container
    app.jinja_env.filters["clock"] = format_clock
    app.jinja_env.filters["money"] = format_money

    @app.route("/", endpoint="home")
    def home():
        return redirect(url_for("login"))

    register_error_handlers(app)
    register_users(app, container)
    register_dashboard(app, container)
    register_shifts(app, container)
    register_timeoff(app, container)
    register_payroll(app, container)

    return app
