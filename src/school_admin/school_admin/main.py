from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, current_app

from config import get_settings_module
from config.logging import configure_logging

from .container import Container, build_container
from .core.constants import DETENTION_POINTS_THRESHOLD, SESSIONS_PER_YEAR
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables

logger = logging.getLogger(__name__)

EXTENSION_KEY = "school_admin"
SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DETENTION_POINTS_THRESHOLD"] = int(
        getattr(settings, "DETENTION_POINTS_THRESHOLD", DETENTION_POINTS_THRESHOLD)
    )
    app.config["SESSIONS_PER_YEAR"] = int(getattr(settings, "SESSIONS_PER_YEAR", SESSIONS_PER_YEAR))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
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
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_demo_data(db_config)

    app.extensions[EXTENSION_KEY] = build_container(
        db_config=db_config,
        detention_threshold=app.config["DETENTION_POINTS_THRESHOLD"],
        sessions_per_year=app.config["SESSIONS_PER_YEAR"],
    )
    return app


def get_container(app: Flask | None = None) -> Container:
    """Container of ``app``, or of the active Flask app when omitted."""
    app = app or current_app
    return app.extensions[EXTENSION_KEY]
