from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_TRANSCRIPT_PATH, RECONCILE_INTERVAL_SECONDS, STALE_AFTER_MINUTES
from .database.bootstrap import apply_schema, list_tables
from .events.controller import register as register_events
from .presence.controller import register as register_presence
from .students.controller import register as register_students
from .transfers.controller import register as register_transfers

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

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

        container = build_container(
            db_config=db_config,
            transcript_path=getattr(settings, "TRANSCRIPT_PATH", DEFAULT_TRANSCRIPT_PATH),
            stale_after_minutes=int(getattr(settings, "STALE_AFTER_MINUTES", STALE_AFTER_MINUTES)),
            reconcile_interval_seconds=float(getattr(settings, "RECONCILE_INTERVAL_SECONDS", RECONCILE_INTERVAL_SECONDS)),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(container.conn, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

        if bool(getattr(settings, "RECONCILER_ENABLED", True)):
            container.reconciler_thread.start()

    app.extensions["presence_kiosk"] = container

    register_presence(app, container)
    register_transfers(app, container)
    register_events(app, container)
    register_students(app, container)

    return app
