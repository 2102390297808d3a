from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from .attendance.controller import register as register_attendance
from .attendance.scheduler import build_scheduler
from .activities.controller import register as register_activities
from .blocks.controller import register as register_blocks
from .common.log import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_default_admin, list_tables
from .rooms.controller import register as register_rooms
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Passing a prebuilt `container` skips database bootstrap and the scheduler,
    which is how the tests run the HTTP surface against in-memory stores.
    """

    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["UPLOAD_FOLDER"] = getattr(settings, "UPLOAD_FOLDER", "uploads")
    CORS(app)

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    injected = container is not None
    if not injected:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            ensure_default_admin(
                db_config,
                username=getattr(settings, "DEFAULT_ADMIN_USERNAME", "admin"),
                password=getattr(settings, "DEFAULT_ADMIN_PASSWORD", "admin123"),
            )
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        container = build_container(db_config=db_config, settings=settings)

    app.extensions["hostel_container"] = container

    register_users(app, container)
    register_blocks(app, container)
    register_rooms(app, container)
    register_students(app, container)
    register_activities(app, container)
    register_attendance(app, container)

    if not injected and bool(getattr(settings, "ENABLE_SCHEDULER", False)):
        app.extensions["hostel_scheduler"] = start_scheduler(container, settings)

    return app


def start_scheduler(container: Container, settings) -> BackgroundScheduler:
    """Start the nightly sweep and stop it when the interpreter exits."""

    scheduler = build_scheduler(
        container.absence_sweeper,
        container.clock,
        hour=int(getattr(settings, "SWEEP_HOUR", 23)),
        minute=int(getattr(settings, "SWEEP_MINUTE", 59)),
    )
    scheduler.start()
    atexit.register(scheduler.shutdown, wait=False)
    return scheduler
