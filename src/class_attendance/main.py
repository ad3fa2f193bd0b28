from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask
from flask_mail import Mail

from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .jobs.controller import register as register_jobs
from .notifications.mailer import FlaskMailMailer

logger = logging.getLogger(__name__)


def create_app(*, container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    for key in dir(settings):
        if key.startswith("MAIL_"):
            app.config[key] = getattr(settings, key)

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

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
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
            apply_schema(conn, str(db_config["database"]))
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))

        mailer = FlaskMailMailer(Mail(app), sender=getattr(settings, "MAIL_DEFAULT_SENDER", None))
        container = build_container(settings=settings, mailer=mailer)

    register_classes(app, container)
    register_attendance(app, container)
    register_jobs(app, container)

    return app
