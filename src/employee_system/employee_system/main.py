from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, request

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .auth.settings import AuthSettings
from .common.datetime_utils import utc_now
from .common.http import ok, register_error_handlers
from .container import Container, build_container
from .database.bootstrap import SCHEMA_PATH, apply_schema, ensure_demo_users, list_tables
from .leaves.controller import register as register_leaves
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)



def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        # Missing signing secret is fatal here, before any request is served.
        auth_settings = AuthSettings.from_module(settings)
        db_config = getattr(settings, "DB_CONFIG")

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_users(db_config)

        container = build_container(db_config=db_config, auth_settings=auth_settings)

    logger.info("Employee Management System starting (settings=%s, env=%s)", settings_module, container.auth_settings.env_mode)

    register_error_handlers(app, debug=app.config["DEBUG"])

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.path)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok(message="Server is running", data={"timestamp": utc_now().isoformat() + "Z"})

    register_auth(app, container)
    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_tasks(app, container)

    return app
