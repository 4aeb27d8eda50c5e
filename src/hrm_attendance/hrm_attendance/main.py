from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .attendance.controller import register as register_attendance
from .timesheet.controller import register as register_timesheet

log = logging.getLogger(__name__)


def create_app(*, container=None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    api_config = getattr(settings, "API_CONFIG")
    log.info("settings=%s api=%s", settings_module, api_config.get("url"))

    container = container or build_container(api_config=api_config)

    register_attendance(app, container)
    register_timesheet(app, container)

    return app
