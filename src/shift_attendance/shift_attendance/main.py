from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_setup import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_REPORT_BANDS, DEFAULT_STAFF_SLOTS
from .payroll.controller import register as register_payroll
from .shift_requests.controller import register as register_shift_requests
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["REPORT_BANDS"] = tuple(getattr(settings, "REPORT_BANDS", DEFAULT_REPORT_BANDS))
    app.config["STAFF_SLOTS"] = tuple(getattr(settings, "STAFF_SLOTS", DEFAULT_STAFF_SLOTS))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("Starting with settings=%s", settings_module)
        container = build_container(db_config=db_config)

    register_shift_requests(app, container)
    register_shifts(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app
