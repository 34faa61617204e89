from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format=getattr(settings, "LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )
    logger.info("payroll-system settings=%s", settings_module)

    container = build_container(payroll_config=getattr(settings, "PAYROLL_CONFIG", {}))
    app.extensions["container"] = container

    register_payroll(app, container)

    return app
