from __future__ import annotations

import importlib

from dotenv import load_dotenv
from flask import Flask

from .common.logger import setup_logger
from .config import get_settings_module
from .container import build_container
from .dashboard.controller import register as register_dashboard


def load_settings():
    """Load .env (without overriding the real environment) and import the settings module."""
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_app(*, output_dir: str | None = None) -> Flask:
    settings = load_settings()
    app = Flask(__name__)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["OUTPUT_DIR"] = output_dir or getattr(settings, "OUTPUT_DIR")

    logger = setup_logger(level=getattr(settings, "LOG_LEVEL", "INFO"))
    logger.debug("settings=%s data=%s", settings.__name__, app.config["OUTPUT_DIR"])

    container = build_container(output_dir=app.config["OUTPUT_DIR"])
    register_dashboard(app, container)

    return app
