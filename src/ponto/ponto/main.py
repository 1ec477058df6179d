from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .punches.controller import register as register_punches
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    punch_mode = getattr(settings, "PUNCH_MODE", "detailed")
    logger.info("Starting ponto: settings=%s punch_mode=%s", settings_module, punch_mode)

    if container is None:
        container = build_container(
            punch_mode=punch_mode,
            workbook_creator=getattr(settings, "WORKBOOK_CREATOR", "Ponto"),
        )

    register_punches(app, container)
    register_reports(app, container)

    return app
