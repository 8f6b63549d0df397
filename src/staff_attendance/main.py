from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from .api.controller import register as register_api
from .container import build_container
from .settings import get_settings_module
from .store.repository import RecordStore

logger = logging.getLogger(__name__)


def load_settings(settings_module: Optional[str] = None) -> Any:
    load_dotenv(override=False)
    return importlib.import_module(settings_module or get_settings_module())


def create_app(*, settings: Any = None, store: Optional[RecordStore] = None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "DEBUG" if app.config["DEBUG"] else "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    container = build_container(settings=settings, store=store)
    logger.info(
        "staff-attendance starting (settings=%s, store=%s)",
        getattr(settings, "__name__", type(settings).__name__),
        type(container.store).__name__,
    )

    register_api(app, container)
    app.extensions["staff_attendance"] = container

    return app
