from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .allotments.controller import register as register_allotments
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    StateError,
    StorageUnavailableError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)


def _status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ConflictError):
        return 409
    if isinstance(error, StateError):
        return 422
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(error: DomainError):
        return jsonify(error.to_dict()), _status_for(error)

    @app.errorhandler(StorageUnavailableError)
    def _storage_unavailable(error: StorageUnavailableError):
        logger.error("storage unavailable: %s", error)
        return jsonify({"error": error.kind, "message": "storage temporarily unavailable, try again"}), 503


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config, settings=settings)

    register_error_handlers(app)
    register_shifts(app, container)
    register_allotments(app, container)
    register_attendance(app, container)

    return app
