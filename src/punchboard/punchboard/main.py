from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from flask_socketio import SocketIO

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .realtime.notifier import RealtimeNotifier
from .realtime.socket_handlers import register as register_realtime

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def _prepare_database(settings, db_config: dict, *, debug: bool) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        if debug:
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        if debug:
            logger.info("Demo seed ready")


def create_app(container: Container | None = None) -> Flask:
    """Build the Flask app and its Socket.IO server.

    Pass a prebuilt container (e.g. in-memory repositories) to skip MySQL wiring.
    The SocketIO instance is reachable as ``app.extensions["socketio"]``.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    cors_origins = list(getattr(settings, "CORS_ORIGINS", ["http://localhost:3000"]))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if app.config["DEBUG"]:
            logger.info(
                "settings=%s db=%s@%s:%s/%s",
                settings_module,
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )
        _prepare_database(settings, db_config, debug=app.config["DEBUG"])
        container = build_container(db_config=db_config, notifier=RealtimeNotifier())

    CORS(app, origins=cors_origins, supports_credentials=True)
    socketio = SocketIO(app, cors_allowed_origins=cors_origins)
    app.extensions["container"] = container

    register_attendance(app, container)
    register_realtime(socketio, container.notifier)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "OK", "message": "Punch-board API is running"})

    return app


def run() -> None:
    app = create_app()
    settings = importlib.import_module(get_settings_module())
    port = int(getattr(settings, "PORT", 5000))
    logger.info("Server running on port %d (API http://localhost:%d/api)", port, port)
    app.extensions["socketio"].run(
        app,
        host="0.0.0.0",
        port=port,
        debug=app.config["DEBUG"],
        allow_unsafe_werkzeug=True,
    )


if __name__ == "__main__":
    run()
