"""Attendance check-in service - application factory."""
import json
import logging
import os

import click
from flask import Flask, jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from config import get_config
from utils.db import init_db_connection
from utils.errors import AppError
from utils.helpers import error_response

# Import controllers
from controllers.form_controller import form_bp
from controllers.auth_controller import auth_bp
from controllers.config_controller import config_bp
from controllers.media_controller import media_bp
from controllers.attendance_controller import attendance_bp


def create_app(config_name=None):
    """Application factory pattern."""
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))  # Load configuration class

    setup_logging(app)
    init_db_connection(app)  # Initialize MongoDB connection

    # Register Blueprints
    app.register_blueprint(form_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(config_bp)
    app.register_blueprint(media_bp)
    app.register_blueprint(attendance_bp)

    register_error_handlers(app)
    register_commands(app)

    @app.route("/health")
    def health_check():
        return jsonify({
            "status": "healthy",
            "service": "Attendance Check-in",
            "version": "1.0.0",
        })

    return app


def register_error_handlers(app):
    """Map every failure to {success: false, error: <message>}; no tracebacks leak."""

    @app.errorhandler(AppError)
    def handle_app_error(error):
        if error.status_code >= 500:
            app.logger.error("%s: %s", type(error).__name__, error.message)
        return error_response(error.message, error.status_code)

    @app.errorhandler(PyMongoError)
    def handle_db_error(error):
        app.logger.error("Database error: %s", error)
        return error_response(str(error), 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        app.logger.exception("Unhandled error")
        return error_response("Server Error", 500)


def setup_logging(app):
    """Setup application logging."""
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(level)

    if not app.debug and not app.testing:
        log_file = app.config.get("LOG_FILE", os.path.join("logs", "app.log"))
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
        ))
        file_handler.setLevel(logging.INFO)
        logging.getLogger().addHandler(file_handler)

        app.logger.info("Attendance check-in service startup")


def register_commands(app):
    """Administrative commands; configuration is never written over HTTP."""
    from models.configuration import Configuration

    @app.cli.command("set-passkey")
    @click.argument("pass_key")
    def set_passkey(pass_key):
        """Set the shared passkey gating the form."""
        if not pass_key:
            raise click.BadParameter("passkey must not be empty")
        Configuration.upsert(Configuration.PASSKEY, {"passKey": pass_key})
        click.echo("PassKey updated.")

    @app.cli.command("seed-config")
    @click.argument("config_file", type=click.File("r"))
    def seed_config(config_file):
        """Load form options (apkVersion, presenceType, workType, latitude, longitude) from JSON."""
        data = json.load(config_file)
        fields = {key: data[key] for key in Configuration.OPTION_FIELDS + ("latitude", "longitude") if key in data}
        config = Configuration.upsert(Configuration.FORM, fields)
        click.echo(
            f"Form configuration saved: {len(config.apk_version)} APK versions, "
            f"{len(config.presence_type)} presence types, {len(config.work_type)} work types."
        )
        if data.get("passKey") not in (None, ""):
            Configuration.upsert(Configuration.PASSKEY, {"passKey": str(data["passKey"])})
            click.echo("PassKey updated.")

