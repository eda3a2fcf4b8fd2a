import os

import structlog
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from flasgger import Flasgger

from config import config
from .extensions import db, cache
from .logging_config import configure_logging, init_request_logging

log = structlog.get_logger()


def _load_settings(app):
    # Tables may not exist yet: tests create them per case, and
    # SKIP_SETTINGS_LOAD=1 lets `flask db upgrade` run on a fresh database.
    if app.config.get("TESTING", False) or os.getenv('SKIP_SETTINGS_LOAD') == '1':
        return
    from .settings import settings
    try:
        settings.load()
    except Exception as e:
        log.warning("settings.load.skipped", error=str(e))


def create_app(config_name=None):
    """
    Application factory function.
    """
    if config_name is None:
        config_name = os.getenv('FLASK_CONFIG', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    # Category names and prompts are mostly Chinese; keep them readable in JSON.
    app.json.ensure_ascii = False

    configure_logging(
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        is_debug=app.config.get("DEBUG", False)
    )
    init_request_logging(app)

    db.init_app(app)
    cache.init_app(app)
    Migrate(app, db)

    with app.app_context():
        # Models must be imported before create_all / migrations see the metadata.
        from . import models  # noqa: F401
        _load_settings(app)

        from .api.v1 import api_v1
        app.register_blueprint(api_v1, url_prefix='/api/v1')

        from .api.swagger_helpers import apply_swagger_extras
        apply_swagger_extras(app)

    Flasgger(app)
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    @app.after_request
    def set_security_headers(response):
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    return app


__all__ = ["create_app", "db", "cache"]
