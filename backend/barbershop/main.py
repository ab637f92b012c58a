import logging
import os

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from barbershop.core.api_utils import api_response

# Get logger for this module
logger = logging.getLogger(__name__)

# Load environment variables conditionally
# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()


def _mask_url_password(url: str) -> str:
    """Hide the password part of a database URL before logging it."""
    if "@" not in url or "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{host}"


def create_app() -> Flask:
    env = os.getenv("FLASK_ENV", "development")
    is_production = env == "production"

    app = Flask(__name__)

    testing_env = os.getenv("TESTING", "").lower().strip()
    if testing_env in ("true", "1", "yes"):
        app.config["TESTING"] = True

    # Keep report payload keys in the order the services build them
    app.json.sort_keys = False

    from barbershop.core.logging_config import setup_logging

    setup_logging(
        app=app,
        log_level=os.getenv("LOG_LEVEL", "INFO" if is_production else "DEBUG"),
        enable_sql_echo=os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes"),
        use_json_format=is_production,  # JSON logs in production, colored in dev
    )

    from barbershop.core.config import log_report_config, log_timezone_config

    log_timezone_config()
    log_report_config()

    logger.info(
        "Database configured",
        extra={
            "context": {
                "environment": env,
                "database_url": _mask_url_password(
                    os.getenv("DATABASE_URL", "sqlite:///barbershop.db")
                ),
            }
        },
    )

    from barbershop.controllers.financeiro_controller import financeiro_bp
    from barbershop.controllers.relatorios_controller import relatorios_bp

    app.register_blueprint(financeiro_bp)
    app.register_blueprint(relatorios_bp)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return api_response(False, error.description, status_code=error.code)

    @app.route("/health", methods=["GET"])
    def health():
        return api_response(True, "ok")

    return app
