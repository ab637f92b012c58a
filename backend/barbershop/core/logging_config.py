"""
Centralized logging configuration for the Barbershop reporting service.

This module provides structured logging with:
- JSON formatting for production
- Console formatting for development
- SQLAlchemy query logging
- Request/response logging
- Log rotation
- Performance metrics

Usage:
    from barbershop.core.logging_config import setup_logging, get_logger

    # In main.py
    setup_logging(app, log_level="INFO", enable_sql_echo=True)

    # In any module
    logger = get_logger(__name__)
    logger.info("Report built", extra={"context": {"unit_id": 3}})
"""

import json
import logging
import logging.handlers
import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flask import Flask, g, request


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs as JSON with timestamp, level, message, and extra context.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = getattr(record, "context", {})

        # Decimal amounts and datetimes show up in report context
        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with colors for development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(record)


def _log_to_file_from_env() -> bool:
    return os.getenv("LOG_TO_FILE", "1").strip().lower() in ("1", "true", "yes")


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: Optional[bool] = None,
    use_json_format: bool = False,
) -> None:
    """
    Configure logging for the Flask application.

    Args:
        app: Flask application instance (required for request/response hooks)
        log_level: Logging level (can be int like logging.INFO or string "INFO")
        enable_sql_echo: Enable SQLAlchemy query logging
        log_to_file: Write logs to rotating file (None reads LOG_TO_FILE)
        use_json_format: Use JSON format instead of console format
    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.INFO)

    if log_to_file is None:
        log_to_file = _log_to_file_from_env()

    log_dir = Path(__file__).parent.parent.parent / "logs"
    early_warnings = []
    if log_to_file:
        try:
            log_dir.mkdir(exist_ok=True)
        except OSError as e:
            # Defer warning until console handler is configured
            early_warnings.append(
                f"Failed to create logs directory: {e}. Logging will only go to console."
            )
            log_to_file = False

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if use_json_format:
        console_formatter: logging.Formatter = JSONFormatter()
    else:
        console_formatter = ConsoleFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    for msg in early_warnings:
        root_logger.warning(msg, extra={"context": {"component": "logging_setup"}})

    if log_to_file:
        file_formatter = JSONFormatter()  # Always JSON for files

        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / "app.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                f"Failed to create file handler for app.log: {e}. "
                "Falling back to console-only logging.",
                extra={"context": {"component": "logging_setup"}},
            )

        try:
            error_handler = logging.handlers.RotatingFileHandler(
                log_dir / "barbershop_errors.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(file_formatter)
            root_logger.addHandler(error_handler)
        except OSError as e:
            root_logger.warning(
                f"Failed to create error file handler: {e}. "
                "Error logs will only go to console.",
                extra={"context": {"component": "logging_setup"}},
            )

    if enable_sql_echo:
        sql_logger = logging.getLogger("sqlalchemy.engine")
        sql_logger.setLevel(logging.INFO)
        sql_logger.propagate = True

    if app is not None:

        @app.before_request
        def log_request():
            g.request_start_time = time.time()
            g.request_id = f"{time.time()}-{id(request)}"
            g.route = (
                request.url_rule.rule if request.url_rule is not None else request.path
            )

            req_logger = logging.getLogger("flask.request")
            req_logger.info(
                f"{request.method} {request.path}",
                extra={
                    "context": {
                        "request_id": g.request_id,
                        "method": request.method,
                        "path": request.path,
                        "route": g.route,
                        "query": request.query_string.decode("utf-8", "replace"),
                        "remote_addr": request.remote_addr,
                    }
                },
            )

        @app.after_request
        def log_response(response):
            if hasattr(g, "request_start_time"):
                duration_ms = (time.time() - g.request_start_time) * 1000
                resp_logger = logging.getLogger("flask.response")
                resp_logger.info(
                    f"{request.method} {request.path} {response.status_code} in {duration_ms:.2f}ms",
                    extra={
                        "context": {
                            "request_id": g.get("request_id"),
                            "method": request.method,
                            "path": request.path,
                            "status_code": response.status_code,
                            "duration_ms": round(duration_ms, 2),
                        }
                    },
                )
            return response

    # Suppress noisy third-party loggers
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    app_logger = logging.getLogger("barbershop")
    app_logger.setLevel(level)
    app_logger.info(
        f"Logging configured: level={level}, sql_echo={enable_sql_echo}, "
        f"log_to_file={log_to_file}, json_format={use_json_format}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_performance(func_name: str, duration_ms: float, **kwargs) -> None:
    """
    Log performance metrics for a function or operation.

    Args:
        func_name: Name of the function or operation
        duration_ms: Execution duration in milliseconds
        **kwargs: Additional context (unit_id, record_count, etc.)
    """
    perf_logger = get_logger("barbershop.performance")
    context = {"function": func_name, "duration_ms": round(duration_ms, 2)}
    context.update(kwargs)
    perf_logger.info(
        f"{func_name} completed in {duration_ms:.2f}ms",
        extra={"context": context},
    )
