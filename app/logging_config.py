import logging
import sys
import uuid

import structlog
from flask import g, request
from structlog.types import Processor


SERVICE_NAME = "promptminder"


def _add_service(_, __, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(log_level: str = "INFO", is_debug: bool = False):
    """
    Route structlog through the standard logging module.

    Debug runs render colored console lines, every other run writes one JSON
    object per line with non-ASCII text (category names, prompt titles) kept
    readable.
    """
    level = str(log_level or "INFO").upper()

    # force=True: each create_app() in the test suite reapplies the level.
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.dict_tracebacks,
        structlog.processors.UnicodeDecoder(),
    ]
    if is_debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).info(
        "logging.configured", mode="console" if is_debug else "json", level=level
    )


def init_request_logging(app):
    """Bind a request id, method and path to every event logged during a request."""
    log = structlog.get_logger("promptminder.http")

    @app.before_request
    def _bind_request_context():
        structlog.contextvars.clear_contextvars()
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id, method=request.method, path=request.path
        )

    @app.after_request
    def _log_response(response):
        response.headers["X-Request-ID"] = g.get("request_id", "")
        log.debug("http.response", status=response.status_code)
        return response
