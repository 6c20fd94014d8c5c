import contextvars
import json
import logging
import time

# Bound by BrowseSession for the duration of each operation.
session_id_var = contextvars.ContextVar("session_id", default=None)

_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
QUIET_LOGGERS = ("httpx", "httpcore")


class JsonContextFormatter(logging.Formatter):
    """One JSON object per record: level, logger, event, the browse session id and ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        session_id = session_id_var.get()
        if session_id:
            payload['session_id'] = session_id

        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and key not in payload
        )

        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(settings):
    """Install a single stderr handler on the root logger, JSON when ``LOG_JSON`` is set."""
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(JsonContextFormatter() if settings.LOG_JSON else logging.Formatter(PLAIN_FORMAT))
    root_logger.addHandler(handler)

    # Request lines from the HTTP client would drown the browse events.
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging configured (level={settings.LOG_LEVEL}, json={settings.LOG_JSON})")
