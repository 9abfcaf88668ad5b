"""Structured (one JSON object per line) logging for the link lifecycle

IMPORTANT: Call `initialize_logging()` at the composition root before any
other logging is done (`LinkShorterApp` does this when asked to).

Every line carries the four base fields plus whatever the call site passes via
`extra` (shortcode, ownerId, event, ...):
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkshorter.services.link_service",
    "message": "Created short link.",
    "shortcode": "jH1OQp"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkshorter.constants import ENV
from linkshorter.exceptions import BadConfigurationError


DEFAULT_LOG_LEVEL = 'INFO'

# Attributes every LogRecord carries, whatever the Python version. Anything
# else on a record came in through `extra`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render a LogRecord and its `extra` fields as a single JSON line"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        moment = datetime.fromtimestamp(record.created, tz=UTC)
        return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update({key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS})

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = self.formatStack(record.stack_info)

        # Owner UUIDs, datetimes and models fall back to str()
        return json.dumps(entry, default=str)


def resolve_log_level(level: str | None = None) -> str:
    """Pick the log level name: explicit argument, then LOG_LEVEL, then INFO.

    Raises:
        BadConfigurationError: If the name is not a level the logging module knows.
    """
    name = (level or os.getenv(ENV.App.LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    if name not in logging.getLevelNamesMapping():
        raise BadConfigurationError(f"Unknown log level {name!r} (set via '{ENV.App.LOG_LEVEL}' or initialize_logging()).")
    return name


def initialize_logging(level: str | None = None) -> None:
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {'level': resolve_log_level(level), 'handlers': ['stdout']},
        }
    )
