"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at process start (see
`localshortener.__main__`) before any other logging is done.

Logging format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "localshortener.api.routes",
    "message": "Short link created. Responding with 201.",
    "event": "SHORT_LINK_CREATED",
    "code": "q3ZL0a"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from localshortener.constants import ENV


# Attributes every LogRecord carries; anything else was passed via `extra`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.INFO, '', 0, '', None, None))) | {
    'message',
    'asctime',
    'color_message',  # set by uvicorn
}

# Positional args of uvicorn's access log line: '%s - "%s %s HTTP/%s" %d'
_ACCESS_FIELDS = ('client', 'method', 'path', 'httpVersion', 'status')


class JsonFormatter(logging.Formatter):
    """JSON formatter for application and uvicorn records

    `extra` fields are attached as top-level keys. uvicorn access records
    additionally get their request line split into fields, so redirects and
    shorten calls can be filtered by path and status.
    """

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.name == 'uvicorn.access' and isinstance(record.args, tuple) and len(record.args) == len(_ACCESS_FIELDS):
            log.update(zip(_ACCESS_FIELDS, record.args))

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {
                # Route uvicorn through the root JSON handler instead of its own
                'uvicorn': {'handlers': [], 'propagate': True},
                'uvicorn.error': {'handlers': [], 'propagate': True},
                'uvicorn.access': {'handlers': [], 'propagate': True},
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
