"""Structured (JSON lines) logging for every shorty entry point

`initialize_logging()` must run once per process before anything is logged:
the Lambda handler packages call it on import, `shorty-server` and
`shorty-keys` call it in `main()`.

Modules log through `logging.getLogger(__name__)` and attach context with
`extra=`; each extra becomes a top-level field of the JSON line:

    >>> logger.warning('Short ID collision, drawing a new one.', extra={'shortId': 'a1B2c3D4e5', 'attempt': 2})

    {"timestamp": "2025-12-26T12:00:00.000Z", "level": "WARNING",
     "logger": "shorty.core.id_generator", "message": "Short ID collision, drawing a new one.",
     "shortId": "a1B2c3D4e5", "attempt": 2}

Rejected requests are logged with an `event` field holding the error code
returned to the client (e.g. "shortener:rate_limit_exceeded").
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shorty.constants import ENV


# Attributes every LogRecord carries; anything else on a record came from `extra=`
RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', None, None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render a record and its `extra` fields as one JSON object per line"""

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
        log.update((key, value) for key, value in vars(record).items() if key not in RECORD_ATTRS and key not in log)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Redis errors, URLs with odd types, etc. are rendered with str()
        return json.dumps(log, default=str)


def initialize_logging() -> None:
    """Send JSON lines to stdout (CloudWatch on Lambda) at the LOG_LEVEL level (default INFO)."""
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
            'root': {
                'level': os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper(),
                'handlers': ['stdout'],
            },
        }
    )
