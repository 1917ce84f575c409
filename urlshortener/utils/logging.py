"""JSON-lines logging for the Lambda handlers.

`initialize_logging()` runs from each Lambda package's `__init__.py`, before
any handler code logs. Every record becomes one JSON object on stdout
(CloudWatch picks it up as is), with `extra` fields promoted to top-level keys:

{
    "timestamp": "2025-10-15T00:00:00.000Z",
    "level": "INFO",
    "logger": "urlshortener.lambdas.redirect_url.app",
    "message": "Redirecting client to target URL. Responding with 301.",
    "shortcode": "8ec596c44bd62b6b",
    "event": "REDIRECT_SUCCESS"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlshortener.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.INFO, '', 0, '', (), None))) | {'message', 'asctime'}

# Third-party loggers which flood DEBUG output with wire-level detail
_QUIET_LOGGERS = ('botocore', 'boto3', 'urllib3')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, its `extra` fields and any traceback as one JSON line"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        moment = datetime.fromtimestamp(record.created, tz=UTC)
        return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Exceptions and datetimes passed via `extra` are rendered with str()
        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Route all logging to stdout as JSON lines.

    Args:
        level (str | None): root level; defaults to $LOG_LEVEL, then INFO.
    """
    level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
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
            'root': {'level': level, 'handlers': ['stdout']},
            'loggers': {name: {'level': 'WARNING'} for name in _QUIET_LOGGERS},
        }
    )
