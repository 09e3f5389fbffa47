"""Logging setup for the command line."""

import logging

LOG_FORMAT = "%(levelname)s: %(message)s"
REDACTED = "***REDACTED***"


class TokenRedactionFilter(logging.Filter):
    """Logging filter that replaces a raw token with ``***REDACTED***``."""

    def __init__(self, token: str) -> None:
        super().__init__()
        self._token = token

    def _redact(self, value: object) -> object:
        if self._token and self._token in str(value):
            return str(value).replace(self._token, REDACTED)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if self._token and self._token in str(record.msg):
            record.msg = str(record.msg).replace(self._token, REDACTED)
        if record.args:
            args = record.args
            if isinstance(args, tuple):
                record.args = tuple(self._redact(a) for a in args)
            elif isinstance(args, dict):
                record.args = {k: self._redact(v) for k, v in args.items()}
        return True


def setup_logging(verbose: bool = False, token: str = "") -> None:
    """Configure logging for the CLI.

    Debug output includes request URLs, so the token is redacted from every
    handler of the root logger when known.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)

    if token:
        for handler in logging.getLogger().handlers:
            handler.addFilter(TokenRedactionFilter(token))
