from __future__ import annotations

import logging
import re


class SafeSecretFormatter(logging.Formatter):
    _patterns = [
        (re.compile(r"(\bkey=)[^&\s]+"), r"\1[REDACTED]"),
        (re.compile(r"(['\"](?:api_?key|apiKey|key)['\"]\s*:\s*['\"])[^'\"]*(['\"])", re.I), r"\1[REDACTED]\2"),
        (re.compile(r"(\bBearer\s+)[A-Za-z0-9._~+/=-]+", re.I), r"\1[REDACTED]"),
    ]

    @classmethod
    def redact(cls, message: str) -> str:
        for pattern, replacement in cls._patterns:
            message = pattern.sub(replacement, message)
        return message

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            exc_type = record.exc_info[0].__name__ if record.exc_info[0] else "Exception"
            message = f"{message} [exception={exc_type}]"
            record.exc_info = None
            record.exc_text = None
        record.msg = self.redact(message)
        record.args = ()
        return super().format(record)


class SecretRedactionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = SafeSecretFormatter.redact(record.getMessage())
        record.args = ()
        # Provider payloads can echo request bodies into tracebacks.
        if record.exc_info:
            record.exc_info = None
            record.exc_text = None
        return True


def mask_secret(value: str | None) -> str:
    if not value:
        return ""
    return f"{value[:5]}..."


def get_logger(name: str = "smm_catalog") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.addFilter(SecretRedactionFilter())
    formatter = SafeSecretFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
