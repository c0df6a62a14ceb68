import logging
import re
import sys
from collections.abc import Mapping

# Provider keys must never reach the logs
SENSITIVE_PATTERNS = [
    (re.compile(r"(sk-[a-zA-Z0-9_\-]{20,})"), "***"),
    (re.compile(r"(Bearer\s+[a-zA-Z0-9\-._~+/]+=*)"), "Bearer ***"),
]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"


def mask_sensitive(text: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SensitiveDataFilter(logging.Filter):
    """Redacts API keys and bearer tokens from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = mask_sensitive(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_mask_arg(arg) for arg in record.args)
        elif isinstance(record.args, Mapping):
            record.args = {key: _mask_arg(value) for key, value in record.args.items()}
        return True


def _mask_arg(arg):
    return mask_sensitive(arg) if isinstance(arg, str) else arg


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one console handler to the `canvasgen` logger. Safe to call twice."""
    logger = logging.getLogger("canvasgen")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(getattr(h, "_canvasgen", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(SensitiveDataFilter())
        handler._canvasgen = True
        logger.addHandler(handler)

    return logger
