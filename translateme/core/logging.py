"""Structured logging setup."""
import logging, sys, json

# Attributes every LogRecord carries; anything else was passed through ``extra``.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record):
        base = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RESERVED:
                continue
            base[k] = v
        return json.dumps(base, default=str)


class _StdoutHandler(logging.StreamHandler):
    """Marks the handler this module installs so a later call can replace it."""


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    installed = [h for h in root.handlers if isinstance(h, _StdoutHandler)]
    # Leave handlers configured by someone else alone.
    if root.handlers and not installed:
        return
    for existing in installed:
        root.removeHandler(existing)
    handler = _StdoutHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)
