import logging
from typing import Any, Iterator, Optional, Tuple

# Printed first and in this order; any other extras follow sorted by name.
LOG_EXTRA_FIELDS = (
    "operation",
    "step",
    "link_uuid",
    "method",
    "endpoint",
    "status",
    "attempt",
    "duration_ms",
    "error_type",
)

_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "event"}


class LogfmtFormatter(logging.Formatter):
    """
    logfmt line per record: level, logger, event, then the record's extras.
    Works with log_event() and with plain ``extra=`` dicts.
    """

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        kv.extend(f"{key}={self._fmt_val(val)}" for key, val in _extras(record))

        if record.exc_info and record.exc_info[0] is not None:
            kv.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = str(val)
        if not s or any(c in s for c in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def _extras(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    fields = {
        k: v
        for k, v in vars(record).items()
        if k not in _RECORD_ATTRS and not k.startswith("_") and v is not None
    }
    for key in LOG_EXTRA_FIELDS:
        if key in fields:
            yield key, fields.pop(key)
    yield from sorted(fields.items())


def setup_logging(level: str = "INFO", logger_name: Optional[str] = None) -> None:
    """
    Send logfmt output to stderr for ``logger_name`` (root by default).
    Applications opt in; the SDK never calls this.
    """
    target = logging.getLogger(logger_name)
    for h in list(target.handlers):
        target.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    target.addHandler(handler)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger_name:
        target.propagate = False


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
