"""
Structured logging with key=value and JSON output support.

Services and the command line log through [Logger][powstr.core.logger.Logger],
which attaches keyword arguments to each record as structured fields. The
pure layers (``models``, ``nips``, ``utils``) use plain
``logging.getLogger(__name__)`` with ``event_name key=value`` messages.
[StructuredFormatter][powstr.core.logger.StructuredFormatter], installed on
the root handler by [setup_logging()][powstr.core.logger.setup_logging],
renders both tiers the same way:

```text
info powstr.miner mining_completed state=found attempts=5321 nonce=5320
debug powstr.nips.nip13.miner mining_found nonce=5320 strength=12 attempts=5321
```

Examples:
    ```python
    from powstr.core.logger import Logger

    logger = Logger("powstr.miner")
    logger.info("mining_started", target=16, content="gm")
    # Output: mining_started target=16 content=gm

    Logger("powstr.feed", json_output=True).info("feed_fetched", notes=12)
    # Output: {"timestamp": "...", "level": "info", "service": "powstr.feed", ...}
    ```
"""

from __future__ import annotations

import datetime
import json
import logging
import traceback
from typing import Any, ClassVar


_DEFAULT_FORMAT_MAX_LENGTH = 1000


def _truncate(value: str, max_length: int | None) -> str:
    if max_length and len(value) > max_length:
        return value[:max_length] + f"...<truncated {len(value) - max_length} chars>"
    return value


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = _DEFAULT_FORMAT_MAX_LENGTH,
    prefix: str = " ",
) -> str:
    """Format a dictionary as space-separated key=value pairs.

    Values are truncated to ``max_value_length`` characters; empty values
    and values containing whitespace, ``=`` or quotes are escaped and
    wrapped in double quotes.

    Returns:
        Formatted string, e.g. ``' nonce=42 content="hello world"'``, or an
        empty string if *kwargs* is empty.
    """
    if not kwargs:
        return ""

    parts = []
    for key, value in kwargs.items():
        text = _truncate(str(value), max_value_length)
        if not text or any(c in text for c in " \t\n=\"'"):
            escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
            parts.append(f'{key}="{escaped}"')
        else:
            parts.append(f"{key}={text}")
    return prefix + " ".join(parts)


class StructuredFormatter(logging.Formatter):
    """Render every record as ``level name message key=value ...``.

    Structured fields come from the ``structured_kv`` extra attached by
    [Logger][powstr.core.logger.Logger]; plain ``logging`` records are
    emitted with the same prefix and no fields. Records already rendered as
    JSON (the ``structured_json`` extra) are emitted unchanged.
    """

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "structured_json", False):
            return record.getMessage()
        line = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        fields: dict[str, Any] = getattr(record, "structured_kv", {})
        if fields:
            line += format_kv_pairs(fields)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class Logger:
    """Structured logger that appends keyword arguments as extra fields.

    Mirrors the standard logging API with an added ``**kwargs`` parameter.
    Context bound with [bind()][powstr.core.logger.Logger.bind] is merged
    into every record, call-site keywords taking precedence.

    Args:
        name: Logger name, passed to ``logging.getLogger``.
        json_output: Emit one JSON object per record instead of key=value pairs.
        max_value_length: Maximum characters per value before truncation.
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = _DEFAULT_FORMAT_MAX_LENGTH

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = (
            self._DEFAULT_MAX_VALUE_LENGTH if max_value_length is None else max_value_length
        )
        self._context: dict[str, Any] = dict(context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **context: Any) -> Logger:
        """Return a logger sharing this one's settings with extra bound fields."""
        return Logger(
            self._logger.name,
            json_output=self._json_output,
            max_value_length=self._max_value_length,
            context={**self._context, **context},
        )

    def _format_json(self, msg: str, level: str, fields: dict[str, Any]) -> str:
        record = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": level,
            "service": self._logger.name,
            "message": msg,
            **fields,
        }
        return json.dumps(record, default=str)

    def _make_extra(self, fields: dict[str, Any]) -> dict[str, Any]:
        if not fields:
            return {}
        # Pre-truncate so the formatter receives clean data; short values keep their type
        truncated: dict[str, Any] = {}
        for key, value in fields.items():
            text = str(value)
            if self._max_value_length and len(text) > self._max_value_length:
                truncated[key] = _truncate(text, self._max_value_length)
            else:
                truncated[key] = value
        return {"structured_kv": truncated}

    def _log(self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        fields = {**self._context, **kwargs}
        if self._json_output:
            if exc_info:
                fields["exception"] = traceback.format_exc().rstrip()
            level_name = logging.getLevelName(level).lower()
            self._logger.log(
                level, self._format_json(msg, level_name, fields), extra={"structured_json": True}
            )
        else:
            self._logger.log(level, msg, extra=self._make_extra(fields), exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)


def setup_logging(level: str = "INFO") -> None:
    """Install a [StructuredFormatter][powstr.core.logger.StructuredFormatter] on the root logger.

    Replaces any handlers already attached to the root logger, so calling
    it twice does not duplicate output.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
