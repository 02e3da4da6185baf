"""Logging helpers.

``logger`` is the package-wide logger. Components derive children from it:

    session_logger = logger.with_context(consumer_key="SSO_DEMO")
    session_logger.info("Requesting login token")

Dimensions travel in the record's ``extra`` under ``dimensions`` and are
appended to the message so they survive plain-text handlers.
"""

import logging
from typing import Any, MutableMapping, Optional, Tuple

LOGGER_NAME = "vatsim_sso"


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that carries key/value dimensions and an optional prefix."""

    def __init__(
        self,
        base_logger: logging.Logger,
        dimensions: Optional[dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Wrap a stdlib logger.

        Args:
            base_logger: The underlying stdlib logger.
            dimensions: Context attached to every record.
            prefix: Text prepended to every message.
        """
        super().__init__(base_logger, dict(dimensions or {}))
        self.dimensions: dict[str, Any] = dict(dimensions or {})
        self.prefix = prefix

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.dimensions, **extra.get("dimensions", {})}
        kwargs["extra"] = extra

        message = f"{self.prefix}{msg}"
        if self.dimensions:
            rendered = " ".join(f"{k}={v}" for k, v in sorted(self.dimensions.items()))
            message = f"{message} [{rendered}]"
        return message, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a child logger with additional dimensions."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions}, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a child logger whose messages start with ``prefix``."""
        return ContextualLogger(self.logger, self.dimensions, prefix)


logger = ContextualLogger(logging.getLogger(LOGGER_NAME))
