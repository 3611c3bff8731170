"""structlog setup shared by the settings services and the HTTP layer.

Library modules keep using ``logging.getLogger(__name__)`` and pass event
fields through ``extra={...}``. :func:`configure_logging` installs one
root handler that runs those records through the structlog chain, so a
``settings_updated`` record and a structlog event render identically:
JSON lines in production, coloured console output elsewhere. The chain
merges the request ID bound by the request-id middleware and masks
fields that may hold credentials (SMTP password, captcha secrets).

Usage:
    configure_logging()
    logging.getLogger(__name__).info("settings_updated", extra={"count": 3})
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import MutableMapping

Processor = structlog.types.Processor

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Matched case-insensitively against event keys.
SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "authorization",
        "bearer",
        "api_key",
        "apikey",
        "credential",
        "password_hash",
    }
)
# Any key containing one of these is masked too (smtp_password, *_secret_key).
_SENSITIVE_FRAGMENTS: tuple[str, ...] = ("password", "secret", "token")

REDACTED_VALUE: str = "***REDACTED***"


class LoggingSettings(BaseSettings):
    """``LOG_LEVEL`` and ``ENVIRONMENT``, read without a prefix.

    Example:
        >>> LoggingSettings(environment="production").use_json_logs
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    environment: str = Field(
        default="development",
        alias="ENVIRONMENT",
        description="production selects JSON output",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> str:
        return str(v).upper()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        if v not in _LEVELS:
            msg = f"log_level must be one of {', '.join(_LEVELS)}, got {v!r}"
            raise ValueError(msg)
        return v

    @property
    def use_json_logs(self) -> bool:
        return self.environment == "production"

    @property
    def log_level_int(self) -> int:
        return logging.getLevelName(self.log_level)  # type: ignore[no-any-return]


class SensitiveDataProcessor:
    """Mask event fields that may carry credentials.

    Example:
        >>> SensitiveDataProcessor()(None, "info", {"smtp_password": "x"})
        {'smtp_password': '***REDACTED***'}
    """

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key in [k for k in event_dict if self._masks(k)]:
            event_dict[key] = REDACTED_VALUE
        return event_dict

    @staticmethod
    def _masks(key: str) -> bool:
        lowered = key.lower()
        return lowered in SENSITIVE_FIELDS or any(f in lowered for f in _SENSITIVE_FRAGMENTS)


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        SensitiveDataProcessor(),
    ]


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog and replace the root logger's handlers.

    Called by the observability lifespan hook before the persistence and
    settings hooks log anything. Calling it again reconfigures in place.
    """
    settings = settings or get_logging_settings()
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if settings.use_json_logs
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[*_pre_chain(), structlog.processors.format_exc_info, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_int),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.ExtraAdder(),
                *_pre_chain(),
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(settings.log_level_int)


def get_logger(name: str | None = None) -> structlog.typing.WrappedLogger:
    """structlog logger, bound to ``logger=name`` when a name is given."""
    logger = structlog.get_logger()
    return logger if name is None else logger.bind(logger=name)
