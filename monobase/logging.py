"""Structured logging configuration for Monobase API tooling."""

import logging
import sys
from collections.abc import Mapping, MutableMapping
from functools import lru_cache
from typing import Any, Protocol

import structlog
from structlog.types import Processor

from .config import Settings, get_settings

SERVICE_NAME = "api"


class Logger(Protocol):
    """Logging capability injected into components that log optionally."""

    def debug(self, event: str, **kwargs: Any) -> Any: ...

    def error(self, event: str, **kwargs: Any) -> Any: ...


class NullLogger:
    """Logger that discards everything. Default when no logger is injected."""

    def debug(self, event: str, **kwargs: Any) -> None:
        return None

    def error(self, event: str, **kwargs: Any) -> None:
        return None


NULL_LOGGER = NullLogger()


def _add_service_context(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> Mapping[str, Any] | str | bytes | bytearray | tuple[Any, ...]:
    """Add service name to log entries."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _serialize_request(req: Any) -> Any:
    if isinstance(req, Mapping):
        return {key: req.get(key) for key in ("method", "url", "headers")}
    return {
        "method": getattr(req, "method", None),
        "url": str(getattr(req, "url", "")) or None,
        "headers": dict(getattr(req, "headers", {}) or {}),
    }


def _serialize_response(res: Any) -> Any:
    if isinstance(res, Mapping):
        return {"statusCode": res.get("status_code", res.get("statusCode"))}
    return {"statusCode": getattr(res, "status_code", None)}


def _serialize_fields(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> Mapping[str, Any] | str | bytes | bytearray | tuple[Any, ...]:
    """Reduce request, response and error values to plain serializable shapes."""
    if "req" in event_dict:
        event_dict["req"] = _serialize_request(event_dict["req"])
    if "res" in event_dict:
        event_dict["res"] = _serialize_response(event_dict["res"])
    error = event_dict.get("error")
    if isinstance(error, BaseException):
        event_dict["error"] = {"type": type(error).__name__, "message": str(error)}
    return event_dict


def get_processors(pretty: bool) -> list[Processor]:
    """Get structlog processors for console or JSON output."""
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_service_context,
        _serialize_fields,
    ]

    if pretty:
        return shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        ]
    return shared_processors + [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO", pretty: bool = False) -> None:
    """Configure structured logging. Reconfigures only when arguments change."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=get_processors(pretty),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_logger(
    settings: Settings | None = None, name: str = SERVICE_NAME
) -> structlog.stdlib.BoundLogger:
    """
    Create the service logger from configuration.

    Pretty console output is only used outside production and only when
    `log_pretty` is enabled; production always renders JSON lines.
    """
    settings = settings or get_settings()
    pretty = settings.log_pretty and not settings.is_production
    configure_logging(settings.log_level, pretty)
    return get_logger(name).bind(service=SERVICE_NAME)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


class _LazyLogger:
    """Lazy logger that defers initialization until first use."""

    def __init__(self, name: str):
        self._name = name
        self._logger: structlog.stdlib.BoundLogger | None = None

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        if self._logger is None:
            self._logger = get_logger(self._name)
        return self._logger

    def __getattr__(self, name: str):
        return getattr(self._get_logger(), name)


# Pre-configured loggers (lazy-loaded)
build_logger = _LazyLogger("build")


__all__ = [
    "Logger",
    "NullLogger",
    "NULL_LOGGER",
    "SERVICE_NAME",
    "configure_logging",
    "create_logger",
    "get_logger",
    "get_processors",
    "build_logger",
]
