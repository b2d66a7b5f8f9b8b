import contextlib
import contextvars
import logging
import sys
from typing import IO, Iterator, Optional

ROOT_LOGGER_NAME = "optionstore"

# Context variable carrying the label of the store (or host) being worked on into log lines
_SCOPE: contextvars.ContextVar[str] = contextvars.ContextVar("scope", default="-")


class _ScopeFilter(logging.Filter):
    """Logging filter that injects the scope label from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.scope = _SCOPE.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | scope=%(scope)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _package_handler(package_logger: logging.Logger) -> Optional[logging.Handler]:
    for h in package_logger.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _ScopeFilter) for f in h.filters):
            return h
    return None


def configure_package_logger(level: str = "WARNING", stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Give the ``optionstore`` logger its own formatted stream handler.

    Nothing calls this on import: by default records simply propagate to
    whatever the host configured on the root logger. Once the package handler
    is installed, propagation is switched off so each record is written once.

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if _package_handler(package_logger) is not None:
        return package_logger

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_ScopeFilter())
    package_logger.addHandler(handler)
    package_logger.propagate = False
    return package_logger


def unconfigure_package_logger() -> None:
    """Remove the package handler and hand records back to the root logger."""
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    handler = _package_handler(package_logger)
    if handler is not None:
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a module logger nested under the ``optionstore`` namespace.

    Child loggers keep level NOTSET so the package logger level decides.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def push_scope(scope: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current scope label in context and return a token for later reset."""
    if not scope:
        return None
    return _SCOPE.set(scope)


def reset_scope(token: Optional[contextvars.Token]) -> None:
    """Reset the scope label using the provided token (if any)."""
    if token is None:
        return
    _SCOPE.reset(token)


def current_scope() -> str:
    return _SCOPE.get()


@contextlib.contextmanager
def scoped(scope: Optional[str]) -> Iterator[None]:
    token = push_scope(scope)
    try:
        yield
    finally:
        reset_scope(token)
