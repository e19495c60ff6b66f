"""Pluggable logger used throughout the client."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any


class LoggerInterface(ABC):
    """Logger accepted by :func:`init_logger`."""

    @abstractmethod
    def debugf(self, format: str, *args: Any) -> None: ...

    @abstractmethod
    def infof(self, format: str, *args: Any) -> None: ...

    @abstractmethod
    def warnf(self, format: str, *args: Any) -> None: ...

    @abstractmethod
    def errorf(self, format: str, *args: Any) -> None: ...

    @abstractmethod
    def debug(self, *args: Any) -> None: ...

    @abstractmethod
    def info(self, *args: Any) -> None: ...

    @abstractmethod
    def warn(self, *args: Any) -> None: ...

    @abstractmethod
    def error(self, *args: Any) -> None: ...


def _join(args: tuple[Any, ...]) -> str:
    """Concatenate operands, adding a space only between two non-strings."""
    parts: list[str] = []
    previous: Any = None
    for index, arg in enumerate(args):
        if index and not isinstance(arg, str) and not isinstance(previous, str):
            parts.append(" ")
        parts.append(str(arg))
        previous = arg
    return "".join(parts)


class DefaultLogger(LoggerInterface):
    """Logger writing to the standard :mod:`logging` module."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("apolloconf")

    def debugf(self, format: str, *args: Any) -> None:
        self._logger.debug(format, *args)

    def infof(self, format: str, *args: Any) -> None:
        self._logger.info(format, *args)

    def warnf(self, format: str, *args: Any) -> None:
        self._logger.warning(format, *args)

    def errorf(self, format: str, *args: Any) -> None:
        self._logger.error(format, *args)

    def debug(self, *args: Any) -> None:
        self._logger.debug(_join(args))

    def info(self, *args: Any) -> None:
        self._logger.info(_join(args))

    def warn(self, *args: Any) -> None:
        self._logger.warning(_join(args))

    def error(self, *args: Any) -> None:
        self._logger.error(_join(args))


class _ActiveLogger:
    """Holds the logger the module-level helpers delegate to."""

    def __init__(self) -> None:
        self.logger: LoggerInterface = DefaultLogger()


_active = _ActiveLogger()


def init_logger(logger: LoggerInterface) -> None:
    """Replace the logger used by the package."""
    if not isinstance(logger, LoggerInterface):
        raise TypeError(f"expected a LoggerInterface, got {type(logger).__name__}")
    _active.logger = logger


def get_logger() -> LoggerInterface:
    """Return the logger currently in use."""
    return _active.logger


def debugf(format: str, *args: Any) -> None:
    _active.logger.debugf(format, *args)


def infof(format: str, *args: Any) -> None:
    _active.logger.infof(format, *args)


def warnf(format: str, *args: Any) -> None:
    _active.logger.warnf(format, *args)


def errorf(format: str, *args: Any) -> None:
    _active.logger.errorf(format, *args)


def debug(*args: Any) -> None:
    _active.logger.debug(*args)


def info(*args: Any) -> None:
    _active.logger.info(*args)


def warn(*args: Any) -> None:
    _active.logger.warn(*args)


def error(*args: Any) -> None:
    _active.logger.error(*args)