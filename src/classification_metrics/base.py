"""Base component providing a bound structured logger."""

from __future__ import annotations

from typing import Any

from classification_metrics.utils.logger import get_logger


class BaseComponent:
    """Base class for components that emit structured log events."""

    def __init__(self) -> None:
        """Bind a logger named after the concrete component class."""
        self._logger = get_logger(
            f"{self.__class__.__module__}.{self.__class__.__qualname__}",
        )

    @property
    def logger(self) -> Any:
        """Return the component logger."""
        return self._logger


__all__ = ["BaseComponent"]
