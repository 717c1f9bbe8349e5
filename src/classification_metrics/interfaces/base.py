"""Base class for user-facing interfaces."""

from abc import ABC, abstractmethod

from classification_metrics.base import BaseComponent


class BaseInterface(BaseComponent, ABC):
    """Abstract interface exposing the toolkit to a user."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the interface name.

        Returns:
            str: The interface name

        """

    @abstractmethod
    def run(self) -> None:
        """Run the interface."""
