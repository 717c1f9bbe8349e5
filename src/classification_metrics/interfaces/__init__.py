"""User-facing interfaces for the classification metrics toolkit."""

from .base import BaseInterface
from .cli import CLIInterface

__all__ = ["BaseInterface", "CLIInterface"]
