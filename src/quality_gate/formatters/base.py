"""Base formatter interface for gate output rendering."""

from abc import ABC, abstractmethod

from ..core.gate import GateResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: GateResult) -> None:
        """Render the result to stderr/stdout as appropriate."""

    @abstractmethod
    def format(self, result: GateResult) -> str:
        """Return formatted string representation of the result."""
