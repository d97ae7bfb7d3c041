"""Base exception for the quality gate."""

from typing import Dict, Optional


class QualityGateError(Exception):
    """Base exception for all quality gate errors.

    ``exit_code`` is the process status the CLI exits with when the error
    ends a run: 1 like a failed gate, or 2 for errors in how the gate was
    invoked (see ``ConfigurationError``).
    """

    exit_code = 1

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def notice(self) -> str:
        """One-line form for run notices: the ``reason`` detail, else the message."""
        return self.details.get("reason") or self.message
