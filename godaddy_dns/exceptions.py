"""
Exceptions raised by the GoDaddy DNS Records Manager.

Every error carries an optional ``step`` describing which part of a
reconciliation failed. The engine sets it before re-raising, so callers
can catch the specific error type and still print a descriptive message.
"""

from typing import Dict, List, Optional


class RegistrarError(Exception):
    """Base exception for registrar operations."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message
        self.step: Optional[str] = None

    def with_step(self, step: str) -> "RegistrarError":
        """Record the reconciliation step that raised this error."""
        self.step = step
        return self

    def __str__(self) -> str:
        text = self.describe()
        if self.step:
            return f"{self.step}: {text}"
        return text

    def describe(self) -> str:
        return self.message


class ValidationError(RegistrarError, ValueError):
    """A desired record violates a field constraint."""


class ConfigurationError(RegistrarError):
    """The client configuration is malformed or incomplete."""


class TransportError(RegistrarError):
    """A network failure or timeout talking to the registrar."""


class ReconciliationCancelled(RegistrarError):
    """The caller cancelled a reconciliation between two writes."""


class APIError(RegistrarError):
    """The registrar rejected a call with a non-2xx response."""

    def __init__(
        self,
        status: int,
        code: str = "",
        message: str = "",
        fields: Optional[List[Dict[str, str]]] = None,
    ):
        super().__init__(message)
        self.status = status
        self.code = code or ""
        self.fields = fields or []

    def describe(self) -> str:
        text = f"[{self.status}:{self.code}] {self.message}"
        if not self.fields:
            return text

        details = ", ".join(
            f"{field.get('path', '')} [{field.get('code', '')}]: {field.get('message', '')}"
            for field in self.fields
        )
        return f"{text} ({details})"


class NotFoundError(APIError):
    """The registrar reports the requested resource as unknown."""
