"""
Error types for tokenforge payload loading, host calls, and synthesis.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TokenforgeError(Exception):
    """Base exception for all tokenforge errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class PayloadError(TokenforgeError):
    """
    Raised when a token payload is missing or cannot be read.

    Examples:
    - No payload supplied and no bundled payload available
    - Invalid JSON or YAML
    - Schema validation failure
    """

    pass


class ManifestError(TokenforgeError):
    """Raised when tokenforge.toml cannot be parsed."""

    pass


class DefinitionError(TokenforgeError):
    """
    Raised when a component definition is internally inconsistent.

    Examples:
    - Default variant picks a value not declared on its axis
    - Default variant omits an axis
    """

    pass


class HostError(TokenforgeError):
    """Raised by a host platform when a node or value call fails."""

    pass


class HostCapacityError(HostError):
    """The host refused to add another mode (plan limit)."""

    pass


class HostNameConflict(HostError):
    """A variable with the same name already exists in the collection."""

    pass


class HostTypeMismatch(HostError):
    """An alias or binding targets a variable of an incompatible type."""

    pass


class HostValueError(HostError):
    """The host rejected a value for a variable or property."""

    pass


class FontUnavailableError(HostError):
    """A requested font family/style could not be loaded."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        file: Path to the payload or manifest file involved
        pointer: Optional dotted location inside the file (e.g. "components.3")
    """

    file: Path
    pointer: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens.json at components.3"
        """
        if self.pointer:
            return f"{self.file} at {self.pointer}"
        return str(self.file)


def make_payload_error(
    message: str,
    file: Path | None = None,
    pointer: str | None = None,
) -> PayloadError:
    """
    Helper to create a PayloadError with optional context.

    Args:
        message: Error description
        file: Optional payload file path
        pointer: Optional location inside the payload

    Returns:
        PayloadError with context if a file was provided
    """
    if file is not None:
        return PayloadError(message, ErrorContext(file=file, pointer=pointer))
    return PayloadError(message)
