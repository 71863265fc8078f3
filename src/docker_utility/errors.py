"""
Exceptions raised by Docker Utility operations.

Exception Hierarchy:
    DockerUtilityError (base)
    ├── UsageError - missing arguments, unknown command, bad import document
    ├── MissingMetadataError - image or options label not found on a container
    └── RuntimeCommandError - the container runtime exited non-zero

The CLI catches DockerUtilityError once, prints the message and exits 1.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DockerUtilityError(Exception):
    """
    Base exception for all Docker Utility errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary with additional context
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class UsageError(DockerUtilityError):
    """Raised for missing or malformed command-line input. No runtime call is made."""


class MissingMetadataError(DockerUtilityError):
    """Raised when a container lacks the image or options label an operation needs."""

    def __init__(self, message: str, container: Optional[str] = None):
        super().__init__(message, {"container": container} if container else None)
        self.container = container


class RuntimeCommandError(DockerUtilityError):
    """
    Raised when a runtime command exits with a non-zero status.

    The message always ends with the exit code, e.g.
    ``Failed to stop container web (exit code 1).``
    """

    def __init__(self, message: str, exit_code: int, command: Optional[list] = None):
        super().__init__(
            f"{message} (exit code {exit_code}).",
            {"exit_code": exit_code, "command": command} if command else {"exit_code": exit_code},
        )
        self.exit_code = exit_code
        self.command = command


__all__ = [
    "DockerUtilityError",
    "UsageError",
    "MissingMetadataError",
    "RuntimeCommandError",
]
