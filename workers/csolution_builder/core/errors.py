"""
Errors — the failure taxonomy of the orchestration layer.

Every error is logged where it is detected and then raised unchanged;
callers abort the current phase (and the orchestrator the whole run).
"""
from __future__ import annotations

from typing import List, Optional


class BuildError(Exception):
    """Base class for all orchestration failures."""

    descriptor: Optional[str] = None

    def annotate(self, descriptor: str) -> "BuildError":
        """Prefix the message with the descriptor being processed; keeps the error kind."""
        self.descriptor = descriptor
        self.args = (f"error processing '{descriptor}': {self}",)
        return self


class ConfigurationError(BuildError):
    """Mutually exclusive options were supplied together."""


class FormatError(BuildError):
    """A file name or context identifier is malformed."""


class ToolNotFound(BuildError):
    """A required binary is missing on disk."""

    def __init__(self, tool: str, path: str):
        super().__init__(f"{tool} was not found: '{path}'")
        self.tool = tool
        self.path = path


class ToolExecutionError(BuildError):
    """A child process could not be spawned or exited nonzero."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        output: str = "",
    ):
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.output = output


class NotFoundError(BuildError):
    """A context, configuration or descriptor is absent from its catalog."""
