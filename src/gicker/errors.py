"""
Error types for gicker.

Every stage of the provenance pipeline raises one of these. The CLI is the
only place that catches them, so the message must be good enough to be shown
to the user as-is.

"""

from __future__ import annotations

from collections.abc import Sequence


class GickerError(Exception):
	"""Base exception for all gicker failures."""

	def __init__(self, message: str, stage: str | None = None) -> None:
		"""
		Initialize the error.

		Args:
		    message: Human-readable description of the failure
		    stage: Pipeline stage that failed, filled in by the orchestrator

		"""
		super().__init__(message)
		self.message = message
		self.stage = stage

	def __str__(self) -> str:
		"""Return the user-facing message."""
		return self.message


class ToolNotInstalledError(GickerError):
	"""Raised when a required executable cannot be found."""

	def __init__(self, tool: str) -> None:
		"""Initialize with the name of the missing tool."""
		super().__init__(f"{tool} not installed")
		self.tool = tool


class SubprocessLaunchError(GickerError):
	"""Raised when a command could not be started at all."""


class CommandFailedError(GickerError):
	"""Raised when a command exits with a non-zero status."""

	def __init__(self, message: str, command: Sequence[str], returncode: int, stderr: str = "") -> None:
		"""
		Initialize the error.

		Args:
		    message: Human-readable description of the failure
		    command: The argument list that was executed
		    returncode: Exit status of the process
		    stderr: Captured standard error of the process

		"""
		super().__init__(message)
		self.command = list(command)
		self.returncode = returncode
		self.stderr = stderr


class CommandTimeoutError(CommandFailedError):
	"""Raised when a command exceeds the configured timeout."""


class MalformedResponseError(GickerError):
	"""Raised when an inspect document is not a JSON array of objects."""


class EmptyResultError(GickerError):
	"""Raised when an inspect document is an empty array."""


class MissingFieldError(GickerError):
	"""Raised when an expected key is absent or has the wrong type."""

	def __init__(self, field: str, message: str | None = None) -> None:
		"""
		Initialize the error.

		Args:
		    field: The exact key that was missing or malformed
		    message: Optional message overriding the default one

		"""
		super().__init__(message or f"{field} not found or not a valid value")
		self.field = field


class TimestampParseError(GickerError):
	"""Raised when an image creation time cannot be parsed."""

	def __init__(self, raw: str) -> None:
		"""Initialize with the raw timestamp that failed to parse."""
		super().__init__(f"Failed to parse creation time '{raw}'")
		self.raw = raw


class NoCheckoutFoundError(GickerError):
	"""Raised when the reflog holds no eligible checkout entry."""


class HistoryQueryFailedError(GickerError):
	"""Raised when the reflog query itself fails."""


class ConfigError(GickerError):
	"""Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigError):
	"""Exception raised when configuration file is not found."""


class ConfigParsingError(ConfigError):
	"""Exception raised when configuration file cannot be parsed."""
