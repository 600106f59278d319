"""Utility functions for CLI operations in gicker."""

from __future__ import annotations

import logging

import typer

logger = logging.getLogger(__name__)


def exit_with_error(message: str, exit_code: int = 1, exception: Exception | None = None) -> None:
	"""
	Print ``Error: <message>`` on stdout and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        exception: Optional exception that caused the error

	"""
	if exception is not None:
		logger.debug("Error occurred", exc_info=exception)
	# One line per failure, whatever the underlying message looks like
	summary = " ".join(line.strip() for line in message.splitlines() if line.strip())
	typer.echo(f"Error: {summary}")
	raise typer.Exit(exit_code) from exception


def handle_keyboard_interrupt() -> None:
	"""Handles KeyboardInterrupt by printing a message and exiting cleanly."""
	typer.echo("Error: Operation cancelled by user.")
	raise typer.Exit(130)  # Standard exit code for SIGINT
