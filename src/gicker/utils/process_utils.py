"""Subprocess helpers for gicker."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import TYPE_CHECKING, Protocol

from gicker.errors import CommandFailedError, CommandTimeoutError, SubprocessLaunchError

if TYPE_CHECKING:
	from collections.abc import Sequence

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
	"""Capability to run external commands. Tests substitute canned output."""

	def run(self, command: Sequence[str]) -> str:
		"""Run a command and return its complete standard output."""
		...

	def run_first_line(self, command: Sequence[str]) -> str | None:
		"""Run a command and return the first line of output, or None if there is none."""
		...

	def is_installed(self, executable: str) -> bool:
		"""Return whether an executable is available on the PATH."""
		...


class SubprocessRunner:
	"""CommandRunner backed by :func:`subprocess.run`."""

	def __init__(self, timeout: float | None = None) -> None:
		"""
		Initialize the runner.

		Args:
		    timeout: Seconds to wait for each command, or None to wait forever

		"""
		self.timeout = timeout

	def run(self, command: Sequence[str]) -> str:
		"""
		Run a command and return its output.

		Args:
		    command: Command to run as an argument list

		Returns:
		    Command output as string

		Raises:
		    SubprocessLaunchError: If the process could not be started
		    CommandFailedError: If the command exits with a non-zero status
		    CommandTimeoutError: If the command runs longer than the timeout

		"""
		args = list(command)
		logger.debug("Running command: %s", " ".join(args))
		try:
			# Argument lists only, never shell=True
			result = subprocess.run(  # noqa: S603
				args,
				capture_output=True,
				text=True,
				check=True,
				timeout=self.timeout,
			)
		except subprocess.TimeoutExpired as e:
			msg = f"Command timed out after {self.timeout}s: {' '.join(args)}"
			raise CommandTimeoutError(msg, args, returncode=-1) from e
		except subprocess.CalledProcessError as e:
			stderr = e.stderr or ""
			detail = summarize_stderr(stderr) or f"exit status {e.returncode}"
			msg = f"Command failed: {' '.join(args)}: {detail}"
			logger.debug(msg)
			raise CommandFailedError(msg, args, returncode=e.returncode, stderr=stderr) from e
		except OSError as e:
			msg = f"Failed to start command '{args[0] if args else ''}': {e}"
			raise SubprocessLaunchError(msg) from e
		else:
			return result.stdout

	def run_first_line(self, command: Sequence[str]) -> str | None:
		"""
		Run a command and return only the first line of its output.

		Returns:
		    The first line without its line terminator, or None when the
		    command printed nothing

		"""
		output = self.run(command)
		return first_line(output)

	def is_installed(self, executable: str) -> bool:
		"""Return whether ``executable`` can be found on the PATH."""
		found = shutil.which(executable)
		logger.debug("Looked up %s: %s", executable, found or "not found")
		return found is not None


def first_line(output: str) -> str | None:
	"""Return the first line of ``output``, or None if it is empty."""
	lines = output.splitlines()
	if not lines:
		return None
	return lines[0]


def summarize_stderr(stderr: str) -> str:
	"""Return the first non-blank line of ``stderr``, stripped."""
	for line in stderr.splitlines():
		if line.strip():
			return line.strip()
	return ""
