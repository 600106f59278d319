"""
Logging setup for gicker.

Log records go to stderr (and optionally a file) so that stdout only ever
carries the resolved branch or the error line.

"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

# Console for log output, kept off stdout
console = Console(stderr=True)


def setup_logging(
	is_verbose: bool = False,
	log_file_path: Path | str | None = None,
) -> None:
	"""
	Set up logging configuration.

	Args:
	    is_verbose: Enable verbose logging
	    log_file_path: Optional path to a file for logging. If None, no file logging.

	"""
	log_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	root_logger.setLevel(log_level)

	# Clear existing handlers to avoid duplicate logs if called multiple times
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	console_handler = RichHandler(
		console=console,
		level=log_level,
		rich_tracebacks=True,
		show_time=True,
		show_path=is_verbose,
	)
	root_logger.addHandler(console_handler)

	if log_file_path:
		try:
			file_handler_path = Path(log_file_path)
			file_handler_path.parent.mkdir(parents=True, exist_ok=True)

			file_handler = logging.FileHandler(file_handler_path, mode="a", encoding="utf-8")
			file_handler.setLevel(logging.DEBUG)
			file_formatter = logging.Formatter(
				"%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"
			)
			file_handler.setFormatter(file_formatter)
			root_logger.addHandler(file_handler)
			root_logger.debug("Logging to file: %s", file_handler_path)
		except OSError as e:
			# File logging is optional; report on stderr and carry on
			console.print(f"[red]Failed to set up file logging to {log_file_path}: {e}")


def log_environment_info() -> None:
	"""Log information about the execution environment."""
	import platform

	from gicker import __version__

	logger = logging.getLogger(__name__)
	logger.debug("gicker version: %s", __version__)
	logger.debug("Python version: %s", platform.python_version())
	logger.debug("Platform: %s", platform.platform())
