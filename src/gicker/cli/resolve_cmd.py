"""Command for resolving the branch a container was built from."""

from __future__ import annotations

import datetime
import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from gicker import __version__

logger = logging.getLogger(__name__)

# --- Command Argument Annotations ---

ContainerArg = Annotated[str, typer.Argument(help="Container name or id")]

JsonFlag = Annotated[bool, typer.Option("--json", help="Print the full provenance report as JSON")]

ConfigOpt = Annotated[
	Path | None,
	typer.Option("--config", "-c", help="Path to a gicker YAML configuration file", dir_okay=False),
]

VerboseFlag = Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")]

SaveLogFlag = Annotated[
	bool,
	typer.Option("--save-log", help="Enable logging to a file. Logs to logs/gicker_{datetime}.log."),
]


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"gicker version: {__version__}")
		raise typer.Exit


VersionFlag = Annotated[
	bool | None,
	typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
]

# --- Registration Function ---


def register_command(app: typer.Typer) -> None:
	"""Register the resolve command with the CLI app."""

	@app.command(name="resolve")
	def resolve_command(
		container: ContainerArg,
		as_json: JsonFlag = False,
		config_file: ConfigOpt = None,
		is_verbose: VerboseFlag = False,
		is_output_log: SaveLogFlag = False,
		_version: VersionFlag = None,
	) -> None:
		"""Print the git branch the container's image was built from."""
		_resolve_command_impl(
			container=container,
			as_json=as_json,
			config_file=config_file,
			is_verbose=is_verbose,
			is_output_log=is_output_log,
		)


# --- Implementation Function ---


def _resolve_command_impl(
	container: str,
	as_json: bool,
	config_file: Path | None,
	is_verbose: bool,
	is_output_log: bool,
) -> None:
	"""Actual implementation of the resolve command."""
	from gicker.config import ConfigLoader
	from gicker.errors import GickerError
	from gicker.pipeline import resolve_container_branch
	from gicker.utils.cli_utils import exit_with_error, handle_keyboard_interrupt
	from gicker.utils.log_setup import log_environment_info, setup_logging
	from gicker.utils.process_utils import SubprocessRunner

	log_file_path: Path | None = None
	if is_output_log:
		current_time = datetime.datetime.now(tz=datetime.UTC).strftime("%Y-%m-%d_%H-%M-%S")
		log_file_path = Path("logs") / f"gicker_{current_time}.log"

	setup_logging(is_verbose=is_verbose or is_output_log, log_file_path=log_file_path)
	log_environment_info()

	try:
		config = ConfigLoader(config_file).get
		runner = SubprocessRunner(timeout=config.command_timeout)
		report = resolve_container_branch(container, runner, config)
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except GickerError as e:
		logger.debug("Resolution failed at stage %s", e.stage or "setup")
		exit_with_error(str(e), exception=e)
	except Exception as e:
		logger.exception("An unexpected error occurred while resolving the branch.")
		exit_with_error(f"An unexpected error occurred: {e}", exception=e)
	else:
		if as_json:
			typer.echo(json.dumps(report.to_dict(), indent=2))
		else:
			typer.echo(report.branch)
