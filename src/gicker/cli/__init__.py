"""Command-line interface package for gicker."""

from __future__ import annotations

import sys

import typer

from .resolve_cmd import register_command as register_resolve_command

app = typer.Typer(
	help="gicker - find the git branch a Docker container's image was built from.",
	add_completion=False,
	context_settings={"help_option_names": ["-h", "--help"]},
)

# A single registered command runs without a subcommand name: `gicker <container>`
register_resolve_command(app)


def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
