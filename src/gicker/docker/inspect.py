"""Running `docker inspect`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gicker.errors import CommandFailedError, CommandTimeoutError
from gicker.models import DockerElement

if TYPE_CHECKING:
	from gicker.utils.process_utils import CommandRunner

logger = logging.getLogger(__name__)


def build_inspect_command(kind: DockerElement, identifier: str, docker_executable: str = "docker") -> list[str]:
	"""Return the argument list for `docker <kind> inspect <identifier>`."""
	return [docker_executable, kind.value, "inspect", identifier]


def inspect_element(
	kind: DockerElement,
	identifier: str,
	runner: CommandRunner,
	docker_executable: str = "docker",
) -> str:
	"""
	Return the raw inspect document for a container or image.

	Args:
	    kind: Whether to inspect a container or an image
	    identifier: Name or id of the object
	    runner: Command runner to execute docker with
	    docker_executable: Name or path of the docker binary

	Returns:
	    The JSON text printed by docker

	Raises:
	    CommandFailedError: If docker exits non-zero, typically for an unknown id

	"""
	command = build_inspect_command(kind, identifier, docker_executable)
	try:
		return runner.run(command)
	except CommandTimeoutError:
		raise
	except CommandFailedError as e:
		msg = f"Docker command failed - {kind.value} {identifier} may not exist"
		raise CommandFailedError(msg, e.command, e.returncode, e.stderr) from e
