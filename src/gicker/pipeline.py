"""
Provenance pipeline.

container facts -> image id -> image facts -> creation time -> branch.
Each stage hands its result to the next explicitly; a failure in any stage
aborts the run with the stage recorded on the error.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from gicker.config.config_schema import GickerConfig
from gicker.docker.inspect import inspect_element
from gicker.docker.metadata import parse_container_facts, parse_image_facts
from gicker.errors import GickerError, ToolNotInstalledError
from gicker.git.reflog import resolve_branch
from gicker.models import DockerElement, ProvenanceReport
from gicker.timestamps import normalize_timestamp

if TYPE_CHECKING:
	from collections.abc import Iterator

	from gicker.utils.process_utils import CommandRunner

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str) -> Iterator[None]:
	"""Tag any GickerError raised inside the block with the stage name."""
	logger.debug("Stage: %s", name)
	try:
		yield
	except GickerError as e:
		if e.stage is None:
			e.stage = name
		raise


def ensure_tools_installed(runner: CommandRunner, config: GickerConfig) -> None:
	"""
	Check that docker and git are available, in that order.

	Raises:
	    ToolNotInstalledError: Naming the first missing tool

	"""
	tools = (("Docker", config.docker_executable), ("git", config.git_executable))
	for display_name, executable in tools:
		if not runner.is_installed(executable):
			raise ToolNotInstalledError(display_name)


def resolve_container_branch(
	container: str,
	runner: CommandRunner,
	config: GickerConfig | None = None,
) -> ProvenanceReport:
	"""
	Find the branch a container's image was built from.

	Args:
	    container: Container name or id
	    runner: Command runner used for docker and git
	    config: Settings, defaults when omitted

	Returns:
	    ProvenanceReport with the resolved branch and the facts used to find it

	Raises:
	    GickerError: Any subclass, with ``stage`` set to the failing stage

	"""
	config = config or GickerConfig()

	with _stage("tool-check"):
		ensure_tools_installed(runner, config)

	with _stage("container-inspect"):
		container_document = inspect_element(
			DockerElement.CONTAINER, container, runner, config.docker_executable
		)
		container_facts = parse_container_facts(container_document, config.working_dir_label)

	with _stage("image-inspect"):
		image_document = inspect_element(
			DockerElement.IMAGE, container_facts.image_reference, runner, config.docker_executable
		)
		image_facts = parse_image_facts(image_document)

	with _stage("timestamp"):
		created = normalize_timestamp(image_facts.creation_timestamp)

	with _stage("branch-resolve"):
		branch = resolve_branch(
			container_facts.working_directory,
			created,
			runner,
			checkout_pattern=config.checkout_pattern,
			git_executable=config.git_executable,
		)

	logger.info("Container %s was built from branch %s", container, branch)
	return ProvenanceReport(
		container=container,
		image_reference=container_facts.image_reference,
		created=created,
		source_path=container_facts.working_directory,
		branch=branch,
	)
