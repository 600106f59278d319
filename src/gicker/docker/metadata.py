"""
Parsing of `docker inspect` output.

`docker container inspect` and `docker image inspect` both print a JSON array
with one object per requested id. Only the first object is read, and only the
handful of fields gicker needs; everything else is ignored.

"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gicker.errors import EmptyResultError, MalformedResponseError, MissingFieldError
from gicker.models import ContainerFacts, ImageFacts

logger = logging.getLogger(__name__)

WORKING_DIR_LABEL = "com.docker.compose.project.working_dir"


def decode_inspect_document(document: str) -> dict[str, Any]:
	"""
	Decode inspect output and return its first object.

	Args:
	    document: Raw stdout of `docker <kind> inspect`

	Returns:
	    The first element of the top-level array

	Raises:
	    MalformedResponseError: If the document is not a JSON array of objects
	    EmptyResultError: If the array is empty

	"""
	try:
		decoded = json.loads(document)
	except json.JSONDecodeError as e:
		msg = f"Invalid JSON from docker inspect: {e}"
		raise MalformedResponseError(msg) from e

	if not isinstance(decoded, list):
		msg = "Expected JSON array from docker inspect"
		raise MalformedResponseError(msg)
	if not decoded:
		msg = "Empty array from docker inspect"
		raise EmptyResultError(msg)

	first = decoded[0]
	if not isinstance(first, dict):
		msg = "Expected object as first element of docker inspect output"
		raise MalformedResponseError(msg)
	return first


def parse_image_reference(document: str) -> str:
	"""Return the ``Image`` field of a container inspect document."""
	return _require_string(decode_inspect_document(document), "Image")


def parse_container_facts(document: str, label: str = WORKING_DIR_LABEL) -> ContainerFacts:
	"""
	Extract the build working directory and image reference of a container.

	The working directory is read from ``Config.Labels[label]``. Compose sets
	this label when it builds an image from a local directory; containers of
	pulled images don't have it.

	Args:
	    document: Raw stdout of `docker container inspect`
	    label: Label holding the build working directory

	Returns:
	    ContainerFacts for the first container in the document

	Raises:
	    MissingFieldError: Naming ``Config``, ``Labels``, the label key or ``Image``

	"""
	container = decode_inspect_document(document)

	config = container.get("Config")
	if not isinstance(config, dict):
		raise MissingFieldError("Config", "Config not found or not an object")

	labels = config.get("Labels")
	if not isinstance(labels, dict):
		raise MissingFieldError("Labels", "Labels not found or not an object")

	working_dir = labels.get(label)
	if not isinstance(working_dir, str) or not working_dir:
		raise MissingFieldError(
			label,
			f"Working directory label '{label}' not found. Is the docker container based on a local image?",
		)

	image_reference = _require_string(container, "Image")
	logger.debug("Container built from %s in %s", image_reference, working_dir)
	return ContainerFacts(working_directory=Path(working_dir), image_reference=image_reference)


def parse_image_facts(document: str) -> ImageFacts:
	"""Extract the creation timestamp of an image."""
	image = decode_inspect_document(document)
	return ImageFacts(creation_timestamp=_require_string(image, "Created"))


def _require_string(obj: dict[str, Any], key: str) -> str:
	value = obj.get(key)
	if not isinstance(value, str) or not value:
		raise MissingFieldError(key, f"{key} not found or not a string")
	return value
