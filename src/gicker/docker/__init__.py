"""Docker metadata access."""

from .inspect import build_inspect_command, inspect_element
from .metadata import (
	WORKING_DIR_LABEL,
	decode_inspect_document,
	parse_container_facts,
	parse_image_facts,
	parse_image_reference,
)

__all__ = [
	"WORKING_DIR_LABEL",
	"build_inspect_command",
	"decode_inspect_document",
	"inspect_element",
	"parse_container_facts",
	"parse_image_facts",
	"parse_image_reference",
]
