"""Value records passed between the stages of the provenance pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class DockerElement(str, Enum):
	"""Kinds of Docker objects that can be inspected."""

	IMAGE = "image"
	CONTAINER = "container"


@dataclass(frozen=True)
class ContainerFacts:
	"""The parts of `docker container inspect` output gicker depends on."""

	working_directory: Path
	image_reference: str


@dataclass(frozen=True)
class ImageFacts:
	"""The parts of `docker image inspect` output gicker depends on."""

	creation_timestamp: str


@dataclass(frozen=True)
class ReflogEntry:
	"""
	A single line of `git reflog show` output.

	Lines look like ``4362b76 HEAD@{2}: checkout: moving from main to test-branch``.
	Parsing is lenient: parts that cannot be found are left empty.

	"""

	line: str

	@property
	def selector(self) -> str:
		"""Reflog selector such as ``HEAD@{2}``."""
		return self._sections()[0]

	@property
	def action(self) -> str:
		"""Reflog action such as ``checkout`` or ``commit``."""
		return self._sections()[1]

	@property
	def message(self) -> str:
		"""Free text after the action."""
		return self._sections()[2]

	@property
	def is_checkout(self) -> bool:
		"""Whether the entry records a branch switch."""
		return self.action == "checkout"

	@property
	def branch_name(self) -> str:
		"""Last whitespace-delimited token of the line."""
		tokens = self.line.split()
		return tokens[-1] if tokens else ""

	def _sections(self) -> tuple[str, str, str]:
		parts = self.line.strip().split(maxsplit=1)
		if len(parts) < 2:
			return "", "", ""
		sections = parts[1].split(": ", 2)
		if len(sections) < 3:
			return "", "", ""
		return sections[0], sections[1], sections[2]


@dataclass(frozen=True)
class ProvenanceReport:
	"""Everything learned while resolving a container's branch."""

	container: str
	image_reference: str
	created: datetime
	source_path: Path
	branch: str

	def to_dict(self) -> dict[str, Any]:
		"""Return a JSON-serializable representation."""
		payload = asdict(self)
		payload["created"] = self.created.isoformat()
		payload["source_path"] = str(self.source_path)
		return payload
