"""Pydantic schema for gicker configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gicker.docker.metadata import WORKING_DIR_LABEL
from gicker.git.reflog import DEFAULT_CHECKOUT_PATTERN


class GickerConfig(BaseModel):
	"""Settings that control how docker and git are queried."""

	model_config = ConfigDict(extra="forbid", frozen=True)

	docker_executable: str = Field(default="docker", min_length=1)
	git_executable: str = Field(default="git", min_length=1)
	working_dir_label: str = Field(default=WORKING_DIR_LABEL, min_length=1)
	checkout_pattern: str = Field(default=DEFAULT_CHECKOUT_PATTERN, min_length=1)
	# Seconds per subprocess; None waits indefinitely
	command_timeout: float | None = Field(default=None, gt=0)
