"""Tests for the provenance pipeline."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from gicker.config import GickerConfig
from gicker.errors import (
	CommandFailedError,
	EmptyResultError,
	MissingFieldError,
	NoCheckoutFoundError,
	TimestampParseError,
	ToolNotInstalledError,
)
from gicker.git.reflog import build_reflog_command
from gicker.pipeline import ensure_tools_installed, resolve_container_branch
from gicker.timestamps import normalize_timestamp
from tests.base import FakeRunner, container_document, image_document

CREATED = "2024-01-02T03:04:05.123456+00:00"
CONTAINER_CMD = ("docker", "container", "inspect", "web")
IMAGE_CMD = ("docker", "image", "inspect", "sha256:deadbeef")


def _reflog_cmd(created: str = CREATED, repo: str = "/repo") -> tuple[str, ...]:
	return tuple(build_reflog_command(Path(repo), normalize_timestamp(created)))


@pytest.fixture
def runner() -> FakeRunner:
	"""A runner that answers the happy path for container `web`."""
	return FakeRunner(
		{
			CONTAINER_CMD: container_document(),
			IMAGE_CMD: image_document(CREATED),
			_reflog_cmd(): "f00ba12 HEAD@{4}: checkout: moving from main to release-1.2\n",
		}
	)


@pytest.mark.unit
class TestResolveContainerBranch:
	"""Test cases for the end to end pipeline with canned output."""

	def test_end_to_end(self, runner: FakeRunner) -> None:
		"""Container, image and reflog facts combine into the branch."""
		report = resolve_container_branch("web", runner)

		assert report.branch == "release-1.2"
		assert report.image_reference == "sha256:deadbeef"
		assert report.source_path == Path("/repo")
		assert report.created == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
		assert runner.calls == [list(CONTAINER_CMD), list(IMAGE_CMD), list(_reflog_cmd())]

	def test_reflog_bound_is_creation_instant(self, runner: FakeRunner) -> None:
		"""The reflog query is bounded by the image creation time in epoch seconds."""
		resolve_container_branch("web", runner)

		assert "--before=1704164645" in runner.calls[-1]

	def test_report_to_dict(self, runner: FakeRunner) -> None:
		"""The report serializes to plain JSON types."""
		payload = resolve_container_branch("web", runner).to_dict()

		assert payload == {
			"container": "web",
			"image_reference": "sha256:deadbeef",
			"created": "2024-01-02T03:04:05+00:00",
			"source_path": "/repo",
			"branch": "release-1.2",
		}

	def test_custom_config(self) -> None:
		"""Executables, label and pattern come from the configuration."""
		config = GickerConfig(
			docker_executable="podman",
			git_executable="/usr/local/bin/git",
			working_dir_label="org.example.src",
			checkout_pattern="checkout",
		)
		document = '[{"Config": {"Labels": {"org.example.src": "/src"}}, "Image": "img"}]'
		before = normalize_timestamp(CREATED)
		runner = FakeRunner(
			{
				("podman", "container", "inspect", "web"): document,
				("podman", "image", "inspect", "img"): image_document(CREATED),
				tuple(
					build_reflog_command(Path("/src"), before, "checkout", "/usr/local/bin/git")
				): "a1 HEAD@{0}: checkout: moving from main to dev\n",
			},
			installed=("podman", "/usr/local/bin/git"),
		)

		assert resolve_container_branch("web", runner, config).branch == "dev"

	def test_docker_missing(self, runner: FakeRunner) -> None:
		"""Docker is checked first and nothing is run without it."""
		runner.installed = set()

		with pytest.raises(ToolNotInstalledError) as excinfo:
			resolve_container_branch("web", runner)

		assert str(excinfo.value) == "Docker not installed"
		assert excinfo.value.stage == "tool-check"
		assert runner.calls == []

	def test_git_missing(self, runner: FakeRunner) -> None:
		"""A missing git is named."""
		runner.installed = {"docker"}

		with pytest.raises(ToolNotInstalledError) as excinfo:
			resolve_container_branch("web", runner)

		assert str(excinfo.value) == "git not installed"

	def test_unknown_container(self, runner: FakeRunner) -> None:
		"""docker failing for an unknown id stops the run."""
		runner.add(CONTAINER_CMD, CommandFailedError("failed", list(CONTAINER_CMD), returncode=1))

		with pytest.raises(CommandFailedError) as excinfo:
			resolve_container_branch("web", runner)

		assert "container web may not exist" in str(excinfo.value)
		assert excinfo.value.stage == "container-inspect"
		assert len(runner.calls) == 1

	def test_label_missing_stops_before_image_inspect(self, runner: FakeRunner) -> None:
		"""A container not built by compose fails without inspecting the image."""
		runner.add(CONTAINER_CMD, container_document(working_dir=None))

		with pytest.raises(MissingFieldError) as excinfo:
			resolve_container_branch("web", runner)

		assert excinfo.value.stage == "container-inspect"
		assert runner.calls == [list(CONTAINER_CMD)]

	def test_empty_image_document(self, runner: FakeRunner) -> None:
		"""An image that vanished between the two inspect calls."""
		runner.add(IMAGE_CMD, "[]")

		with pytest.raises(EmptyResultError) as excinfo:
			resolve_container_branch("web", runner)

		assert excinfo.value.stage == "image-inspect"

	def test_bad_timestamp(self, runner: FakeRunner) -> None:
		"""An unparseable creation time is reported with its stage."""
		runner.add(IMAGE_CMD, image_document("last tuesday"))

		with pytest.raises(TimestampParseError) as excinfo:
			resolve_container_branch("web", runner)

		assert excinfo.value.stage == "timestamp"

	def test_no_checkout(self, runner: FakeRunner) -> None:
		"""An empty reflog result is terminal."""
		runner.add(_reflog_cmd(), "")

		with pytest.raises(NoCheckoutFoundError) as excinfo:
			resolve_container_branch("web", runner)

		assert excinfo.value.stage == "branch-resolve"


@pytest.mark.unit
def test_ensure_tools_installed_uses_configured_names() -> None:
	"""Tool checks use the configured executables."""
	runner = FakeRunner(installed=("podman", "git"))

	ensure_tools_installed(runner, GickerConfig(docker_executable="podman"))

	with pytest.raises(ToolNotInstalledError):
		ensure_tools_installed(runner, GickerConfig())
