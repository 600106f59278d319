"""
Branch resolution from the git reflog.

The reflog records every ``checkout`` with its destination branch as the last
word, e.g. ``4362b76 HEAD@{2}: checkout: moving from main to test-branch``.
Limited to entries at or before the image creation time, the newest
checkout entry names the branch the image was built from.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gicker.errors import CommandFailedError, CommandTimeoutError, HistoryQueryFailedError, NoCheckoutFoundError
from gicker.models import ReflogEntry
from gicker.timestamps import to_git_date
from gicker.utils.process_utils import summarize_stderr

if TYPE_CHECKING:
	from datetime import datetime
	from pathlib import Path

	from gicker.utils.process_utils import CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_CHECKOUT_PATTERN = "checkout:"

# git stderr fragments meaning the directory is not a usable working tree
_NOT_A_REPOSITORY_MARKERS = ("not a git repository", "cannot change to")

# git stderr fragment for a repository whose HEAD has no commits yet
_NO_COMMITS_MARKER = "does not have any commits yet"


def build_reflog_command(
	source_directory: Path,
	before: datetime,
	checkout_pattern: str = DEFAULT_CHECKOUT_PATTERN,
	git_executable: str = "git",
) -> list[str]:
	"""Return the reflog query for checkouts in ``source_directory`` up to ``before``."""
	return [
		git_executable,
		"-C",
		str(source_directory),
		"reflog",
		"show",
		f"--before={to_git_date(before)}",
		f"--grep-reflog={checkout_pattern}",
	]


def resolve_branch(
	source_directory: Path,
	before: datetime,
	runner: CommandRunner,
	checkout_pattern: str = DEFAULT_CHECKOUT_PATTERN,
	git_executable: str = "git",
) -> str:
	"""
	Return the branch that was checked out in a repository at a given time.

	Args:
	    source_directory: Working tree the image was built from
	    before: Upper bound for reflog entries, usually the image creation time
	    runner: Command runner to execute git with
	    checkout_pattern: Reflog message filter passed to ``--grep-reflog``
	    git_executable: Name or path of the git binary

	Returns:
	    The last word of the newest matching reflog entry

	Raises:
	    NoCheckoutFoundError: If no checkout precedes ``before`` or the directory is not a repository
	    HistoryQueryFailedError: If git fails for any other reason

	"""
	command = build_reflog_command(source_directory, before, checkout_pattern, git_executable)
	try:
		top_line = runner.run_first_line(command)
	except CommandTimeoutError as e:
		raise HistoryQueryFailedError(f"Reflog query timed out in {source_directory}") from e
	except CommandFailedError as e:
		stderr = e.stderr.lower()
		if any(marker in stderr for marker in _NOT_A_REPOSITORY_MARKERS):
			msg = f"No checkout entries found in reflog: {source_directory} is not a git working tree"
			raise NoCheckoutFoundError(msg) from e
		if _NO_COMMITS_MARKER in stderr:
			msg = f"No checkout entries found in reflog: {source_directory} has no commits yet"
			raise NoCheckoutFoundError(msg) from e
		detail = summarize_stderr(e.stderr) or f"exit status {e.returncode}"
		msg = f"Reflog query failed in {source_directory}: {detail}"
		raise HistoryQueryFailedError(msg) from e

	if top_line is None or not top_line.strip():
		msg = "No checkout entries found in reflog"
		raise NoCheckoutFoundError(msg)

	entry = ReflogEntry(top_line)
	if not entry.is_checkout:
		msg = f"No checkout entries found in reflog (unexpected entry: {top_line.strip()})"
		raise NoCheckoutFoundError(msg)

	logger.debug("Matched reflog entry %s (%s)", entry.selector, entry.message)
	return entry.branch_name
