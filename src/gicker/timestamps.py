"""
Normalization of Docker creation timestamps.

Docker reports ``Created`` with a variable number of fractional-second digits,
e.g. ``2025-11-04T18:39:50.016834308+01:00``. The fraction is cut off and the
UTC offset kept, so the result is the same instant at second precision.

"""

from __future__ import annotations

import logging
from datetime import datetime

from gicker.errors import TimestampParseError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def strip_fractional_seconds(raw: str) -> str:
	"""
	Remove the fractional-seconds span from a timestamp.

	The span starts at the first ``.`` and covers every following digit or
	``.``. It may be empty apart from the dot itself.

	Args:
	    raw: Timestamp as reported by docker

	Returns:
	    The timestamp with the span removed, offset untouched

	"""
	dot_pos = raw.find(".")
	if dot_pos == -1:
		return raw

	end = dot_pos
	while end < len(raw) and raw[end] in "0123456789.":
		end += 1
	return raw[:dot_pos] + raw[end:]


def normalize_timestamp(raw: str) -> datetime:
	"""
	Convert a docker timestamp into an aware datetime with second precision.

	Args:
	    raw: Timestamp in ``YYYY-MM-DDTHH:MM:SS[.fraction]±HH:MM`` form

	Returns:
	    Timezone-aware datetime for the same instant

	Raises:
	    TimestampParseError: If the value does not match the expected format

	"""
	stripped = strip_fractional_seconds(raw)
	try:
		moment = datetime.strptime(stripped, TIMESTAMP_FORMAT)  # noqa: DTZ007
	except ValueError as e:
		raise TimestampParseError(raw) from e

	logger.debug("Normalized creation time %s to %s", raw, moment.isoformat())
	return moment


def to_git_date(moment: datetime) -> str:
	"""Render an aware datetime as unix epoch seconds for git date options."""
	return str(int(moment.timestamp()))
