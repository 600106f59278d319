"""Utility module for gicker."""

from .process_utils import CommandRunner, SubprocessRunner, first_line, summarize_stderr

__all__ = [
	"CommandRunner",
	"SubprocessRunner",
	"first_line",
	"summarize_stderr",
]
