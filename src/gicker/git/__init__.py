"""Git history access."""

from .reflog import DEFAULT_CHECKOUT_PATTERN, build_reflog_command, resolve_branch

__all__ = [
	"DEFAULT_CHECKOUT_PATTERN",
	"build_reflog_command",
	"resolve_branch",
]
