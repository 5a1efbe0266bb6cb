"""Error classification and handling."""

from gitexec.core.errors.kinds import ErrorKind
from gitexec.core.errors.patterns import DEFAULT_ERROR_PATTERNS, ErrorPattern
from gitexec.core.errors.classifier import (
    ErrorClassifier,
    ErrorMatch,
    parse_error,
    parse_error_from_result,
)
from gitexec.core.errors.exceptions import (
    GitExecError,
    GitLaunchError,
    GitNotFoundError,
    GitTimeoutError,
    RepositoryPathNotFoundError,
)
from gitexec.core.errors.signals import get_signal_name

__all__ = [
    "ErrorKind",
    "DEFAULT_ERROR_PATTERNS",
    "ErrorPattern",
    "ErrorClassifier",
    "ErrorMatch",
    "parse_error",
    "parse_error_from_result",
    "GitExecError",
    "GitLaunchError",
    "GitNotFoundError",
    "GitTimeoutError",
    "RepositoryPathNotFoundError",
    "get_signal_name",
]
