"""Exception hierarchy for gitexec.

All gitexec exceptions inherit from GitExecError, so callers can catch
broadly (GitExecError) or narrowly (e.g. GitNotFoundError).

Only conditions where git did not produce a result are exceptions. A git
invocation that ran and exited non-zero is returned as a normal
``ExecutionResult``; classifying it is a separate, opt-in step.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class GitExecError(Exception):
    """Base exception for all gitexec errors."""


class GitLaunchError(GitExecError):
    """Raised when the git child process could not be started.

    Examples: permission denied on the executable, exec format error.
    """

    def __init__(self, message: str, args: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.git_args: tuple[str, ...] = tuple(args)


class GitNotFoundError(GitLaunchError):
    """Raised when the configured git executable does not exist."""

    def __init__(self, executable: str, args: Sequence[str] = ()) -> None:
        super().__init__(f"Git could not be found at the expected path: {executable}", args)
        self.executable = executable


class RepositoryPathNotFoundError(GitLaunchError):
    """Raised when the working directory of an invocation does not exist."""

    def __init__(self, cwd: Path | str, args: Sequence[str] = ()) -> None:
        super().__init__(f"Unable to find path to repository on disk: {cwd}", args)
        self.cwd = Path(cwd)


class GitTimeoutError(GitExecError):
    """Raised when an invocation exceeds its timeout.

    The child process group has already been terminated when this is raised.
    Any output read before the deadline is attached for diagnostics.
    """

    def __init__(
        self,
        args: Sequence[str],
        timeout_seconds: float,
        duration_seconds: float,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(
            f"git {' '.join(args[:1])} timed out after {timeout_seconds}s"
        )
        self.git_args: tuple[str, ...] = tuple(args)
        self.timeout_seconds = timeout_seconds
        self.duration_seconds = duration_seconds
        self.stdout = stdout
        self.stderr = stderr
