"""Data models for git invocations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class InvocationOptions:
    """Per-call options for a git invocation.

    Options are passed with each call and never stored globally, so two
    concurrent invocations cannot observe each other's settings.
    """

    env: Mapping[str, str] | None = None
    """Variables overlaid last on the invocation environment (most specific wins)."""

    timeout_seconds: float | None = None
    """Kill the child after this many seconds. None uses the executor default."""

    stdin: str | bytes | None = None
    """Data written to the child's standard input. None attaches /dev/null."""


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a git invocation that ran to completion.

    A non-zero ``exit_code`` is a normal result, not an error of the
    invocation layer. Exit code and full output are always preserved.
    """

    exit_code: int
    """Process exit code (0 = success). Signal deaths report 128 + signal."""

    stdout: str
    """Standard output, decoded as UTF-8 (undecodable bytes replaced)."""

    stderr: str
    """Standard error, decoded as UTF-8 (undecodable bytes replaced)."""

    duration_seconds: float = 0.0
    """Wall-clock time from spawn to exit."""

    exit_signal: int | None = None
    """Signal that terminated the child, if any."""

    args: tuple[str, ...] = field(default_factory=tuple)
    """The git arguments (without the executable) that produced this result."""

    @property
    def success(self) -> bool:
        return self.exit_code == 0
