"""Public entry point: run git and classify its failures.

``GitProcess`` composes the executor, the non-interactive environment and
the error classifier behind two calls:

    git = GitProcess()
    result = await git.exec(["fetch", "origin"], repo_path)
    if result.exit_code != 0:
        kind = git.parse_error(result.stderr)

Classification is a separate step so a result can be classified (or
re-classified with another table) without running git again.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from gitexec.core.config import GitExecConfig
from gitexec.core.errors.classifier import ErrorClassifier
from gitexec.core.errors.kinds import ErrorKind
from gitexec.process.executor import ProcessExecutor
from gitexec.process.models import ExecutionResult, InvocationOptions


class GitProcess:
    """Runs git invocations with safe defaults.

    Holds configuration only. Each call is independent and may run
    concurrently with others; callers serialize calls against the same
    working tree themselves.
    """

    def __init__(
        self,
        config: GitExecConfig | None = None,
        classifier: ErrorClassifier | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            config: Invocation settings; defaults to ``GitExecConfig()``.
            classifier: Classifier used by ``parse_error``.
            environ: Host environment to inherit from instead of ``os.environ``.
                It is copied once here and never mutated.
        """
        self.config = config or GitExecConfig()
        self.classifier = classifier or ErrorClassifier()
        self._executor = ProcessExecutor(
            git_executable=self.config.resolved_git_executable(environ),
            base_env=self.config.base_environment(environ),
            default_timeout_seconds=self.config.timeout_seconds,
            non_interactive=self.config.non_interactive,
        )

    @property
    def executor(self) -> ProcessExecutor:
        return self._executor

    async def exec(
        self,
        args: Sequence[str],
        cwd: Path | str,
        options: InvocationOptions | None = None,
    ) -> ExecutionResult:
        """Run ``git <args>`` in ``cwd``.

        The non-interactive environment is applied automatically; variables
        in ``options.env`` override it (e.g. an askpass environment).

        See ``ProcessExecutor.exec`` for the exceptions raised.
        """
        return await self._executor.exec(args, cwd, options)

    run = exec

    def parse_error(self, stderr: str | bytes | None) -> ErrorKind:
        """Classify the stderr text of a finished invocation."""
        return self.classifier.parse_error(stderr)

    def parse_error_from_result(self, result: ExecutionResult) -> ErrorKind:
        """Classify the stderr of ``result``."""
        return self.classifier.parse_error_from_result(result)


async def run(
    args: Sequence[str],
    cwd: Path | str,
    options: InvocationOptions | None = None,
) -> ExecutionResult:
    """Run git once with default configuration."""
    return await GitProcess().exec(args, cwd, options)
