"""Subprocess executor for git invocations.

Handles one invocation's lifecycle: spawn, drain, timeout, cleanup.

Security Note: Uses asyncio.create_subprocess_exec() which is shell-injection
safe - arguments are passed as a list, not interpolated into a shell command.

Each child runs in its own session (process group) so that helpers git
spawns, such as ``git-remote-https`` or ``ssh``, are terminated together
with it on timeout or cancellation.

Example:

    executor = ProcessExecutor(default_timeout_seconds=60)
    result = await executor.exec(["fetch", "origin"], cwd=repo_path)
    if not result.success:
        kind = parse_error(result.stderr)
"""

from __future__ import annotations

import asyncio
import os
import signal
import time
from collections.abc import Mapping, Sequence
from pathlib import Path

from gitexec.core.constants import (
    GRACEFUL_TERMINATION_TIMEOUT_SECONDS,
    SIGNAL_EXIT_CODE_BASE,
    STREAM_READ_CHUNK_BYTES,
    TRUNCATE_STDERR_TAIL_CHARS,
)
from gitexec.core.errors.exceptions import (
    GitLaunchError,
    GitNotFoundError,
    GitTimeoutError,
    RepositoryPathNotFoundError,
)
from gitexec.core.errors.signals import get_signal_name
from gitexec.core.logging import InvocationContext, get_logger, with_context
from gitexec.process.environment import (
    NON_INTERACTIVE_KEYS,
    build_non_interactive_env,
    overlay_environment,
)
from gitexec.process.models import ExecutionResult, InvocationOptions

_logger = get_logger("executor")


def _decode(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode("utf-8", errors="replace")


class ProcessExecutor:
    """Runs git invocations to completion and captures their result.

    Features:
    - Environment layering: base < non-interactive defaults < per-call env
    - Concurrent draining of stdout and stderr (no pipe back-pressure deadlock)
    - Timeout handling with graceful then forced termination of the process group
    - Cleanup on cancellation so no child outlives its invocation

    The executor holds configuration only; every ``exec`` call is independent
    and may run concurrently with others.
    """

    def __init__(
        self,
        git_executable: str = "git",
        base_env: Mapping[str, str] | None = None,
        default_timeout_seconds: float | None = None,
        non_interactive: bool = True,
    ) -> None:
        """Initialize the executor.

        Args:
            git_executable: git binary to run.
            base_env: Environment every invocation starts from. None means a
                copy of ``os.environ`` taken at call time.
            default_timeout_seconds: Timeout applied when the call does not
                set one. None waits indefinitely.
            non_interactive: Overlay the prompt-suppressing variables onto
                the base environment.
        """
        self.git_executable = git_executable
        self.base_env: dict[str, str] | None = dict(base_env) if base_env is not None else None
        self.default_timeout_seconds = default_timeout_seconds
        self.non_interactive = non_interactive

    def build_environment(self, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return the environment for one invocation.

        Precedence, lowest first: base environment, non-interactive defaults,
        ``overrides``. The non-interactive defaults are skipped when
        ``overrides`` sets any of ``NON_INTERACTIVE_KEYS``: the caller then
        controls prompting. The base mapping is copied, never mutated.
        """
        base = dict(os.environ) if self.base_env is None else self.base_env
        caller_controls_prompting = bool(overrides) and not NON_INTERACTIVE_KEYS.isdisjoint(overrides)
        if self.non_interactive and not caller_controls_prompting:
            base = build_non_interactive_env(base)
        return overlay_environment(base, overrides)

    async def exec(
        self,
        args: Sequence[str],
        cwd: Path | str,
        options: InvocationOptions | None = None,
    ) -> ExecutionResult:
        """Run ``git <args>`` in ``cwd`` and wait for it to finish.

        Completion means git has exited and its stdout and stderr have
        closed. A helper that leaves git's process group (e.g. via
        ``setsid``) and keeps the pipes open delays completion: without a
        timeout the call waits for the helper; with one, the result git
        produced is returned once the timeout elapses, since git itself
        already exited.

        Args:
            args: git arguments, without the executable.
            cwd: Existing working directory for the invocation.
            options: Per-call environment overrides, timeout and stdin.

        Returns:
            ExecutionResult with exit code and decoded output. A non-zero
            exit code is reported here, not raised.

        Raises:
            ValueError: If ``args`` is empty.
            RepositoryPathNotFoundError: If ``cwd`` is not an existing directory.
            GitNotFoundError: If the git executable does not exist.
            GitLaunchError: If the child could not be started for another reason.
            GitTimeoutError: If the timeout elapsed while git was still running;
                the child has been killed.
        """
        git_args = tuple(args)
        if not git_args:
            raise ValueError("git arguments must not be empty")

        cwd_path = Path(cwd)
        if not cwd_path.is_dir():
            _logger.warning("git.launch_failed", reason="cwd_missing", cwd=str(cwd_path))
            raise RepositoryPathNotFoundError(cwd_path, git_args)

        options = options or InvocationOptions()
        timeout = (
            options.timeout_seconds
            if options.timeout_seconds is not None
            else self.default_timeout_seconds
        )
        env = self.build_environment(options.env)
        if self.non_interactive and options.env and NON_INTERACTIVE_KEYS & options.env.keys():
            _logger.debug(
                "git.non_interactive_skipped",
                keys=sorted(NON_INTERACTIVE_KEYS & options.env.keys()),
            )
        stdin_data = options.stdin.encode() if isinstance(options.stdin, str) else options.stdin

        ctx = InvocationContext(subcommand=git_args[0], cwd=str(cwd_path))
        with with_context(ctx):
            return await self._run(git_args, cwd_path, env, timeout, stdin_data)

    async def _run(
        self,
        git_args: tuple[str, ...],
        cwd: Path,
        env: dict[str, str],
        timeout: float | None,
        stdin_data: bytes | None,
    ) -> ExecutionResult:
        cmd = [self.git_executable, *git_args]
        _logger.debug(
            "git.starting",
            executable=self.git_executable,
            args_count=len(git_args),
            timeout_seconds=timeout,
        )

        start_time = time.monotonic()
        try:
            # start_new_session creates a new process group for clean cleanup
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE if stdin_data is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
                start_new_session=True,
            )
        except FileNotFoundError as e:
            # cwd was checked above, so the executable is what is missing
            _logger.error("git.launch_failed", reason="not_found", executable=self.git_executable)
            raise GitNotFoundError(self.git_executable, git_args) from e
        except OSError as e:
            _logger.error("git.launch_failed", reason="os_error", error=str(e))
            raise GitLaunchError(f"Failed to start git: {e}", git_args) from e

        stdout_chunks: list[bytes] = []
        stderr_chunks: list[bytes] = []

        try:
            await asyncio.wait_for(
                self._communicate(process, stdin_data, stdout_chunks, stderr_chunks),
                timeout=timeout,
            )
        except TimeoutError:
            if process.returncode is not None:
                # git exited but a helper outside its process group still
                # holds the pipes open; report what git produced.
                _logger.warning(
                    "git.output_held_open",
                    pid=process.pid,
                    exit_code=process.returncode,
                    timeout_seconds=timeout,
                )
                await self._kill_process_group(process)
            else:
                await self._terminate_process(process)
                duration = time.monotonic() - start_time
                _logger.warning(
                    "git.timeout",
                    pid=process.pid,
                    timeout_seconds=timeout,
                    duration_seconds=duration,
                )
                raise GitTimeoutError(
                    git_args,
                    timeout_seconds=timeout or 0.0,
                    duration_seconds=duration,
                    stdout=_decode(stdout_chunks),
                    stderr=_decode(stderr_chunks),
                ) from None
        except asyncio.CancelledError:
            _logger.warning("git.cancelled", pid=process.pid)
            await self._kill_process_group(process)
            raise

        duration = time.monotonic() - start_time
        returncode = process.returncode if process.returncode is not None else 0

        # Negative returncode means killed by signal
        exit_signal: int | None = None
        exit_code = returncode
        if returncode < 0:
            exit_signal = -returncode
            exit_code = SIGNAL_EXIT_CODE_BASE + exit_signal

        result = ExecutionResult(
            exit_code=exit_code,
            stdout=_decode(stdout_chunks),
            stderr=_decode(stderr_chunks),
            duration_seconds=duration,
            exit_signal=exit_signal,
            args=git_args,
        )

        _logger.debug(
            "git.completed",
            pid=process.pid,
            exit_code=exit_code,
            exit_signal=get_signal_name(exit_signal) if exit_signal else None,
            duration_seconds=duration,
            stdout_bytes=sum(len(c) for c in stdout_chunks),
            stderr_tail=result.stderr[-TRUNCATE_STDERR_TAIL_CHARS:] if exit_code else "",
        )
        return result

    async def _communicate(
        self,
        process: asyncio.subprocess.Process,
        stdin_data: bytes | None,
        stdout_chunks: list[bytes],
        stderr_chunks: list[bytes],
    ) -> None:
        """Feed stdin and drain both output streams, then wait for exit.

        Output is appended to the given lists as it arrives so that partial
        output is still available if the caller times out.
        """

        async def read_stream(
            stream: asyncio.StreamReader | None,
            chunks: list[bytes],
        ) -> None:
            if stream is None:
                return
            while True:
                chunk = await stream.read(STREAM_READ_CHUNK_BYTES)
                if not chunk:
                    break
                chunks.append(chunk)

        async def write_stdin() -> None:
            if process.stdin is None or stdin_data is None:
                return
            try:
                process.stdin.write(stdin_data)
                await process.stdin.drain()
            except (BrokenPipeError, ConnectionResetError):
                pass  # git exited without reading all of its input
            finally:
                process.stdin.close()

        await asyncio.gather(
            write_stdin(),
            read_stream(process.stdout, stdout_chunks),
            read_stream(process.stderr, stderr_chunks),
        )
        await process.wait()

    async def _terminate_process(self, process: asyncio.subprocess.Process) -> None:
        """Gracefully terminate the process group, then force kill what remains."""
        try:
            os.killpg(process.pid, signal.SIGTERM)
        except (OSError, ProcessLookupError):
            pass  # Process group already gone

        try:
            await asyncio.wait_for(
                process.wait(), timeout=GRACEFUL_TERMINATION_TIMEOUT_SECONDS
            )
        except TimeoutError:
            pass

        # Sweep helpers (git-remote-https, ssh) that ignored SIGTERM
        await self._kill_process_group(process)

    async def _kill_process_group(self, process: asyncio.subprocess.Process) -> None:
        """Kill the entire process group (process + all children)."""
        # start_new_session makes the child its own group leader: pgid == pid
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (OSError, ProcessLookupError):
            pass  # Process group may not exist

        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass

        await process.wait()
