"""gitexec: run git as a subprocess and classify its failures.

gitexec runs git with a non-interactive environment, captures exit code and
output without hanging on credential prompts, and maps the stderr text of a
failed invocation onto a closed set of ``ErrorKind`` values.
"""

from gitexec.core.config import GitExecConfig
from gitexec.core.errors import (
    ErrorClassifier,
    ErrorKind,
    GitExecError,
    GitLaunchError,
    GitNotFoundError,
    GitTimeoutError,
    RepositoryPathNotFoundError,
    parse_error,
    parse_error_from_result,
)
from gitexec.facade import GitProcess, run
from gitexec.process import (
    ExecutionResult,
    InvocationOptions,
    ProcessExecutor,
    build_ask_pass_env,
    build_non_interactive_env,
)

__version__ = "0.3.0"

__all__ = [
    "GitExecConfig",
    "ErrorClassifier",
    "ErrorKind",
    "GitExecError",
    "GitLaunchError",
    "GitNotFoundError",
    "GitTimeoutError",
    "RepositoryPathNotFoundError",
    "parse_error",
    "parse_error_from_result",
    "GitProcess",
    "run",
    "ExecutionResult",
    "InvocationOptions",
    "ProcessExecutor",
    "build_ask_pass_env",
    "build_non_interactive_env",
    "__version__",
]
