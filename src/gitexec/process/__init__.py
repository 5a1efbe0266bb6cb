"""git process execution: environment, executor and result models."""

from gitexec.process.environment import (
    NON_INTERACTIVE_ENV,
    NON_INTERACTIVE_KEYS,
    askpass_script_path,
    build_ask_pass_env,
    build_non_interactive_env,
)
from gitexec.process.executor import ProcessExecutor
from gitexec.process.models import ExecutionResult, InvocationOptions

__all__ = [
    "NON_INTERACTIVE_ENV",
    "NON_INTERACTIVE_KEYS",
    "askpass_script_path",
    "build_ask_pass_env",
    "build_non_interactive_env",
    "ProcessExecutor",
    "ExecutionResult",
    "InvocationOptions",
]
