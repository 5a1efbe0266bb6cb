"""gitexec command-line interface.

A thin diagnostic front end over ``GitProcess``:

    gitexec run --cwd repo -- fetch origin
    gitexec classify stderr.txt
    git push 2>&1 | gitexec classify
    gitexec kinds

Exit codes of ``run``: git's own exit code, 124 on timeout, 127 when git
could not be started.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from gitexec import __version__
from gitexec.core.config import GitExecConfig
from gitexec.core.constants import TRUNCATE_STDERR_TAIL_CHARS
from gitexec.core.errors import (
    ErrorClassifier,
    ErrorKind,
    GitLaunchError,
    GitTimeoutError,
)
from gitexec.core.logging import configure_logging, get_logger
from gitexec.facade import GitProcess
from gitexec.process import InvocationOptions, build_ask_pass_env

EXIT_TIMEOUT = 124
EXIT_LAUNCH_FAILED = 127

console = Console()
err_console = Console(stderr=True)

_logger = get_logger("cli")

app = typer.Typer(
    name="gitexec",
    help="Run git non-interactively and classify its failures",
    add_completion=False,
)


class _State:
    config: GitExecConfig = GitExecConfig()


_state = _State()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"gitexec v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            exists=True,
            readable=True,
            help="YAML configuration file",
            envvar="GITEXEC_CONFIG",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="GITEXEC_LOG_LEVEL",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            help="Log format: console or json",
            envvar="GITEXEC_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """gitexec - run git non-interactively and classify its failures."""
    try:
        config = GitExecConfig.from_yaml(config_file) if config_file else GitExecConfig()
        overrides = {
            key: value
            for key, value in (("log_level", log_level), ("log_format", log_format))
            if value
        }
        if overrides:
            config = GitExecConfig.model_validate({**config.model_dump(), **overrides})
    except (ValidationError, yaml.YAMLError) as e:
        err_console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(2) from e

    _state.config = config
    configure_logging(level=config.log_level, format=config.log_format)


def _kind_style(kind: ErrorKind) -> str:
    if kind is ErrorKind.UNCLASSIFIED:
        return "yellow"
    return "red" if kind.is_remote else "magenta"


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run(
    git_args: Annotated[
        list[str],
        typer.Argument(help="Arguments passed to git (put them after --)"),
    ],
    cwd: Annotated[
        Path,
        typer.Option("--cwd", "-C", help="Working directory for git"),
    ] = Path("."),
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", min=0.001, help="Kill git after this many seconds"),
    ] = None,
    username: Annotated[
        str | None,
        typer.Option("--username", help="Answer credential prompts with this username"),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", help="Answer credential prompts with this password"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Print the result as JSON"),
    ] = False,
) -> None:
    """Run git and report exit code and classified error kind."""
    env = None
    if username is not None or password is not None:
        env = build_ask_pass_env({}, username or "", password or "")

    git = GitProcess(_state.config)
    options = InvocationOptions(env=env, timeout_seconds=timeout)

    try:
        result = asyncio.run(git.exec(git_args, cwd, options))
    except GitTimeoutError as e:
        err_console.print(f"[red]Timed out:[/red] {e}")
        raise typer.Exit(EXIT_TIMEOUT) from e
    except GitLaunchError as e:
        err_console.print(f"[red]Launch failed:[/red] {e}")
        raise typer.Exit(EXIT_LAUNCH_FAILED) from e

    kind = git.parse_error_from_result(result) if not result.success else None
    _logger.info("cli.run_finished", exit_code=result.exit_code, kind=kind.value if kind else None)

    if json_output:
        payload = {
            "exit_code": result.exit_code,
            "kind": kind.value if kind else None,
            "stdout": result.stdout,
            "stderr": result.stderr,
            "duration_seconds": round(result.duration_seconds, 3),
        }
        console.print_json(json.dumps(payload))
    else:
        console.print(f"exit code: [bold]{result.exit_code}[/bold]")
        if kind is not None:
            console.print(f"kind: [{_kind_style(kind)}]{kind.value}[/]")
            tail = result.stderr.strip()[-TRUNCATE_STDERR_TAIL_CHARS:]
            if tail:
                console.print(tail, markup=False, highlight=False)

    raise typer.Exit(result.exit_code)


@app.command()
def classify(
    stderr_file: Annotated[
        Path | None,
        typer.Argument(help="File holding git's stderr (reads stdin if omitted)"),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="List every matching kind in table order"),
    ] = False,
) -> None:
    """Classify git stderr text without running git."""
    if stderr_file is not None:
        try:
            text = stderr_file.read_text(errors="replace")
        except OSError as e:
            err_console.print(f"[red]Cannot read file:[/red] {e}")
            raise typer.Exit(2) from e
    else:
        text = sys.stdin.read()

    classifier = ErrorClassifier()
    kind = classifier.parse_error(text)
    console.print(f"[{_kind_style(kind)}]{kind.value}[/]")

    if show_all:
        for extra in classifier.matching_kinds(text)[1:]:
            console.print(f"  also matches: {extra.value}")

    if kind is ErrorKind.UNCLASSIFIED:
        raise typer.Exit(1)


@app.command()
def kinds() -> None:
    """List every error kind the classifier can report."""
    table = Table(title="Error kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Remote")
    table.add_column("GitHub")
    for kind in ErrorKind:
        table.add_row(
            kind.value,
            "yes" if kind.is_remote else "",
            "yes" if kind.is_github_specific else "",
        )
    console.print(table)


__all__ = ["app", "main", "console"]
