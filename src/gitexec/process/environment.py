"""Environment construction for non-interactive git invocations.

git asks for credentials in three ways: a terminal prompt, an askpass
program (``GIT_ASKPASS``, ``core.askPass``, ``SSH_ASKPASS``), and credential
managers that may open a dialog. Any of them can block a headless caller
forever. The builders here return environment mappings under which every
credential request either fails immediately or is answered by the packaged
``askpass.sh`` responder with fixed values.

Both builders are pure: they copy ``base`` and never mutate it.
"""

from __future__ import annotations

from collections.abc import Mapping
from importlib.resources import files
from pathlib import Path

from gitexec.core.constants import (
    ENV_ASKPASS_PASSWORD,
    ENV_ASKPASS_USERNAME,
    ENV_GCM_INTERACTIVE,
    ENV_GIT_ASKPASS,
    ENV_SSH_ASKPASS,
    ENV_SSH_ASKPASS_REQUIRE,
    ENV_TERMINAL_PROMPT,
)

NON_INTERACTIVE_ENV: Mapping[str, str] = {
    ENV_TERMINAL_PROMPT: "0",
    # An empty GIT_ASKPASS stops git from falling back to core.askPass/SSH_ASKPASS.
    ENV_GIT_ASKPASS: "",
    ENV_SSH_ASKPASS: "",
    ENV_SSH_ASKPASS_REQUIRE: "never",
    ENV_GCM_INTERACTIVE: "never",
}
"""Variables forced on by ``build_non_interactive_env``."""

NON_INTERACTIVE_KEYS: frozenset[str] = frozenset({ENV_TERMINAL_PROMPT, ENV_GIT_ASKPASS})
"""Keys whose presence in a caller env means the caller controls prompting."""


def askpass_script_path() -> Path:
    """Return the location of the packaged askpass responder."""
    return Path(str(files("gitexec.process").joinpath("askpass.sh")))


def build_non_interactive_env(base: Mapping[str, str]) -> dict[str, str]:
    """Return ``base`` overlaid with variables that disable credential prompts.

    Any credential request made by git under this environment fails at once
    (e.g. ``could not read Username ...: terminal prompts disabled``).
    """
    env = dict(base)
    env.update(NON_INTERACTIVE_ENV)
    return env


def build_ask_pass_env(
    base: Mapping[str, str],
    username: str,
    password: str,
    askpass_path: Path | str | None = None,
) -> dict[str, str]:
    """Return ``base`` overlaid with an askpass responder answering fixed credentials.

    The responder prints ``username`` for prompts starting with "Username"
    and ``password`` for every other prompt, so an authentication attempt
    always completes (successfully or not) without user interaction.

    Args:
        base: Environment to start from; not modified.
        username: Value returned for username prompts.
        password: Value returned for password and passphrase prompts.
        askpass_path: Responder program to use instead of the packaged one.
    """
    responder = str(askpass_path) if askpass_path is not None else str(askpass_script_path())
    env = build_non_interactive_env(base)
    env.update({
        ENV_GIT_ASKPASS: responder,
        ENV_SSH_ASKPASS: responder,
        ENV_SSH_ASKPASS_REQUIRE: "force",
        ENV_ASKPASS_USERNAME: username,
        ENV_ASKPASS_PASSWORD: password,
    })
    return env


def overlay_environment(
    base: Mapping[str, str],
    *overlays: Mapping[str, str] | None,
) -> dict[str, str]:
    """Merge ``overlays`` onto a copy of ``base``; later mappings win."""
    env = dict(base)
    for overlay in overlays:
        if overlay:
            env.update(overlay)
    return env
