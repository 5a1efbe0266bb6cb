"""Configuration model for gitexec.

``GitExecConfig`` describes how git is located and invoked. It can be built
in code, loaded from YAML, or left at its defaults:

Example YAML:
    git_executable: /usr/local/bin/git
    timeout_seconds: 120
    env:
      GIT_SSL_NO_VERIFY: "1"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from gitexec.core.constants import ENV_GIT_PATH

# Overriding these would change which programs git loads or runs.
_BLOCKED_ENV_KEYS: frozenset[str] = frozenset({
    "PATH", "LD_PRELOAD", "LD_LIBRARY_PATH",
    "DYLD_INSERT_LIBRARIES", "DYLD_LIBRARY_PATH",
})


class GitExecConfig(BaseModel):
    """Settings shared by every invocation issued through ``GitProcess``."""

    git_executable: str = Field(
        default="git",
        min_length=1,
        description="git binary to run; a bare name is looked up on PATH",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Default per-invocation timeout. None waits indefinitely.",
    )
    inherit_environment: bool = Field(
        default=True,
        description="Start from the host process environment instead of an empty one",
    )
    non_interactive: bool = Field(
        default=True,
        description="Force credential prompts off for every invocation",
    )
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Variables overlaid on the inherited environment for every call",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum log level used by the CLI",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer used by the CLI",
    )

    @field_validator("env")
    @classmethod
    def _validate_env_keys(cls, value: dict[str, str]) -> dict[str, str]:
        for key in value:
            if key.upper() in _BLOCKED_ENV_KEYS:
                raise ValueError(f"env cannot override security-sensitive variable: {key}")
        return value

    def resolved_git_executable(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the git binary to run, honouring ``GITEXEC_GIT_PATH``."""
        source = os.environ if environ is None else environ
        override = source.get(ENV_GIT_PATH)
        return override or self.git_executable

    def base_environment(self, environ: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return a fresh copy of the environment every invocation starts from.

        Args:
            environ: Host environment to inherit from (defaults to os.environ).
        """
        base: dict[str, str] = {}
        if self.inherit_environment:
            base.update(os.environ if environ is None else environ)
        base.update(self.env)
        return base

    @classmethod
    def from_yaml(cls, path: Path) -> GitExecConfig:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml_string(cls, yaml_str: str) -> GitExecConfig:
        """Load configuration from a YAML string."""
        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data or {})
