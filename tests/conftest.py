"""Pytest fixtures for gitexec tests."""

import logging
import os
import subprocess
from pathlib import Path
from typing import Generator

import pytest
import structlog

NETWORK_TESTS_ENABLED = os.environ.get("GITEXEC_NETWORK_TESTS") == "1"


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip tests marked ``network`` unless GITEXEC_NETWORK_TESTS=1."""
    if NETWORK_TESTS_ENABLED:
        return
    skip_network = pytest.mark.skip(reason="set GITEXEC_NETWORK_TESTS=1 to run network tests")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset structlog and root logger handlers around each test."""
    structlog.reset_defaults()

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def isolated_env(tmp_path: Path) -> dict[str, str]:
    """A minimal host environment that ignores the user's git config."""
    home = tmp_path / "home"
    home.mkdir()
    return {
        "PATH": os.environ.get("PATH", "/usr/bin:/bin"),
        "HOME": str(home),
        "GIT_CONFIG_NOSYSTEM": "1",
        "GIT_AUTHOR_NAME": "Test",
        "GIT_AUTHOR_EMAIL": "test@test.com",
        "GIT_COMMITTER_NAME": "Test",
        "GIT_COMMITTER_EMAIL": "test@test.com",
    }


@pytest.fixture
def blank_dir(tmp_path: Path) -> Path:
    """An empty directory to clone into."""
    path = tmp_path / "blank"
    path.mkdir()
    return path


@pytest.fixture
def git_repo(tmp_path: Path, isolated_env: dict[str, str]) -> Path:
    """Create a temporary git repository with an initial commit.

    Yields the repository path; the current working directory is untouched.
    """
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    run = dict(cwd=repo_dir, env=isolated_env, capture_output=True, check=True)
    subprocess.run(["git", "init"], **run)
    (repo_dir / "init.txt").write_text("init\n")
    subprocess.run(["git", "add", "."], **run)
    subprocess.run(["git", "commit", "-m", "init"], **run)
    return repo_dir
