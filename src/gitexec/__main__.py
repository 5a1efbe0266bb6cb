"""Allow ``python -m gitexec``."""

from gitexec.cli import app

app()
