"""Global constants for gitexec.

Centralizes magic numbers and environment variable names used throughout
the codebase.
"""

# =============================================================================
# Process Execution Defaults
# =============================================================================

GRACEFUL_TERMINATION_TIMEOUT_SECONDS = 5.0
"""Seconds to wait after SIGTERM before the process group is killed."""

STREAM_READ_CHUNK_BYTES = 8192
"""Chunk size used when draining child stdout/stderr."""

TRUNCATE_STDERR_TAIL_CHARS = 500
"""Truncation limit for stderr tails in logs and CLI output."""

SIGNAL_EXIT_CODE_BASE = 128
"""Exit code base for children killed by a signal (128 + signal number)."""

# =============================================================================
# Environment Variables
# =============================================================================

ENV_TERMINAL_PROMPT = "GIT_TERMINAL_PROMPT"
"""Set to "0" to stop git from prompting on the terminal."""

ENV_GIT_ASKPASS = "GIT_ASKPASS"
"""Program git runs to obtain credentials; empty disables it."""

ENV_SSH_ASKPASS = "SSH_ASKPASS"
"""Fallback askpass program used by git and ssh."""

ENV_SSH_ASKPASS_REQUIRE = "SSH_ASKPASS_REQUIRE"
"""OpenSSH switch controlling whether SSH_ASKPASS is consulted."""

ENV_GCM_INTERACTIVE = "GCM_INTERACTIVE"
"""Git Credential Manager switch; "never" forbids interactive dialogs."""

ENV_ASKPASS_USERNAME = "TEST_USERNAME"
"""Username printed by the packaged askpass responder."""

ENV_ASKPASS_PASSWORD = "TEST_PASSWORD"
"""Password printed by the packaged askpass responder."""

ENV_GIT_PATH = "GITEXEC_GIT_PATH"
"""Overrides the git executable configured for gitexec."""
