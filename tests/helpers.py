"""Shared test helpers for gitexec tests.

``STDERR_CORPUS`` pairs realistic stderr captured from git and common hosts
with the kind it must classify as. Each entry is checked against the default
table by ``tests/test_error_classifier.py``, so a pattern reorder that lets an
earlier entry shadow a later one fails loudly.
"""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path

import pytest

from gitexec.core.errors import ErrorKind

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

_SSH_TRAILER = (
    "fatal: Could not read from remote repository.\n"
    "\n"
    "Please make sure you have the correct access rights\n"
    "and the repository exists.\n"
)

STDERR_CORPUS: list[tuple[ErrorKind, str]] = [
    # Remote / transport
    (
        ErrorKind.SSH_KEY_AUDIT_UNVERIFIED,
        "ERROR: We're doing an SSH key audit.\n"
        "Please visit https://github.com/settings/ssh/audit/2\n"
        "to approve this key so we know it's safe.\n"
        "\n"
        "[EPOLICYKEYAGE]\n" + _SSH_TRAILER,
    ),
    (
        ErrorKind.PROXY_AUTHENTICATION_REQUIRED,
        "fatal: unable to access 'https://github.com/octo/repo.git/': "
        "Received HTTP code 407 from proxy after CONNECT\n",
    ),
    (
        ErrorKind.HTTPS_AUTHENTICATION_FAILED,
        "remote: Invalid username or password.\n"
        "fatal: Authentication failed for 'https://github.com/octo/private.git/'\n",
    ),
    (
        ErrorKind.HTTPS_AUTHENTICATION_FAILED,
        "fatal: could not read Username for 'https://github.com': terminal prompts disabled\n",
    ),
    (
        ErrorKind.HTTPS_AUTHENTICATION_FAILED,
        "remote: Permission to octo/repo.git denied to someone.\n"
        "fatal: unable to access 'https://github.com/octo/repo.git/': "
        "The requested URL returned error: 403\n",
    ),
    (
        ErrorKind.SSH_AUTHENTICATION_FAILED,
        "remote: Invalid credentials\n"
        "fatal: Authentication failed for 'ssh://git@example.com/octo/repo.git'\n",
    ),
    (
        ErrorKind.SSH_REPOSITORY_NOT_FOUND,
        "ERROR: Repository not found.\n" + _SSH_TRAILER,
    ),
    (
        ErrorKind.HOST_DOWN,
        "ssh: Could not resolve hostname nowhere.invalid: Name or service not known\n"
        + _SSH_TRAILER,
    ),
    (
        ErrorKind.SSH_PERMISSION_DENIED,
        "git@github.com: Permission denied (publickey).\n" + _SSH_TRAILER,
    ),
    (
        ErrorKind.REMOTE_DISCONNECTION,
        "error: RPC failed; curl 56 GnuTLS recv error (-9): Error decoding the received TLS packet.\n"
        "fatal: the remote end hung up unexpectedly\n"
        "fatal: early EOF\n",
    ),
    (
        ErrorKind.HOST_DOWN,
        "fatal: unable to access 'https://git.example.com/octo/repo.git/': "
        "Failed to connect to git.example.com port 443: Host is down\n",
    ),
    (
        ErrorKind.HOST_DOWN,
        "fatal: unable to access 'https://nowhere.invalid/octo/repo.git/': "
        "Could not resolve host: nowhere.invalid\n",
    ),
    (
        ErrorKind.HTTPS_REPOSITORY_NOT_FOUND,
        "remote: Repository not found.\n"
        "fatal: repository 'https://github.com/octo/missing.git/' not found\n",
    ),
    # Merge / rebase / revert
    (
        ErrorKind.REBASE_CONFLICTS,
        "error: Failed to merge in the changes.\n"
        "Patch failed at 0001 Change a\n"
        "The copy of the patch that failed is found in: .git/rebase-apply/patch\n",
    ),
    (
        ErrorKind.MERGE_CONFLICTS,
        "Auto-merging a.txt\n"
        "CONFLICT (content): Merge conflict in a.txt\n"
        "Automatic merge failed; fix conflicts and then commit the result.\n",
    ),
    (
        ErrorKind.REVERT_CONFLICTS,
        "error: could not revert 1a2b3c4... Change a\n"
        "hint: after resolving the conflicts, mark the corrected paths\n"
        "hint: with 'git add <paths>' or 'git rm <paths>'\n"
        "hint: and commit the result with 'git commit'\n",
    ),
    (
        ErrorKind.EMPTY_REBASE_PATCH,
        "Applying: Add a file\n"
        "No changes - did you forget to use 'git add'?\n"
        "If there is nothing left to stage, chances are that something else\n"
        "already introduced the same changes; you might want to skip this patch.\n",
    ),
    (
        ErrorKind.NO_MATCHING_REMOTE_BRANCH,
        "There are no candidates for merging among the refs that you just fetched.\n"
        "Generally this means that you provided a wildcard refspec which had no\n"
        "matches on the remote end.\n",
    ),
    (
        ErrorKind.NO_EXISTING_REMOTE_BRANCH,
        "Your configuration specifies to merge with the ref 'refs/heads/gone'\n"
        "from the remote, but no such ref was fetched.\n",
    ),
    (ErrorKind.INVALID_MERGE, "merge: nope - not something we can merge\n"),
    (ErrorKind.INVALID_REBASE, "fatal: invalid upstream 'nope'\n"),
    (
        ErrorKind.NON_FAST_FORWARD_MERGE_INTO_EMPTY_HEAD,
        "fatal: Non-fast-forward commit does not make sense into an empty head\n",
    ),
    (ErrorKind.CANNOT_MERGE_UNRELATED_HISTORIES, "fatal: refusing to merge unrelated histories\n"),
    (ErrorKind.NO_MERGE_TO_ABORT, "fatal: There is no merge to abort (MERGE_HEAD missing).\n"),
    (
        ErrorKind.UNRESOLVED_CONFLICTS,
        "error: Pulling is not possible because you have unmerged files.\n"
        "hint: Fix them up in the work tree, and then use 'git add/rm <file>'\n"
        "fatal: Exiting because of an unresolved conflict.\n",
    ),
    (
        ErrorKind.CONFLICT_MODIFY_DELETED_IN_BRANCH,
        "CONFLICT (modify/delete): a.txt deleted in HEAD and modified in feature. "
        "Version feature of a.txt left in tree.\n",
    ),
    (
        ErrorKind.MERGE_WITH_LOCAL_CHANGES,
        "error: Your local changes to the following files would be overwritten by merge:\n"
        "\ta.txt\n"
        "Please commit your changes or stash them before you merge.\n"
        "Aborting\n",
    ),
    (
        ErrorKind.REBASE_WITH_LOCAL_CHANGES,
        "error: cannot pull with rebase: You have unstaged changes.\n"
        "error: please commit or stash them.\n",
    ),
    (
        ErrorKind.MERGE_COMMIT_NO_MAINLINE_OPTION,
        "error: commit 1a2b3c4d is a merge but no -m option was given.\n"
        "fatal: revert failed\n",
    ),
    # Push
    (
        ErrorKind.PUSH_NOT_FAST_FORWARD,
        "To https://github.com/octo/repo.git\n"
        " ! [rejected]        main -> main (non-fast-forward)\n"
        "error: failed to push some refs to 'https://github.com/octo/repo.git'\n"
        "hint: Updates were rejected because the tip of your current branch is behind\n",
    ),
    (
        ErrorKind.PUSH_NOT_FAST_FORWARD,
        "To https://github.com/octo/repo.git\n"
        " ! [rejected]        main -> main (fetch first)\n"
        "error: failed to push some refs to 'https://github.com/octo/repo.git'\n",
    ),
    (
        ErrorKind.BRANCH_DELETION_FAILED,
        "error: unable to delete 'feature': remote ref does not exist\n"
        "error: failed to push some refs to 'https://github.com/octo/repo.git'\n",
    ),
    (
        ErrorKind.DEFAULT_BRANCH_DELETION_FAILED,
        "To https://github.com/octo/repo.git\n"
        " ! [remote rejected] main (deletion of the current branch prohibited)\n"
        "error: failed to push some refs to 'https://github.com/octo/repo.git'\n",
    ),
    # Local repository state
    (ErrorKind.NOTHING_TO_COMMIT, "On branch main\nnothing to commit, working tree clean\n"),
    (
        ErrorKind.NO_SUBMODULE_MAPPING,
        "fatal: No submodule mapping found in .gitmodules for path 'vendor/lib'\n",
    ),
    (
        ErrorKind.SUBMODULE_REPOSITORY_DOES_NOT_EXIST,
        "fatal: repository '/tmp/missing' does not exist\n"
        "fatal: clone of '/tmp/missing' into submodule path '/tmp/repo/vendor/lib' failed\n",
    ),
    (
        ErrorKind.INVALID_SUBMODULE_SHA,
        "Fetched in submodule path 'vendor/lib', but it did not contain 1a2b3c4d. "
        "Direct fetching of that commit failed.\n",
    ),
    (
        ErrorKind.LOCAL_PERMISSION_DENIED,
        "fatal: could not create work tree dir 'repo': Permission denied\n",
    ),
    (
        ErrorKind.PATCH_DOES_NOT_APPLY,
        "error: patch failed: a.txt:1\nerror: a.txt: patch does not apply\n",
    ),
    (ErrorKind.BRANCH_ALREADY_EXISTS, "fatal: a branch named 'feature' already exists\n"),
    (ErrorKind.BAD_REVISION, "fatal: bad revision 'nope'\n"),
    (
        ErrorKind.NOT_A_GIT_REPOSITORY,
        "fatal: not a git repository (or any of the parent directories): .git\n",
    ),
    (
        ErrorKind.LFS_ATTRIBUTE_DOES_NOT_MATCH,
        'The filter.lfs.clean attribute should be "git-lfs clean -- %f" but is ""\n',
    ),
    (
        ErrorKind.LFS_SMUDGE_FILTER_FAILED,
        "Downloading big.bin (1.2 MB)\n"
        "Error downloading object: big.bin (4d7a214): Smudge error: object does not exist\n"
        "error: external filter 'git-lfs filter-process' failed\n"
        "fatal: big.bin: smudge filter lfs failed\n",
    ),
    (
        ErrorKind.BRANCH_RENAME_FAILED,
        "error: refname refs/heads/nope not found\nfatal: Branch rename failed\n",
    ),
    (ErrorKind.PATH_DOES_NOT_EXIST, "fatal: path 'missing.txt' does not exist in 'HEAD'\n"),
    (ErrorKind.INVALID_OBJECT_NAME, "fatal: invalid object name 'nope'.\n"),
    (
        ErrorKind.OUTSIDE_REPOSITORY,
        "fatal: /tmp/elsewhere/a.txt: '/tmp/elsewhere/a.txt' is outside repository at '/tmp/repo'\n",
    ),
    (
        ErrorKind.LOCK_FILE_ALREADY_EXISTS,
        "fatal: Unable to create '/tmp/repo/.git/index.lock': File exists.\n"
        "\n"
        "Another git process seems to be running in this repository, e.g.\n"
        "an editor opened by 'git commit'. Please make sure all processes\n"
        "are terminated then try again.\n",
    ),
    (
        ErrorKind.LOCAL_CHANGES_OVERWRITTEN,
        "error: Your local changes to the following files would be overwritten by checkout:\n"
        "\ta.txt\n"
        "Please commit your changes or stash them before you switch branches.\n"
        "Aborting\n",
    ),
    (
        ErrorKind.LOCAL_CHANGES_OVERWRITTEN,
        "error: The following untracked working tree files would be overwritten by checkout:\n"
        "\tb.txt\n",
    ),
    (
        ErrorKind.GPG_FAILED_TO_SIGN_DATA,
        "error: gpg failed to sign the data\nfatal: failed to write commit object\n",
    ),
    (
        ErrorKind.CONFIG_LOCK_FILE_ALREADY_EXISTS,
        "error: could not lock config file .git/config: File exists\n",
    ),
    (ErrorKind.REMOTE_ALREADY_EXISTS, "error: remote origin already exists.\n"),
    (ErrorKind.TAG_ALREADY_EXISTS, "fatal: tag 'v1.0' already exists\n"),
    (
        ErrorKind.UNSAFE_DIRECTORY,
        "fatal: detected dubious ownership in repository at '/tmp/repo'\n"
        "To add an exception for this directory, call:\n"
        "\n"
        "\tgit config --global --add safe.directory /tmp/repo\n",
    ),
    (
        ErrorKind.PATH_EXISTS_BUT_NOT_IN_REF,
        "fatal: path 'a.txt' exists on disk, but not in 'HEAD'\n",
    ),
    # GitHub push policy
    (
        ErrorKind.PUSH_WITH_FILE_SIZE_EXCEEDING_LIMIT,
        "remote: error: GH001: Large files detected. "
        "You may want to try Git Large File Storage - https://git-lfs.github.com.\n",
    ),
    (
        ErrorKind.HEX_BRANCH_NAME_REJECTED,
        "remote: error: GH002: Sorry, branch or tag names consisting of 40 hex characters "
        "are not allowed.\n",
    ),
    (
        ErrorKind.FORCE_PUSH_REJECTED,
        "remote: error: GH003: Sorry, force-pushing to main is not allowed.\n",
    ),
    (
        ErrorKind.INVALID_REF_LENGTH,
        "remote: error: GH005: Sorry, refs longer than 255 bytes are not allowed.\n",
    ),
    (
        ErrorKind.PROTECTED_BRANCH_REQUIRES_REVIEW,
        "remote: error: GH006: Protected branch update failed for refs/heads/main.\n"
        "remote: error: At least one approved review is required\n",
    ),
    (
        ErrorKind.PROTECTED_BRANCH_FORCE_PUSH,
        "remote: error: GH006: Protected branch update failed for refs/heads/main.\n"
        "remote: error: Cannot force-push to a protected branch\n",
    ),
    (
        ErrorKind.PROTECTED_BRANCH_DELETE_REJECTED,
        "remote: error: GH006: Protected branch update failed for refs/heads/main.\n"
        "remote: error: Cannot delete a protected branch\n",
    ),
    (
        ErrorKind.PROTECTED_BRANCH_REQUIRED_STATUS,
        "remote: error: GH006: Protected branch update failed for refs/heads/main.\n"
        'remote: error: Required status check "ci/build" is expected.\n',
    ),
    (
        ErrorKind.PUSH_WITH_PRIVATE_EMAIL,
        "remote: error: GH007: Your push would publish a private email address.\n"
        "remote: You can make your email public or disable this protection by visiting:\n",
    ),
]


def corpus_id(entry: tuple[ErrorKind, str]) -> str:
    """Readable pytest id for a corpus entry."""
    return entry[0].value


def write_script(path: Path, body: str) -> Path:
    """Write an executable ``sh`` script and return its path.

    Used as a stand-in ``git_executable`` when a test needs a child process
    with precise behaviour (hang, ignore SIGTERM, spawn grandchildren).
    """
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def pid_alive(pid: int) -> bool:
    """True if ``pid`` names a running (non-zombie) process."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    stat_file = Path(f"/proc/{pid}/stat")
    try:
        fields = stat_file.read_text().rsplit(")", 1)[1].split()
    except (OSError, IndexError):
        return True
    return fields[0] != "Z"
