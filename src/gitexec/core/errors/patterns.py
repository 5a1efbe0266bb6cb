"""Ordered stderr pattern table for git error classification.

The table maps git's (and the remote host's) stderr wording onto
``ErrorKind`` values. It is data, not logic: the classifier walks it in
order and the first matching entry wins, so entries are authored from most
specific to least specific. Provider-specific phrasing comes before generic
phrasing, HTTPS authentication comes before the bare "Authentication failed"
line, and SSH repository/host errors come before the "Could not read from
remote repository" line that ssh appends to all of them.

git's messages change between releases. When a message changes, update the
pattern and add the new wording to ``STDERR_CORPUS`` in ``tests/helpers.py``
rather than adding branches to the classifier.

Matching is case-sensitive. Where git is known to vary the case of a word
the pattern uses a character class (``[Tt]he``, ``[Nn]ot``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .kinds import ErrorKind


@dataclass(frozen=True)
class ErrorPattern:
    """A single entry of the classification table.

    Attributes:
        kind: The kind reported when this entry matches.
        pattern: Compiled regex searched against the raw stderr text.
        description: Short human-readable note on what the entry covers.
    """

    kind: ErrorKind
    pattern: re.Pattern[str]
    description: str = ""

    def matches(self, text: str) -> bool:
        """Return True if the pattern occurs anywhere in ``text``."""
        return self.pattern.search(text) is not None

    def search(self, text: str) -> re.Match[str] | None:
        return self.pattern.search(text)


def _entry(kind: ErrorKind, regex: str, description: str = "") -> ErrorPattern:
    return ErrorPattern(kind=kind, pattern=re.compile(regex), description=description)


DEFAULT_ERROR_PATTERNS: tuple[ErrorPattern, ...] = (
    # -------------------------------------------------------------------------
    # Remote authentication and lookup
    # -------------------------------------------------------------------------
    _entry(
        ErrorKind.SSH_KEY_AUDIT_UNVERIFIED,
        r"ERROR: ([\s\S]+?)\n+\[EPOLICYKEYAGE\]\n+fatal: Could not read from remote repository.",
        "GitHub requires the SSH key to be re-approved",
    ),
    _entry(
        ErrorKind.PROXY_AUTHENTICATION_REQUIRED,
        r"fatal: unable to access '(.+)': Received HTTP code 407 from proxy after CONNECT",
        "proxy demanded credentials",
    ),
    _entry(
        ErrorKind.HTTPS_AUTHENTICATION_FAILED,
        r"fatal: Authentication failed for 'https?://",
        "credentials rejected by an HTTPS remote",
    ),
    _entry(
        ErrorKind.HTTPS_AUTHENTICATION_FAILED,
        r"fatal: could not read (Username|Password) for 'https?://(.+)': terminal prompts disabled",
        "HTTPS remote asked for credentials while prompting was disabled",
    ),
    _entry(
        ErrorKind.SSH_AUTHENTICATION_FAILED,
        r"fatal: Authentication failed",
        "authentication failed on a non-HTTPS transport",
    ),
    _entry(
        ErrorKind.SSH_REPOSITORY_NOT_FOUND,
        r"ERROR: Repository not found",
        "SSH remote has no such repository",
    ),
    _entry(
        ErrorKind.HOST_DOWN,
        r"ssh: Could not resolve hostname (.+)",
        "SSH host name did not resolve",
    ),
    _entry(
        ErrorKind.SSH_PERMISSION_DENIED,
        r"fatal: Could not read from remote repository.",
        "SSH remote refused access",
    ),
    _entry(
        ErrorKind.HTTPS_AUTHENTICATION_FAILED,
        r"The requested URL returned error: 403",
        "HTTPS remote answered 403",
    ),
    _entry(
        ErrorKind.REMOTE_DISCONNECTION,
        r"fatal: [Tt]he remote end hung up unexpectedly",
    ),
    _entry(
        ErrorKind.HOST_DOWN,
        r"fatal: unable to access '(.+)': Failed to connect to (.+): Host is down",
    ),
    _entry(
        ErrorKind.HOST_DOWN,
        r"fatal: unable to access '(.+)': Could not resolve host: (.+)",
    ),
    # -------------------------------------------------------------------------
    # Merge, rebase and revert
    # -------------------------------------------------------------------------
    _entry(ErrorKind.REBASE_CONFLICTS, r"Failed to merge in the changes."),
    _entry(
        ErrorKind.MERGE_CONFLICTS,
        r"(Merge conflict|Automatic merge failed; fix conflicts and then commit the result.)",
    ),
    _entry(
        ErrorKind.HTTPS_REPOSITORY_NOT_FOUND,
        r"fatal: repository '(.+)' not found",
        "HTTPS remote has no such repository (or hides it)",
    ),
    _entry(
        ErrorKind.PUSH_NOT_FAST_FORWARD,
        r"\((non-fast-forward|fetch first)\)\nerror: failed to push some refs to '.*'",
    ),
    _entry(
        ErrorKind.BRANCH_DELETION_FAILED,
        r"error: unable to delete '(.+)': remote ref does not exist",
    ),
    _entry(
        ErrorKind.DEFAULT_BRANCH_DELETION_FAILED,
        r"\[remote rejected\] (.+) \(deletion of the current branch prohibited\)",
    ),
    _entry(
        ErrorKind.REVERT_CONFLICTS,
        r"error: could not revert .*\n"
        r"hint: after resolving the conflicts, mark the corrected paths\n"
        r"hint: with 'git add <paths>' or 'git rm <paths>'\n"
        r"hint: and commit the result with 'git commit'",
    ),
    _entry(
        ErrorKind.EMPTY_REBASE_PATCH,
        r"Applying: .*\n"
        r"No changes - did you forget to use 'git add'\?\n"
        r"If there is nothing left to stage, chances are that something else\n"
        r".*",
    ),
    _entry(
        ErrorKind.NO_MATCHING_REMOTE_BRANCH,
        r"There are no candidates for (rebasing|merging) among the refs that you just fetched.\n"
        r"Generally this means that you provided a wildcard refspec which had no\n"
        r"matches on the remote end.",
    ),
    _entry(
        ErrorKind.NO_EXISTING_REMOTE_BRANCH,
        r"Your configuration specifies to merge with the ref '(.+)'\n"
        r"from the remote, but no such ref was fetched.",
    ),
    # -------------------------------------------------------------------------
    # Local repository state
    # -------------------------------------------------------------------------
    _entry(ErrorKind.NOTHING_TO_COMMIT, r"nothing to commit"),
    _entry(
        ErrorKind.NO_SUBMODULE_MAPPING,
        r"[Nn]o submodule mapping found in .gitmodules for path '(.+)'",
    ),
    _entry(
        ErrorKind.SUBMODULE_REPOSITORY_DOES_NOT_EXIST,
        r"fatal: repository '(.+)' does not exist\n"
        r"fatal: clone of '.+' into submodule path '(.+)' failed",
    ),
    _entry(
        ErrorKind.INVALID_SUBMODULE_SHA,
        r"Fetched in submodule path '(.+)', but it did not contain (.+). "
        r"Direct fetching of that commit failed.",
    ),
    _entry(
        ErrorKind.LOCAL_PERMISSION_DENIED,
        r"fatal: could not create work tree dir '(.+)'.*: Permission denied",
    ),
    _entry(ErrorKind.INVALID_MERGE, r"merge: (.+) - not something we can merge"),
    _entry(ErrorKind.INVALID_REBASE, r"invalid upstream (.+)"),
    _entry(
        ErrorKind.NON_FAST_FORWARD_MERGE_INTO_EMPTY_HEAD,
        r"fatal: Non-fast-forward commit does not make sense into an empty head",
    ),
    _entry(
        ErrorKind.PATCH_DOES_NOT_APPLY,
        r"error: (.+): (patch does not apply|already exists in working directory)",
    ),
    _entry(ErrorKind.BRANCH_ALREADY_EXISTS, r"fatal: [Aa] branch named '(.+)' already exists.?"),
    _entry(ErrorKind.BAD_REVISION, r"fatal: bad revision '(.*)'"),
    _entry(
        ErrorKind.NOT_A_GIT_REPOSITORY,
        r"fatal: [Nn]ot a git repository \(or any of the parent directories\): (.*)",
    ),
    _entry(
        ErrorKind.CANNOT_MERGE_UNRELATED_HISTORIES,
        r"fatal: refusing to merge unrelated histories",
    ),
    _entry(ErrorKind.LFS_ATTRIBUTE_DOES_NOT_MATCH, r"The .+ attribute should be .+ but is .+"),
    _entry(
        ErrorKind.LFS_SMUDGE_FILTER_FAILED,
        r"(smudge filter lfs failed|external filter '?git-lfs filter-process'? failed)",
        "git-lfs could not download or check out an object",
    ),
    _entry(ErrorKind.BRANCH_RENAME_FAILED, r"fatal: Branch rename failed"),
    _entry(ErrorKind.PATH_DOES_NOT_EXIST, r"fatal: path '(.+)' does not exist .+"),
    _entry(ErrorKind.INVALID_OBJECT_NAME, r"fatal: invalid object name '(.+)'."),
    _entry(ErrorKind.OUTSIDE_REPOSITORY, r"fatal: .+: '(.+)' is outside repository"),
    _entry(
        ErrorKind.LOCK_FILE_ALREADY_EXISTS,
        r"Another git process seems to be running in this repository, e.g.",
    ),
    _entry(ErrorKind.NO_MERGE_TO_ABORT, r"fatal: There is no merge to abort"),
    _entry(
        ErrorKind.LOCAL_CHANGES_OVERWRITTEN,
        r"error: (?:Your local changes to the following|The following untracked working tree) "
        r"files would be overwritten by checkout:",
    ),
    _entry(
        ErrorKind.UNRESOLVED_CONFLICTS,
        r"You must edit all merge conflicts and then\nmark them as resolved using git add"
        r"|fatal: Exiting because of an unresolved conflict",
    ),
    _entry(ErrorKind.GPG_FAILED_TO_SIGN_DATA, r"error: gpg failed to sign the data"),
    _entry(
        ErrorKind.CONFLICT_MODIFY_DELETED_IN_BRANCH,
        r"CONFLICT \(modify/delete\): (.+) deleted in (.+) and modified in (.+)",
    ),
    # -------------------------------------------------------------------------
    # GitHub pre-receive policy
    # -------------------------------------------------------------------------
    _entry(ErrorKind.PUSH_WITH_FILE_SIZE_EXCEEDING_LIMIT, r"error: GH001: "),
    _entry(ErrorKind.HEX_BRANCH_NAME_REJECTED, r"error: GH002: "),
    _entry(
        ErrorKind.FORCE_PUSH_REJECTED,
        r"error: GH003: Sorry, force-pushing to (.+) is not allowed.",
    ),
    _entry(
        ErrorKind.INVALID_REF_LENGTH,
        r"error: GH005: Sorry, refs longer than (.+) bytes are not allowed",
    ),
    _entry(
        ErrorKind.PROTECTED_BRANCH_REQUIRES_REVIEW,
        r"error: GH006: Protected branch update failed for (.+)\n"
        r"remote: error: At least one approved review is required",
    ),
    _entry(
        ErrorKind.PROTECTED_BRANCH_FORCE_PUSH,
        r"error: GH006: Protected branch update failed for (.+)\n"
        r"remote: error: Cannot force-push to a protected branch",
    ),
    _entry(
        ErrorKind.PROTECTED_BRANCH_DELETE_REJECTED,
        r"error: GH006: Protected branch update failed for (.+)\n"
        r"remote: error: Cannot delete a protected branch",
    ),
    _entry(
        ErrorKind.PROTECTED_BRANCH_REQUIRED_STATUS,
        r"error: GH006: Protected branch update failed for (.+).\n"
        r"remote: error: Required status check \"(.+)\" is expected",
    ),
    _entry(
        ErrorKind.PUSH_WITH_PRIVATE_EMAIL,
        r"error: GH007: Your push would publish a private email address.",
    ),
    # -------------------------------------------------------------------------
    # Config, refs and safety checks
    # -------------------------------------------------------------------------
    _entry(
        ErrorKind.CONFIG_LOCK_FILE_ALREADY_EXISTS,
        r"error: could not lock config file (.+): File exists",
    ),
    _entry(ErrorKind.REMOTE_ALREADY_EXISTS, r"error: remote (.+) already exists."),
    _entry(ErrorKind.TAG_ALREADY_EXISTS, r"fatal: tag '(.+)' already exists"),
    _entry(
        ErrorKind.MERGE_WITH_LOCAL_CHANGES,
        r"error: Your local changes to the following files would be overwritten by merge:\n",
    ),
    _entry(
        ErrorKind.REBASE_WITH_LOCAL_CHANGES,
        r"error: cannot (pull with rebase|rebase): You have unstaged changes\.\n"
        r"\s*error: [Pp]lease commit or stash them\.",
    ),
    _entry(
        ErrorKind.MERGE_COMMIT_NO_MAINLINE_OPTION,
        r"error: commit (.+) is a merge but no -m option was given",
    ),
    _entry(ErrorKind.UNSAFE_DIRECTORY, r"fatal: detected dubious ownership in repository at"),
    _entry(
        ErrorKind.PATH_EXISTS_BUT_NOT_IN_REF,
        r"fatal: path '(.+)' exists on disk, but not in '(.+)'",
    ),
)
"""The default, ordered classification table. First match wins."""
