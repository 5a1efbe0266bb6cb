"""Semantic error kinds for failed git invocations.

Error Kind Taxonomy
===================

git reports most failures with exit code 128 and a line of text on stderr.
``ErrorKind`` names *why* an invocation failed, independent of the exact
wording git (or the remote host) used. Values are stable identifiers:
consumers may persist them or switch on them, so a value is never renamed
or reused once published. New kinds are appended.

**Remote / transport kinds** (``ErrorKind.is_remote``)
    Authentication, repository lookup and connection failures reported by
    HTTPS or SSH remotes, including proxy and host-down errors.

**GitHub push-policy kinds** (``ErrorKind.is_github_specific``)
    ``GHxxx`` rejections emitted by GitHub's pre-receive hooks.

**Local kinds**
    Working tree, index, ref and lock problems in the local repository.

``ErrorKind.UNCLASSIFIED`` is the sentinel returned when no pattern matches.

Example::

    kind = parse_error(result.stderr)
    if kind is ErrorKind.HTTPS_AUTHENTICATION_FAILED:
        ask_user_for_credentials()
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed enumeration of semantic git failure categories."""

    UNCLASSIFIED = "unclassified"
    """No known pattern matched the stderr text."""

    # Remote / transport
    SSH_KEY_AUDIT_UNVERIFIED = "ssh_key_audit_unverified"
    """The SSH key must be re-verified (GitHub ``EPOLICYKEYAGE``)."""

    HTTPS_AUTHENTICATION_FAILED = "https_authentication_failed"
    """Credentials were rejected by an HTTPS remote."""

    SSH_AUTHENTICATION_FAILED = "ssh_authentication_failed"
    """Authentication failed on a non-HTTPS transport."""

    SSH_PERMISSION_DENIED = "ssh_permission_denied"
    """The SSH remote could not be read (key rejected or no access)."""

    REMOTE_DISCONNECTION = "remote_disconnection"
    """The remote end hung up unexpectedly."""

    HOST_DOWN = "host_down"
    """The remote host could not be reached or resolved."""

    HTTPS_REPOSITORY_NOT_FOUND = "https_repository_not_found"
    """The HTTPS remote reports that the repository does not exist."""

    SSH_REPOSITORY_NOT_FOUND = "ssh_repository_not_found"
    """The SSH remote reports that the repository does not exist."""

    PROXY_AUTHENTICATION_REQUIRED = "proxy_authentication_required"
    """An HTTP proxy between git and the remote demanded credentials."""

    # Merge / rebase / revert
    REBASE_CONFLICTS = "rebase_conflicts"
    MERGE_CONFLICTS = "merge_conflicts"
    REVERT_CONFLICTS = "revert_conflicts"
    EMPTY_REBASE_PATCH = "empty_rebase_patch"
    NO_MATCHING_REMOTE_BRANCH = "no_matching_remote_branch"
    NO_EXISTING_REMOTE_BRANCH = "no_existing_remote_branch"
    INVALID_MERGE = "invalid_merge"
    INVALID_REBASE = "invalid_rebase"
    NON_FAST_FORWARD_MERGE_INTO_EMPTY_HEAD = "non_fast_forward_merge_into_empty_head"
    CANNOT_MERGE_UNRELATED_HISTORIES = "cannot_merge_unrelated_histories"
    NO_MERGE_TO_ABORT = "no_merge_to_abort"
    UNRESOLVED_CONFLICTS = "unresolved_conflicts"
    CONFLICT_MODIFY_DELETED_IN_BRANCH = "conflict_modify_deleted_in_branch"
    MERGE_WITH_LOCAL_CHANGES = "merge_with_local_changes"
    REBASE_WITH_LOCAL_CHANGES = "rebase_with_local_changes"
    MERGE_COMMIT_NO_MAINLINE_OPTION = "merge_commit_no_mainline_option"

    # Push
    PUSH_NOT_FAST_FORWARD = "push_not_fast_forward"
    BRANCH_DELETION_FAILED = "branch_deletion_failed"
    DEFAULT_BRANCH_DELETION_FAILED = "default_branch_deletion_failed"

    # Local repository state
    NOTHING_TO_COMMIT = "nothing_to_commit"
    NO_SUBMODULE_MAPPING = "no_submodule_mapping"
    SUBMODULE_REPOSITORY_DOES_NOT_EXIST = "submodule_repository_does_not_exist"
    INVALID_SUBMODULE_SHA = "invalid_submodule_sha"
    LOCAL_PERMISSION_DENIED = "local_permission_denied"
    PATCH_DOES_NOT_APPLY = "patch_does_not_apply"
    BRANCH_ALREADY_EXISTS = "branch_already_exists"
    BAD_REVISION = "bad_revision"
    NOT_A_GIT_REPOSITORY = "not_a_git_repository"
    LFS_ATTRIBUTE_DOES_NOT_MATCH = "lfs_attribute_does_not_match"
    LFS_SMUDGE_FILTER_FAILED = "lfs_smudge_filter_failed"
    BRANCH_RENAME_FAILED = "branch_rename_failed"
    PATH_DOES_NOT_EXIST = "path_does_not_exist"
    INVALID_OBJECT_NAME = "invalid_object_name"
    OUTSIDE_REPOSITORY = "outside_repository"
    LOCK_FILE_ALREADY_EXISTS = "lock_file_already_exists"
    LOCAL_CHANGES_OVERWRITTEN = "local_changes_overwritten"
    GPG_FAILED_TO_SIGN_DATA = "gpg_failed_to_sign_data"
    CONFIG_LOCK_FILE_ALREADY_EXISTS = "config_lock_file_already_exists"
    REMOTE_ALREADY_EXISTS = "remote_already_exists"
    TAG_ALREADY_EXISTS = "tag_already_exists"
    UNSAFE_DIRECTORY = "unsafe_directory"
    PATH_EXISTS_BUT_NOT_IN_REF = "path_exists_but_not_in_ref"

    # GitHub push policy
    PUSH_WITH_FILE_SIZE_EXCEEDING_LIMIT = "push_with_file_size_exceeding_limit"
    HEX_BRANCH_NAME_REJECTED = "hex_branch_name_rejected"
    FORCE_PUSH_REJECTED = "force_push_rejected"
    INVALID_REF_LENGTH = "invalid_ref_length"
    PROTECTED_BRANCH_REQUIRES_REVIEW = "protected_branch_requires_review"
    PROTECTED_BRANCH_FORCE_PUSH = "protected_branch_force_push"
    PROTECTED_BRANCH_DELETE_REJECTED = "protected_branch_delete_rejected"
    PROTECTED_BRANCH_REQUIRED_STATUS = "protected_branch_required_status"
    PUSH_WITH_PRIVATE_EMAIL = "push_with_private_email"

    @property
    def is_classified(self) -> bool:
        """True for every kind except the UNCLASSIFIED sentinel."""
        return self is not ErrorKind.UNCLASSIFIED

    @property
    def is_remote(self) -> bool:
        """True if the failure was reported by, or on the way to, a remote."""
        return self in _REMOTE_KINDS

    @property
    def is_github_specific(self) -> bool:
        """True for GitHub pre-receive (``GHxxx``) policy rejections."""
        return self in _GITHUB_KINDS


_REMOTE_KINDS: frozenset[ErrorKind] = frozenset({
    ErrorKind.SSH_KEY_AUDIT_UNVERIFIED,
    ErrorKind.HTTPS_AUTHENTICATION_FAILED,
    ErrorKind.SSH_AUTHENTICATION_FAILED,
    ErrorKind.SSH_PERMISSION_DENIED,
    ErrorKind.REMOTE_DISCONNECTION,
    ErrorKind.HOST_DOWN,
    ErrorKind.HTTPS_REPOSITORY_NOT_FOUND,
    ErrorKind.SSH_REPOSITORY_NOT_FOUND,
    ErrorKind.PROXY_AUTHENTICATION_REQUIRED,
})

_GITHUB_KINDS: frozenset[ErrorKind] = frozenset({
    ErrorKind.PUSH_WITH_FILE_SIZE_EXCEEDING_LIMIT,
    ErrorKind.HEX_BRANCH_NAME_REJECTED,
    ErrorKind.FORCE_PUSH_REJECTED,
    ErrorKind.INVALID_REF_LENGTH,
    ErrorKind.PROTECTED_BRANCH_REQUIRES_REVIEW,
    ErrorKind.PROTECTED_BRANCH_FORCE_PUSH,
    ErrorKind.PROTECTED_BRANCH_DELETE_REJECTED,
    ErrorKind.PROTECTED_BRANCH_REQUIRED_STATUS,
    ErrorKind.PUSH_WITH_PRIVATE_EMAIL,
})
