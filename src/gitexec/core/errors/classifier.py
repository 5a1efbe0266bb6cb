"""ErrorClassifier implementation for table-driven git error classification.

The classifier walks an ordered ``ErrorPattern`` table and reports the kind
of the first entry whose regex occurs in the stderr text. It is a pure
function of its input: no logging, no I/O, no process-wide state, and it
never raises for any text, including the empty string.

Exit codes do not participate. git uses 128 for most fatal errors, so the
stderr wording is the only discriminating signal; callers that want to
treat, say, a non-zero exit with empty stderr specially do so themselves.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .kinds import ErrorKind
from .patterns import DEFAULT_ERROR_PATTERNS, ErrorPattern

if TYPE_CHECKING:
    from gitexec.process.models import ExecutionResult


@dataclass(frozen=True)
class ErrorMatch:
    """The table entry that classified a stderr text.

    Attributes:
        kind: Classified kind.
        pattern: The winning table entry.
        index: Position of the entry in the table.
        text: The matched portion of stderr.
        groups: Captured groups of the match (e.g. the remote URL).
    """

    kind: ErrorKind
    pattern: ErrorPattern
    index: int
    text: str
    groups: tuple[str | None, ...]


def _as_text(stderr: str | bytes | None) -> str:
    if stderr is None:
        return ""
    if isinstance(stderr, bytes):
        return stderr.decode("utf-8", errors="replace")
    return stderr


class ErrorClassifier:
    """Classifies git stderr text into ``ErrorKind`` values.

    Usage:
        classifier = ErrorClassifier()
        kind = classifier.parse_error(result.stderr)
    """

    def __init__(self, patterns: Sequence[ErrorPattern] | None = None) -> None:
        """Initialize classifier with an ordered pattern table.

        Args:
            patterns: Table to use instead of ``DEFAULT_ERROR_PATTERNS``.
                Order is significant: the first match wins.
        """
        self._patterns: tuple[ErrorPattern, ...] = tuple(
            DEFAULT_ERROR_PATTERNS if patterns is None else patterns
        )

    @property
    def patterns(self) -> tuple[ErrorPattern, ...]:
        return self._patterns

    def match(self, stderr: str | bytes | None) -> ErrorMatch | None:
        """Return details of the first matching table entry, or None."""
        text = _as_text(stderr)
        if not text:
            return None
        for index, entry in enumerate(self._patterns):
            found = entry.search(text)
            if found is not None:
                return ErrorMatch(
                    kind=entry.kind,
                    pattern=entry,
                    index=index,
                    text=found.group(0),
                    groups=found.groups(),
                )
        return None

    def parse_error(self, stderr: str | bytes | None) -> ErrorKind:
        """Classify stderr text.

        Args:
            stderr: Raw standard error of a finished git invocation.

        Returns:
            The kind of the first matching entry, or ``ErrorKind.UNCLASSIFIED``.
        """
        found = self.match(stderr)
        if found is None:
            return ErrorKind.UNCLASSIFIED
        return found.kind

    def parse_error_from_result(self, result: ExecutionResult) -> ErrorKind:
        """Classify the stderr of an ``ExecutionResult``."""
        return self.parse_error(result.stderr)

    def matching_kinds(self, stderr: str | bytes | None) -> list[ErrorKind]:
        """Return the kind of every matching entry, in table order.

        Useful when auditing the table: a text whose intended kind is not
        the first element here is being shadowed by an earlier entry.
        """
        text = _as_text(stderr)
        return [entry.kind for entry in self._patterns if entry.matches(text)]


_default_classifier = ErrorClassifier()


def parse_error(stderr: str | bytes | None) -> ErrorKind:
    """Classify stderr text with the default table."""
    return _default_classifier.parse_error(stderr)


def parse_error_from_result(result: ExecutionResult) -> ErrorKind:
    """Classify the stderr of ``result`` with the default table."""
    return _default_classifier.parse_error_from_result(result)
