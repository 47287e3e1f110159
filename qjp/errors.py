"""Error types surfaced by the command-line front door.

The interactive core has no failure modes of its own; these cover flag
validation, input loading, and output formatting.
"""

from __future__ import annotations


class QjpError(Exception):
    """Base class for user-facing failures reported as ``Error: <message>``."""


class UsageError(QjpError):
    """Conflicting or invalid command-line flags."""


class InputError(QjpError):
    """Input could not be read or did not contain any records."""


class OutputError(QjpError):
    """A selected record could not be formatted for output."""


class NoInputError(InputError):
    """Neither a filename nor piped standard input was provided."""
