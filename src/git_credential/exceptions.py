"""Exception hierarchy for git_credential.

All exceptions inherit from :class:`GitCredentialError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`git_credential.exit_codes`. The top-level handler in
:func:`git_credential.app.main` catches ``GitCredentialError`` and exits
with the appropriate code.

Subclass hierarchy::

    GitCredentialError (exit 1)
    +-- ReadError     (exit 3)
    +-- WriteError    (exit 4)
    +-- ParseError    (exit 5)
    +-- ConfigError   (exit 1)

Malformed lines and unknown keys are not errors: the codec reports them to
a :class:`~git_credential.diagnostics.DiagnosticSink` and keeps going.
"""

from __future__ import annotations

from git_credential.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_PARSE_ERROR,
    EXIT_READ_ERROR,
    EXIT_WRITE_ERROR,
)


class GitCredentialError(Exception):
    """Base exception for all git_credential errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`git_credential.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ReadError(GitCredentialError):
    """Raised when the source stream fails while reading a credential.

    The underlying :class:`OSError` (or :class:`UnicodeDecodeError` for
    input that is not UTF-8) is available as ``__cause__``.
    """

    exit_code = EXIT_READ_ERROR


class WriteError(GitCredentialError):
    """Raised when the sink stream fails while writing a credential."""

    exit_code = EXIT_WRITE_ERROR


class ParseError(GitCredentialError):
    """Raised when the ``url`` value is not a valid absolute URI.

    Args:
        message: Human-readable error description.
        value: The raw ``url`` value that could not be parsed.
    """

    exit_code = EXIT_PARSE_ERROR

    def __init__(self, message: str, value: str):
        super().__init__(message)
        self.value = value


class ConfigError(GitCredentialError):
    """Raised for configuration problems (unknown or unreadable credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
