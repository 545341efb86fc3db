"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~git_credential.exceptions.GitCredentialError`
subclass. Git only checks whether a helper succeeded, but shell wrappers
can inspect the exit code to tell the failure classes apart.

Example::

    $ printf 'url=not a url\\n\\n' | git-credential-env get
    Error: Could not parse the git-credential format: ...
    $ echo $?
    5   # EXIT_PARSE_ERROR
"""

EXIT_SUCCESS = 0
"""The helper completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The helper was invoked with invalid arguments."""

EXIT_READ_ERROR = 3
"""The credential request could not be read from the input stream."""

EXIT_WRITE_ERROR = 4
"""The credential could not be written to the output stream."""

EXIT_PARSE_ERROR = 5
"""The input did not follow the git-credential format (invalid ``url``)."""
