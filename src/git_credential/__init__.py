"""git_credential -- read and write the git-credential helper format.

Git talks to credential helpers over a line protocol of ``key=value``
attributes terminated by an empty line (see `git-credential(1)
<https://git-scm.com/docs/git-credential>`_ and `gitcredentials(7)
<https://git-scm.com/docs/gitcredentials>`_). This package provides the
record type and the codec needed to write custom helpers in Python.

Typical use inside a helper::

    import sys
    from git_credential import GitCredential

    request = GitCredential.from_reader(sys.stdin)
    response = GitCredential(username="me", password=lookup(request.host))
    response.to_writer(sys.stdout)

Modules:
    models: The :class:`GitCredential` record.
    codec: Parsing and serialisation of the line format.
    diagnostics: Sinks for recoverable parse warnings.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    config: Credential sources for the bundled helper.
    output: stdout/stderr handling with Rich support.
    app: The ``git-credential-env`` example helper.
"""

__version__ = "0.2.0"

from git_credential.codec import from_reader, to_writer  # noqa: E402
from git_credential.diagnostics import (  # noqa: E402
    CollectingSink,
    CredentialWarning,
    DiagnosticSink,
    LoggingSink,
    NullSink,
    WarningKind,
)
from git_credential.exceptions import (  # noqa: E402
    GitCredentialError,
    ParseError,
    ReadError,
    WriteError,
)
from git_credential.models import GitCredential  # noqa: E402

__all__ = [
    "CollectingSink",
    "CredentialWarning",
    "DiagnosticSink",
    "GitCredential",
    "GitCredentialError",
    "LoggingSink",
    "NullSink",
    "ParseError",
    "ReadError",
    "WarningKind",
    "WriteError",
    "from_reader",
    "to_writer",
]
