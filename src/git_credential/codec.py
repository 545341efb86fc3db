"""Reader and writer for the git-credential line format.

The format is documented in `git-credential(1)
<https://git-scm.com/docs/git-credential>`_::

    protocol=https
    host=example.com
    username=me
    password=%sec&ret!
    <empty line>

Each attribute is one ``key=value`` line, the record ends with an empty
line. :func:`from_reader` turns such a stream into a
:class:`~git_credential.models.GitCredential` and :func:`to_writer` does
the reverse.

Both functions accept text streams (``sys.stdin``, :class:`io.StringIO`)
as well as binary ones (``sys.stdin.buffer``, :class:`io.BytesIO`); bytes
are UTF-8. The caller owns the stream: it is never closed here.
"""

from __future__ import annotations

import io
import logging
from typing import IO, Iterator, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from git_credential.diagnostics import (
    CredentialWarning,
    DiagnosticSink,
    LoggingSink,
    WarningKind,
)
from git_credential.exceptions import ParseError, ReadError, WriteError
from git_credential.models import GitCredential

logger = logging.getLogger(__name__)

FIELD_ORDER = ("url", "protocol", "host", "path", "username", "password")
"""Recognised keys, in the order :func:`to_writer` emits them."""

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def from_reader(
    source: IO, sink: Optional[DiagnosticSink] = None
) -> GitCredential:
    """Read git-credential values from a stream like stdin.

    Lines are consumed one at a time until the first empty line or the end
    of the stream, whichever comes first. Anything after the empty line is
    left unread in *source*. A missing terminator line at end of stream is
    accepted.

    A line without ``=`` and a line with an unknown key are skipped and
    reported to *sink*. A repeated key overwrites the earlier value.

    Example::

        cred = from_reader(io.StringIO("username=me\\npassword=%sec&ret!\\n\\n"))
        assert (cred.username, cred.password) == ("me", "%sec&ret!")

    Args:
        source: Readable text or binary stream.
        sink: Receiver for recoverable warnings. Defaults to a
            :class:`~git_credential.diagnostics.LoggingSink`.

    Returns:
        The populated :class:`GitCredential`.

    Raises:
        ReadError: If reading from *source* fails or the input is not UTF-8.
        ParseError: If the ``url`` value is not a valid absolute URI.
    """
    if sink is None:
        sink = LoggingSink(logger)

    values: dict[str, object] = {}
    for line_number, line in enumerate(_iter_lines(source), start=1):
        key, sep, value = line.partition("=")
        if not sep:
            sink.warn(
                CredentialWarning(
                    kind=WarningKind.MALFORMED_LINE, line_number=line_number, line=line
                )
            )
            continue

        logger.debug("Reading line %d with key %s", line_number, key)
        if key == "url":
            values["url"] = _parse_url(value)
        elif key in FIELD_ORDER:
            values[key] = value
        else:
            sink.warn(
                CredentialWarning(
                    kind=WarningKind.UNKNOWN_KEY,
                    line_number=line_number,
                    line=line,
                    key=key,
                )
            )

    return GitCredential(**values)


def to_writer(credential: GitCredential, sink: IO) -> None:
    """Write git-credential values to a stream like stdout.

    Set fields are written in the order of :data:`FIELD_ORDER`, followed by
    one empty line. ``url`` comes first so that the discrete fields after
    it read as refinements of the URL.

    A value containing a newline cannot be represented in the format and
    is rejected before anything is written.

    Example::

        buf = io.StringIO()
        to_writer(GitCredential(username="me", password="%sec&ret!"), buf)
        assert buf.getvalue() == "username=me\\npassword=%sec&ret!\\n\\n"

    Args:
        credential: The record to serialise.
        sink: Writable text or binary stream.

    Raises:
        WriteError: If a value contains a newline, or on the first failed
            write. Output may be incomplete in the latter case only.
    """
    fields = list(iter_fields(credential))
    for key, value in fields:
        if "\n" in value:
            raise WriteError(f"Value of {key} contains a newline")

    binary = isinstance(sink, (io.RawIOBase, io.BufferedIOBase))
    try:
        for key, value in fields:
            _write(sink, f"{key}={value}\n", binary)
        _write(sink, "\n", binary)
    except OSError as exc:
        raise WriteError(f"Could not write to writer: {exc}") from exc


def iter_fields(credential: GitCredential) -> Iterator[tuple[str, str]]:
    """Yield ``(key, value)`` for every set field in wire order."""
    for key in FIELD_ORDER:
        value = getattr(credential, key)
        if value is not None:
            yield key, str(value)


# ------------------------------------------------------------------ #
# Private helpers
# ------------------------------------------------------------------ #


def _iter_lines(source: IO) -> Iterator[str]:
    """Yield lines without terminators up to the first empty line or EOF."""
    while True:
        try:
            raw = source.readline()
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(f"Could not read from reader: {exc}") from exc

        if not raw:
            return
        line = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        if not line:
            # An empty line ends the record
            return
        yield line


def _parse_url(value: str) -> AnyUrl:
    try:
        return _URL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ParseError(
            f"Could not parse the git-credential format: invalid url {value!r}",
            value=value,
        ) from exc


def _write(sink: IO, text: str, binary: bool) -> None:
    if binary:
        sink.write(text.encode("utf-8"))
    else:
        sink.write(text)
