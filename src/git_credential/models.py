"""The credential record exchanged over the git-credential protocol.

:class:`GitCredential` holds the values of every attribute the codec
understands. It is a flat value object: each field is optional, ``None``
means "not specified" (which is distinct from an empty string), and no
field is derived from another.

The ``url`` attribute is special in git: setting it is equivalent to
setting the protocol, host, path and userinfo parts at once. The record
keeps ``url`` and the discrete fields independent and emits both when both
are set. :meth:`GitCredential.expanded` is available for callers that want
the decomposed view.

See Also:
    :mod:`git_credential.codec` for the line format itself.
    `git-credential(1) <https://git-scm.com/docs/git-credential>`_
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Optional
from urllib.parse import unquote, urlsplit

from pydantic import AnyUrl, BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from git_credential.diagnostics import DiagnosticSink


class GitCredential(BaseModel):
    """Holds the values of all attributes supported by git-credential.

    A new instance has every field unset. Fields are populated either by
    assignment or by :meth:`from_reader`, and consumed by :meth:`to_writer`.

    Assigning a string to :attr:`url` validates it as an absolute URI;
    an invalid value raises :class:`pydantic.ValidationError`.

    Example::

        cred = GitCredential(username="me", password="%sec&ret!")
        assert cred.to_string() == "username=me\\npassword=%sec&ret!\\n\\n"
    """

    model_config = ConfigDict(validate_assignment=True)

    url: Optional[AnyUrl] = Field(
        default=None,
        description="Whole URL, format <protocol>://<username>:<password>@<host>/<path>",
    )
    protocol: Optional[str] = Field(
        default=None, description="Protocol the credential is used over, e.g. https"
    )
    host: Optional[str] = Field(
        default=None, description="Remote hostname, optionally with :port"
    )
    path: Optional[str] = Field(
        default=None, description="Path on the remote, e.g. the repository path"
    )
    username: Optional[str] = Field(
        default=None, description="The credential's username, if already known"
    )
    password: Optional[str] = Field(
        default=None, description="The credential's password, if it is to be stored"
    )

    # ------------------------------------------------------------------ #
    # Codec shortcuts
    # ------------------------------------------------------------------ #

    @classmethod
    def from_reader(
        cls, source: IO, sink: Optional[DiagnosticSink] = None
    ) -> GitCredential:
        """Read a credential from *source*. See :func:`git_credential.codec.from_reader`."""
        from git_credential.codec import from_reader

        return from_reader(source, sink)

    @classmethod
    def from_string(
        cls, text: str, sink: Optional[DiagnosticSink] = None
    ) -> GitCredential:
        """Parse a credential from an in-memory string."""
        from io import StringIO

        return cls.from_reader(StringIO(text), sink)

    def to_writer(self, sink: IO) -> None:
        """Write this credential to *sink*. See :func:`git_credential.codec.to_writer`."""
        from git_credential.codec import to_writer

        to_writer(self, sink)

    def to_string(self) -> str:
        """Serialize this credential into a string, terminator line included."""
        from io import StringIO

        buf = StringIO()
        self.to_writer(buf)
        return buf.getvalue()

    # ------------------------------------------------------------------ #
    # URL decomposition
    # ------------------------------------------------------------------ #

    def expanded(self) -> GitCredential:
        """Return a copy with unset fields filled in from :attr:`url`.

        The URL is treated as the base and the discrete fields as
        refinements, which is the order :meth:`to_writer` emits them in:
        a field that is already set is never overwritten. Username and
        password are percent-decoded, the path loses its leading ``/``
        and an explicit port stays part of ``host``.

        Returns:
            A new :class:`GitCredential`. The ``url`` field is kept as is.
        """
        if self.url is None:
            return self.model_copy()

        parts = urlsplit(str(self.url))
        hostport = parts.netloc.rpartition("@")[2]
        path = parts.path[1:] if parts.path.startswith("/") else parts.path

        derived = {
            "protocol": parts.scheme or None,
            "host": hostport or None,
            "path": path or None,
            "username": unquote(parts.username) if parts.username is not None else None,
            "password": unquote(parts.password) if parts.password is not None else None,
        }
        update = {
            name: value
            for name, value in derived.items()
            if getattr(self, name) is None and value is not None
        }
        return self.model_copy(update=update)
