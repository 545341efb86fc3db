"""Typer application and entry point for ``git-credential-env``.

A minimal git credential helper that answers ``get`` requests with the
username and password found in two environment variables, ``GIT_USER``
and ``GIT_PASS`` by default. Put it on ``PATH`` and enable it with::

    git config credential.helper env

Git runs the helper with an operation such as ``get``, ``store`` or
``erase`` and writes its request to stdin in git-credential format. The
helper reads that request with :func:`git_credential.codec.from_reader`
and, for ``get``, writes the response with
:func:`git_credential.codec.to_writer`. ``store`` and ``erase`` have
nothing to persist and succeed silently, as does any operation the
helper does not know.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.

See Also:
    :mod:`git_credential.config`: credential source resolution.
    :mod:`git_credential.output`: stdout/stderr handling.
"""

from __future__ import annotations

import signal
import sys
from enum import Enum
from typing import Any, Optional

import typer

from git_credential import __version__
from git_credential.config import resolve_config, resolve_source
from git_credential.exceptions import GitCredentialError
from git_credential.exit_codes import EXIT_GENERIC_FAILURE
from git_credential.models import GitCredential
from git_credential.output import OutputManager, OutputSink, error, set_output


class Operation(str, Enum):
    """Helper operations git may request, see gitcredentials(7)."""

    GET = "get"
    STORE = "store"
    ERASE = "erase"


app = typer.Typer(
    name="git-credential-env",
    help="Git credential helper serving credentials from environment variables.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"git-credential-env {__version__}")
        raise typer.Exit()


@app.command()
def helper(
    operation: str = typer.Argument(
        help="Operation requested by git (get, store, erase; others are ignored)."
    ),
    username_source: Optional[str] = typer.Option(
        None,
        "--username-source",
        help="Where to read the username from (env:VAR or file:PATH).",
    ),
    password_source: Optional[str] = typer.Option(
        None,
        "--password-source",
        help="Where to read the password from (env:VAR or file:PATH).",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output on stderr."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Answer a git credential request.

    Reads git's request from stdin. For ``get`` it responds on stdout
    with whichever of username and password could be resolved; a
    response with neither is just the terminating empty line, which
    tells git to ask its next helper.

    Raises:
        typer.Exit: With the error's exit code when the request cannot
            be read or parsed, a credential source is invalid, or the
            response cannot be written.

    Example::

        $ printf 'protocol=https\\nhost=example.com\\n\\n' | GIT_USER=me GIT_PASS=s3cret git-credential-env get
        username=me
        password=s3cret

    """
    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)

    try:
        request = GitCredential.from_reader(sys.stdin, OutputSink(output))
        output.debug(
            f"{operation} request for "
            f"{request.protocol or '?'}://{request.host or '?'}"
        )

        if operation != Operation.GET:
            if operation not in {op.value for op in Operation}:
                output.debug(f"Unknown operation {operation!r}, ignoring request")
            else:
                output.debug(f"Nothing to {operation}, ignoring request")
            return

        config = resolve_config(username_source, password_source)
        response = GitCredential(
            username=resolve_source(config.username_source),
            password=resolve_source(config.password_source),
        )
        if response.username is None and response.password is None:
            output.debug(
                f"No credentials found in {config.username_source} "
                f"or {config.password_source}"
            )
        output.print_credential(response)
    except GitCredentialError as exc:
        output.error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``git-credential-env`` console script.

    Unhandled :class:`~git_credential.exceptions.GitCredentialError`
    instances cause a clean exit with the error's ``exit_code``; any other
    exception exits with :data:`EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except GitCredentialError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
