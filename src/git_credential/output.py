"""Output handling with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions, which matter doubly
for a credential helper because git parses the helper's stdout:

* **stdout** -- the credential record only, in git-credential format.
* **stderr** -- all diagnostics (warnings, errors, debug messages).
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb``, and the
  ``--no-color`` CLI flag.

The module exposes two layers:

1. :class:`OutputManager` -- a stateful object holding the Rich stderr
   console and the quiet/verbose flags. Created once per invocation in
   :mod:`git_credential.app` and installed via :func:`set_output`.
2. Module-level convenience functions (:func:`warning`, :func:`error`,
   :func:`debug`) that delegate to the global ``OutputManager``.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

from git_credential.codec import to_writer
from git_credential.diagnostics import CredentialWarning, DiagnosticSink
from git_credential.exceptions import WriteError
from git_credential.models import GitCredential


class OutputManager:
    """Central manager for helper output.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress debug messages on stderr even with ``verbose``.
        verbose: Enable debug-level messages on stderr, including parse
            warnings about git's request.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose and not quiet

        # Console for stderr (diagnostics)
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def is_quiet(self) -> bool:
        """Whether quiet mode is enabled."""
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def print_credential(self, credential: GitCredential) -> None:
        """Write *credential* to stdout in git-credential format and flush.

        Raises:
            WriteError: If stdout cannot be written to.
        """
        to_writer(credential, sys.stdout)
        try:
            sys.stdout.flush()
        except OSError as exc:
            raise WriteError(f"Could not write to writer: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def warning(self, message: str) -> None:
        """Print a yellow warning to stderr. NOT suppressed by ``--quiet``.

        Args:
            message: The warning text.
        """
        if self._no_color:
            print(f"Warning: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr. Never suppressed.

        Args:
            message: The error text.
        """
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when ``--verbose`` is active.

        Args:
            message: The debug text (prefixed with ``[debug]`` on output).
        """
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]")


class OutputSink(DiagnosticSink):
    """Report parse warnings through an :class:`OutputManager`.

    Warnings about git's request are only interesting when debugging a
    helper setup, so they are shown in verbose mode only.
    """

    def __init__(self, output: Optional[OutputManager] = None) -> None:
        self._output = output

    def warn(self, warning: CredentialWarning) -> None:
        output = self._output or get_output()
        if output.is_verbose:
            output.warning(warning.message)


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    If no instance has been installed via :func:`set_output`, a default
    ``OutputManager`` is created lazily.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def error(message: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(message)


def warning(message: str) -> None:
    """Print warning to stderr via the global OutputManager."""
    get_output().warning(message)


def debug(message: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(message)
