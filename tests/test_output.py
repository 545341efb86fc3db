"""Tests for the output system.

Covers:
- stdout carries only the credential record
- stderr diagnostics with NO_COLOR / --no-color
- quiet and verbose interplay
- OutputSink forwarding of parse warnings
- Global instance management
"""

from __future__ import annotations

import io
import sys

import pytest

from git_credential import output as output_module
from git_credential.diagnostics import CredentialWarning, WarningKind
from git_credential.exceptions import WriteError
from git_credential.models import GitCredential
from git_credential.output import (
    OutputManager,
    OutputSink,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


def _warning() -> CredentialWarning:
    return CredentialWarning(
        kind=WarningKind.UNKNOWN_KEY, line_number=1, line="foo=bar", key="foo"
    )


# ------------------------------------------------------------------ #
# Colour control
# ------------------------------------------------------------------ #


class TestColorControl:
    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_enabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Streams
# ------------------------------------------------------------------ #


class TestStreams:
    def test_print_credential_goes_to_stdout(self, capsys: pytest.CaptureFixture) -> None:
        mgr = OutputManager(no_color=True)
        mgr.print_credential(GitCredential(username="me", password="pw"))
        captured = capsys.readouterr()
        assert captured.out == "username=me\npassword=pw\n\n"
        assert captured.err == ""

    def test_print_credential_flush_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class _ClosedPipe(io.StringIO):
            def flush(self) -> None:
                raise BrokenPipeError("broken pipe")

        monkeypatch.setattr(sys, "stdout", _ClosedPipe())
        with pytest.raises(WriteError, match="Could not write to writer") as exc_info:
            OutputManager(no_color=True).print_credential(GitCredential(username="me"))
        assert isinstance(exc_info.value.__cause__, BrokenPipeError)

    def test_warning_goes_to_stderr(self, capsys: pytest.CaptureFixture) -> None:
        OutputManager(no_color=True).warning("careful")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Warning: careful\n"

    def test_error_goes_to_stderr(self, capsys: pytest.CaptureFixture) -> None:
        OutputManager(no_color=True).error("broken")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Error: broken\n"

    def test_rich_error_is_not_markup(self, capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        OutputManager().error("line [bold]x[/bold]")
        assert "[bold]x[/bold]" in capsys.readouterr().err


class TestVerbosity:
    def test_debug_hidden_by_default(self, capsys: pytest.CaptureFixture) -> None:
        OutputManager(no_color=True).debug("details")
        assert capsys.readouterr().err == ""

    def test_debug_shown_when_verbose(self, capsys: pytest.CaptureFixture) -> None:
        OutputManager(no_color=True, verbose=True).debug("details")
        assert capsys.readouterr().err == "[debug] details\n"

    def test_quiet_wins_over_verbose(self, capsys: pytest.CaptureFixture) -> None:
        mgr = OutputManager(no_color=True, quiet=True, verbose=True)
        assert mgr.is_quiet is True
        assert mgr.is_verbose is False
        mgr.debug("details")
        assert capsys.readouterr().err == ""

    def test_quiet_does_not_hide_errors(self, capsys: pytest.CaptureFixture) -> None:
        OutputManager(no_color=True, quiet=True).error("broken")
        assert capsys.readouterr().err == "Error: broken\n"


class TestOutputSink:
    def test_silent_unless_verbose(self, capsys: pytest.CaptureFixture) -> None:
        OutputSink(OutputManager(no_color=True)).warn(_warning())
        assert capsys.readouterr().err == ""

    def test_verbose_prints_warning(self, capsys: pytest.CaptureFixture) -> None:
        OutputSink(OutputManager(no_color=True, verbose=True)).warn(_warning())
        assert capsys.readouterr().err == "Warning: Unknown key on line 1: foo\n"

    def test_falls_back_to_global_output(self, capsys: pytest.CaptureFixture) -> None:
        set_output(OutputManager(no_color=True, verbose=True))
        OutputSink().warn(_warning())
        assert "Unknown key on line 1: foo" in capsys.readouterr().err


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalOutput:
    def test_get_output_creates_default(self) -> None:
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_and_reset(self) -> None:
        mgr = OutputManager(no_color=True)
        set_output(mgr)
        assert get_output() is mgr
        reset_output()
        assert output_module._output is None

    def test_convenience_functions(self, capsys: pytest.CaptureFixture) -> None:
        set_output(OutputManager(no_color=True, verbose=True))
        output_module.warning("w")
        output_module.error("e")
        output_module.debug("d")
        assert capsys.readouterr().err == "Warning: w\nError: e\n[debug] d\n"
