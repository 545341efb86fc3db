"""Shared test fixtures for git_credential.

Provides fixtures for isolating the helper from the real environment,
managing output state, and running the CLI. These fixtures are
automatically discovered by pytest and available to all test modules.
"""

from __future__ import annotations

import pytest

from git_credential.output import reset_output


HELPER_ENV_VARS = [
    "GIT_USER",
    "GIT_PASS",
    "GIT_CREDENTIAL_USERNAME_SOURCE",
    "GIT_CREDENTIAL_PASSWORD_SOURCE",
]


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager's Rich console keeps a reference to sys.stderr from
    creation time. When CliRunner or capsys swap the stream out, that
    reference goes stale, so a fresh manager is forced for the next test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove helper-related variables and force plain, colourless output.

    Returns:
        The monkeypatch instance for further environment tweaks.
    """
    for var in HELPER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    return monkeypatch


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Wire fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def full_record() -> str:
    """A record with every recognised key, in the order they are written."""
    return (
        "url=https://example.com/myproject.git\n"
        "protocol=https\n"
        "host=example.com\n"
        "path=myproject.git\n"
        "username=me\n"
        "password=%sec&ret!\n"
        "\n"
    )
