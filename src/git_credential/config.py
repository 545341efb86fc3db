"""Configuration of the ``git-credential-env`` helper.

The helper answers ``get`` requests with a username and a password taken
from two *credential sources*. A source is a short descriptor string:

* ``env:VAR_NAME`` -- the value of an environment variable.
* ``file:/path/to/file`` -- the content of a file, stripped of whitespace.

Which sources are used is resolved by :func:`resolve_config` with the
usual precedence: CLI flags, then environment variables, then the
defaults (``env:GIT_USER`` and ``env:GIT_PASS``).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from git_credential.exceptions import ConfigError

ENV_USERNAME_SOURCE = "GIT_CREDENTIAL_USERNAME_SOURCE"
ENV_PASSWORD_SOURCE = "GIT_CREDENTIAL_PASSWORD_SOURCE"

DEFAULT_USERNAME_SOURCE = "env:GIT_USER"
DEFAULT_PASSWORD_SOURCE = "env:GIT_PASS"


class HelperConfig(BaseModel):
    """Effective configuration of the environment helper.

    Attributes:
        username_source: Descriptor the username is read from.
        password_source: Descriptor the password is read from.
    """

    username_source: str = Field(
        default=DEFAULT_USERNAME_SOURCE, description="Credential source for the username"
    )
    password_source: str = Field(
        default=DEFAULT_PASSWORD_SOURCE, description="Credential source for the password"
    )


def resolve_config(
    cli_username_source: Optional[str] = None,
    cli_password_source: Optional[str] = None,
) -> HelperConfig:
    """Resolve the helper config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_username_source``, ``cli_password_source``)
        2. Environment variables (``GIT_CREDENTIAL_USERNAME_SOURCE``,
           ``GIT_CREDENTIAL_PASSWORD_SOURCE``)
        3. Defaults

    Returns:
        The resolved :class:`HelperConfig`.
    """
    config = HelperConfig()

    env_username = os.environ.get(ENV_USERNAME_SOURCE)
    if env_username:
        config.username_source = env_username
    env_password = os.environ.get(ENV_PASSWORD_SOURCE)
    if env_password:
        config.password_source = env_password

    if cli_username_source is not None:
        config.username_source = cli_username_source
    if cli_password_source is not None:
        config.password_source = cli_password_source

    return config


def resolve_source(source: str) -> Optional[str]:
    """Resolve a credential from its source descriptor.

    A source that simply has nothing to offer (unset variable, missing
    file) yields ``None`` so the field stays out of the response and git
    falls back to its next helper.

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string, or ``None``.

    Raises:
        ConfigError: If the descriptor is unknown or the file exists but
            cannot be read.
    """
    if source.startswith("env:"):
        # An empty value is still a value
        return os.environ.get(source[4:])

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    raise ConfigError(f"Unknown credential source format: {source}")
