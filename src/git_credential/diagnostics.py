"""Injectable sinks for recoverable parse anomalies.

The codec never fails on a malformed line or an unknown key. It reports the
anomaly as a :class:`CredentialWarning` to a :class:`DiagnosticSink` and
carries on with the next line. Passing a sink makes that behaviour
observable without capturing process-wide log output:

- :class:`LoggingSink` -- the default, forwards to :mod:`logging`.
- :class:`CollectingSink` -- keeps the warnings in a list.
- :class:`NullSink` -- drops everything.

The CLI uses :class:`~git_credential.output.OutputSink`, which prints to
stderr through the Rich console.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field


class WarningKind(str, enum.Enum):
    """Category of a recoverable anomaly found while parsing."""

    MALFORMED_LINE = "malformed_line"
    UNKNOWN_KEY = "unknown_key"


class CredentialWarning(BaseModel):
    """A single recoverable anomaly reported by the parser.

    Attributes:
        kind: What went wrong.
        line_number: 1-based position of the offending line in the record.
        line: The raw line without its terminator.
        key: The unrecognised key, for :attr:`WarningKind.UNKNOWN_KEY`.
    """

    kind: WarningKind
    line_number: int = Field(ge=1)
    line: str
    key: Optional[str] = None

    @property
    def message(self) -> str:
        """Human-readable description of the warning."""
        if self.kind == WarningKind.UNKNOWN_KEY:
            return f"Unknown key on line {self.line_number}: {self.key}"
        return f"Invalid line {self.line_number}: {self.line!r}"


class DiagnosticSink(ABC):
    """Receiver for :class:`CredentialWarning` events."""

    @abstractmethod
    def warn(self, warning: CredentialWarning) -> None:
        """Handle one warning. Must not raise."""
        ...


class LoggingSink(DiagnosticSink):
    """Forward warnings to a :class:`logging.Logger` at ``WARNING`` level.

    Args:
        logger: Target logger. Defaults to the ``git_credential.codec``
            logger.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("git_credential.codec")

    def warn(self, warning: CredentialWarning) -> None:
        self._logger.warning("%s", warning.message)


class CollectingSink(DiagnosticSink):
    """Keep every warning in :attr:`warnings`, in the order received."""

    def __init__(self) -> None:
        self.warnings: list[CredentialWarning] = []

    def warn(self, warning: CredentialWarning) -> None:
        self.warnings.append(warning)

    def kinds(self) -> list[WarningKind]:
        """Return the kinds of the collected warnings."""
        return [w.kind for w in self.warnings]


class NullSink(DiagnosticSink):
    """Discard all warnings."""

    def warn(self, warning: CredentialWarning) -> None:
        pass
