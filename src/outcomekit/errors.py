"""Exception hierarchy for outcomekit.

Only misuse of the library raises these. Faults captured by a guard are
never wrapped; they become the ``Failure`` payload as-is (or through the
caller's ``on_failure`` mapper).
"""

from __future__ import annotations

from typing import Any


class OutcomeError(Exception):
    """Base exception for all outcomekit errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message, followed by the hint when one is set."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(OutcomeError):
    """Settings validation or resolution failed."""


class InvalidErrorPayloadError(OutcomeError):
    """``value_or_raise()`` was called on a Failure whose error cannot be raised."""

    def __init__(self, payload: Any) -> None:
        super().__init__(
            f"Failure payload of type {type(payload).__name__} is not an exception",
            hint="Only exception instances can be raised; use when() or error_or_none instead",
        )
        self.payload = payload


class FaultCoercionError(OutcomeError, TypeError):
    """A captured fault does not match the error type the guard was told to expect."""

    def __init__(
        self,
        fault: BaseException,
        expected: type[BaseException] | tuple[type[BaseException], ...],
    ) -> None:
        names = (
            ", ".join(t.__name__ for t in expected)
            if isinstance(expected, tuple)
            else expected.__name__
        )
        super().__init__(
            f"Captured {type(fault).__name__} is not an instance of {names}",
            hint="Pass on_failure=... to map unexpected faults onto your error type",
        )
        self.fault = fault
        self.expected = expected
