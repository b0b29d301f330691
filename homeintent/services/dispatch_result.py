"""
Dispatch Result Types - the single outcome of one instruction.

Every request ends in exactly one of:

- Applied: the command was written to every targeted address
- Denied: authorization was evaluated and said no (not an error)
- Failed: something went wrong; `error_kind` says what

Extracted to a separate module so the dispatcher, the instruction
service and the router can share it without circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from homeintent.core.errors import DispatchError, FailureKind


class OutcomeStatus(str, Enum):
    """Terminal states of a dispatch."""
    APPLIED = "applied"
    DENIED = "denied"
    FAILED = "failed"


@dataclass(frozen=True)
class DispatchOutcome:
    """
    Result of dispatching one intent.

    Use the applied()/denied()/failed() constructors rather than
    building instances directly.

    Attributes:
        status: Which terminal state was reached
        message: Human-readable message (Applied/Denied)
        error_kind: FailureKind for Failed outcomes
        detail: Error description for Failed outcomes
        addresses: Addresses written during this dispatch, in order.
            For a failed broadcast these are the writes that landed
            before the failure.
    """
    status: OutcomeStatus
    message: str = ""
    error_kind: Optional[FailureKind] = None
    detail: Optional[str] = None
    addresses: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def applied(cls, message: str, addresses: Tuple[str, ...] = ()) -> "DispatchOutcome":
        return cls(status=OutcomeStatus.APPLIED, message=message, addresses=tuple(addresses))

    @classmethod
    def denied(cls, message: str) -> "DispatchOutcome":
        return cls(status=OutcomeStatus.DENIED, message=message)

    @classmethod
    def failed(
        cls,
        kind: FailureKind,
        detail: str,
        addresses: Tuple[str, ...] = (),
    ) -> "DispatchOutcome":
        return cls(
            status=OutcomeStatus.FAILED,
            error_kind=kind,
            detail=detail,
            addresses=tuple(addresses),
        )

    @classmethod
    def from_error(cls, error: DispatchError) -> "DispatchOutcome":
        """Build a Failed outcome from a DispatchError, keeping partial writes."""
        return cls.failed(error.kind, error.detail, getattr(error, "written", ()))

    @property
    def success(self) -> bool:
        """True unless the outcome is Failed; a denial is a valid answer."""
        return self.status != OutcomeStatus.FAILED

    @property
    def http_status(self) -> int:
        """Status code for the HTTP layer."""
        if self.status != OutcomeStatus.FAILED:
            return 200
        if self.error_kind is not None and self.error_kind.is_user_error:
            return 400
        return 500

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for response."""
        return {
            "success": self.success,
            "outcome": self.status.value,
            "message": self.message or None,
            "error": self.detail,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "addresses": list(self.addresses),
        }
