"""
Error types - the failure taxonomy of the dispatcher.

Two families live here:

- Low-level errors raised by the building blocks (store, resolver, decoder,
  address table). They know nothing about HTTP or outcomes.
- DispatchError subclasses. Each one carries a FailureKind, which is what
  the dispatcher and the instruction service turn into a Failed outcome
  and, eventually, an HTTP status code.

Vocabulary errors (target/action/location) are kept apart from
infrastructure errors (extraction/store) so a client can tell
"you asked for something unsupported" from "the system is unavailable".
"""

from enum import Enum
from typing import Optional, Sequence


class FailureKind(str, Enum):
    """Kinds of failed dispatch outcomes."""
    INVALID_REQUEST = "invalid_request"
    EXTRACTION_ERROR = "extraction_error"
    UNSUPPORTED_TARGET = "unsupported_target"
    UNSUPPORTED_ACTION = "unsupported_action"
    INVALID_LOCATION = "invalid_location"
    AUTH_FAILURE = "auth_failure"
    COMMAND_FAILURE = "command_failure"
    INTERNAL_ERROR = "internal_error"

    @property
    def is_user_error(self) -> bool:
        """True for errors caused by the request itself (HTTP 400)."""
        return self in _USER_ERRORS


_USER_ERRORS = frozenset({
    FailureKind.INVALID_REQUEST,
    FailureKind.UNSUPPORTED_TARGET,
    FailureKind.UNSUPPORTED_ACTION,
    FailureKind.INVALID_LOCATION,
})


class HomeIntentError(Exception):
    """Base class for every error raised by this package."""
    pass


# ---------------------------------------------------------------------------
# BUILDING-BLOCK ERRORS
# ---------------------------------------------------------------------------

class StoreError(HomeIntentError):
    """Raised when the device-state store cannot complete a get/set."""

    def __init__(self, address: str, operation: str, detail: str):
        self.address = address
        self.operation = operation
        self.detail = detail
        super().__init__(f"store {operation} failed for '{address}': {detail}")


class UnknownLocationError(HomeIntentError):
    """Raised by the resolver when a location is not in the table."""

    def __init__(self, device_class: str, location: str):
        self.device_class = device_class
        self.location = location
        super().__init__(f"unknown location '{location}' for {device_class}")


class CommandDecodeError(HomeIntentError):
    """Raised when a raw store value is not a canonical command encoding."""

    def __init__(self, raw: object):
        self.raw = raw
        super().__init__(f"cannot decode {raw!r} as a canonical command")


class AddressTableError(HomeIntentError):
    """Raised when an address table violates its construction invariants."""
    pass


# ---------------------------------------------------------------------------
# DISPATCH ERRORS
# ---------------------------------------------------------------------------

class DispatchError(HomeIntentError):
    """
    A failure that ends a request with a Failed outcome.

    Attributes:
        kind: FailureKind used to pick the outcome and status code
        detail: Human-readable description, safe to return to clients
    """

    kind: FailureKind = FailureKind.COMMAND_FAILURE

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ExtractionError(DispatchError):
    """The intent source was unreachable or returned unusable content."""
    kind = FailureKind.EXTRACTION_ERROR


class UnsupportedTargetError(DispatchError):
    """The intent's target is not a known device class."""
    kind = FailureKind.UNSUPPORTED_TARGET

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Unsupported target '{target}'")


class UnsupportedActionError(DispatchError):
    """The intent's action is not in the action vocabulary."""
    kind = FailureKind.UNSUPPORTED_ACTION

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unsupported action '{action}'")


class InvalidLocationError(DispatchError):
    """The intent's location does not resolve for its device class."""
    kind = FailureKind.INVALID_LOCATION

    def __init__(self, device_class: str, location: str):
        self.device_class = device_class
        self.location = location
        super().__init__(f"Invalid location '{location}' for {device_class}")


class AuthorizationReadError(DispatchError):
    """The trust-state flag could not be read."""
    kind = FailureKind.AUTH_FAILURE

    def __init__(self, device_class: str, address: str, cause: str):
        self.device_class = device_class
        self.address = address
        super().__init__(
            f"Failed to read authorization state for {device_class} at '{address}': {cause}"
        )


class CommandFailureError(DispatchError):
    """
    A device write failed.

    `written` lists the addresses that were already mutated before the
    failure; broadcasts are not rolled back.
    """
    kind = FailureKind.COMMAND_FAILURE

    def __init__(
        self,
        address: str,
        cause: str,
        written: Optional[Sequence[str]] = None,
    ):
        self.address = address
        self.cause = cause
        self.written = tuple(written or ())
        super().__init__(f"Failed to update '{address}': {cause}")
