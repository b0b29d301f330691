"""
Device Vocabulary - the closed sets of targets and commands.

Everything the dispatcher understands is listed here:

- DeviceClass: what can be controlled ("light", "door")
- CanonicalCommand: what a device actually stores ("1" / "0")
- ACTION_COMMANDS: which spoken verbs map to which command

Matching is exact and case-sensitive. This is a fixed vocabulary,
not a parser; the LLM prompt is responsible for producing these words.
"""

from enum import Enum
from typing import Dict

from homeintent.core.errors import (
    CommandDecodeError,
    UnsupportedActionError,
    UnsupportedTargetError,
)


class DeviceClass(str, Enum):
    """Controllable device classes, keyed by the intent's `target` value."""
    LIGHT = "light"
    DOOR = "door"

    @property
    def label(self) -> str:
        """Capitalized name used in outcome messages ("Light", "Door")."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, target: str) -> "DeviceClass":
        """
        Map an intent target to a DeviceClass.

        Raises:
            UnsupportedTargetError: if the target is not a known class
        """
        for member in cls:
            if member.value == target:
                return member
        raise UnsupportedTargetError(target)


class CanonicalCommand(str, Enum):
    """Binary command value; `.value` is the store encoding."""
    ASSERT = "1"
    CLEAR = "0"


# Spoken verb -> canonical command
ACTION_COMMANDS: Dict[str, CanonicalCommand] = {
    "on": CanonicalCommand.ASSERT,
    "open": CanonicalCommand.ASSERT,
    "off": CanonicalCommand.CLEAR,
    "close": CanonicalCommand.CLEAR,
}


def normalize_action(action: str) -> CanonicalCommand:
    """
    Map a free-text action verb to its canonical command.

    Args:
        action: Verb from the intent ("on", "off", "open", "close")

    Returns:
        CanonicalCommand.ASSERT or CanonicalCommand.CLEAR

    Raises:
        UnsupportedActionError: for any other string
    """
    try:
        return ACTION_COMMANDS[action]
    except (KeyError, TypeError):
        raise UnsupportedActionError(action) from None


def decode_command(raw: object) -> CanonicalCommand:
    """
    Decode a raw store value into a canonical command.

    Only the exact strings "1" and "0" decode. Numbers, booleans,
    padded strings and None are rejected so callers can fail closed.

    Raises:
        CommandDecodeError: if the value is not a canonical encoding
    """
    if isinstance(raw, str):
        for member in CanonicalCommand:
            if member.value == raw:
                return member
    raise CommandDecodeError(raw)
