"""
Authorization Gate - trust check for security-sensitive device classes.

The door only opens for the owner. A camera-side component maintains an
"is owner" flag in the store; this gate reads it on every request and
decides. The decision is fail-closed:

- flag decodes to ASSERT ("1")        → PERMITTED
- CLEAR, missing, empty, malformed    → DENIED
- the read itself fails               → AuthorizationReadError

A read error and a denial are kept distinct. The flag is never cached.
"""

import logging
from enum import Enum

from homeintent.core.errors import AuthorizationReadError, CommandDecodeError, StoreError
from homeintent.devices.address_table import AddressTable
from homeintent.devices.store import DeviceStore
from homeintent.devices.vocabulary import CanonicalCommand, DeviceClass, decode_command

logger = logging.getLogger("homeintent.services.authorization")


class AuthorizationDecision(str, Enum):
    """Result of an authorization check."""
    NOT_REQUIRED = "not_required"
    PERMITTED = "permitted"
    DENIED = "denied"


class AuthorizationGate:
    """
    Reads the trust flag for gated classes and permits or denies.

    Which classes are gated is decided by the address table, not by
    this class: any class with an authorization address is checked.
    """

    def __init__(self, store: DeviceStore, table: AddressTable):
        self.store = store
        self.table = table

    async def authorize(self, device_class: DeviceClass, request_id: str = "") -> AuthorizationDecision:
        """
        Decide whether an action on `device_class` may proceed.

        Returns:
            NOT_REQUIRED for ungated classes (no store read),
            otherwise PERMITTED or DENIED

        Raises:
            AuthorizationReadError: if the trust flag cannot be read
        """
        address = self.table.authorization_address(device_class)
        if address is None:
            return AuthorizationDecision.NOT_REQUIRED

        try:
            raw = await self.store.get(address)
        except StoreError as e:
            logger.error(f"[{request_id}] Authorization read failed for {device_class.value}: {e}")
            raise AuthorizationReadError(device_class.value, address, e.detail) from e

        try:
            flag = decode_command(raw)
        except CommandDecodeError:
            logger.warning(
                f"[{request_id}] Malformed authorization flag at '{address}': {raw!r}; denying"
            )
            return AuthorizationDecision.DENIED

        if flag is CanonicalCommand.ASSERT:
            return AuthorizationDecision.PERMITTED

        logger.info(f"[{request_id}] Authorization denied for {device_class.value}")
        return AuthorizationDecision.DENIED
