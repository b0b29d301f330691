"""
Intent Dispatcher - turns a structured intent into exactly one outcome.

Flow:
=====
```
intent
  │
  ├─ target ∉ vocabulary ───────────────► Failed(unsupported_target)
  ├─ action ∉ vocabulary ───────────────► Failed(unsupported_action)
  │
  ├─ security-sensitive class (door)
  │     authorize ── read error ────────► Failed(auth_failure)
  │               ── denied ────────────► Denied("not owner")
  │               ── permitted
  │     write fixed address ── error ───► Failed(command_failure)
  │                         ── ok ──────► Applied("Door open")
  │
  └─ location-addressed class (light)
        resolve ── unknown ─────────────► Failed(invalid_location)
        write each address, fail-fast ──► Failed(command_failure)
                                  ok ───► Applied("Light on in kitchen")
```

Single pass, no retries, no rollback. Unsupported targets and actions are
rejected before the store is touched.
"""

import logging
from typing import Optional, Tuple

from homeintent.ai.intent.schemas import Intent
from homeintent.core.errors import (
    DispatchError,
    InvalidLocationError,
    UnknownLocationError,
)
from homeintent.devices.address_table import DEFAULT_ADDRESS_TABLE, AddressTable
from homeintent.devices.store import DeviceStore
from homeintent.devices.vocabulary import CanonicalCommand, DeviceClass, normalize_action
from homeintent.monitoring import DispatchMonitor
from homeintent.services.authorization import AuthorizationDecision, AuthorizationGate
from homeintent.services.command_applier import DeviceCommandApplier
from homeintent.services.dispatch_result import DispatchOutcome

logger = logging.getLogger("homeintent.services.dispatcher")

DENIED_MESSAGE = "not owner"


class IntentDispatcher:
    """
    Validates, authorizes and applies one intent.

    The store handle is passed in; the dispatcher holds no per-request
    state, so one instance serves every request of the process.

    Usage:
        dispatcher = IntentDispatcher(store)
        outcome = await dispatcher.dispatch(
            Intent(target="light", action="on", content="", location="kitchen")
        )
        print(outcome.http_status, outcome.message)
    """

    def __init__(
        self,
        store: DeviceStore,
        table: AddressTable = DEFAULT_ADDRESS_TABLE,
        monitor: Optional[DispatchMonitor] = None,
    ):
        self.store = store
        self.table = table
        self.gate = AuthorizationGate(store, table)
        self.applier = DeviceCommandApplier(store, monitor=monitor)

    async def dispatch(self, intent: Intent, request_id: str = "") -> DispatchOutcome:
        """
        Dispatch an intent.

        Never raises for taxonomy errors; they come back as Failed outcomes.
        """
        try:
            device_class = DeviceClass.parse(intent.target)
            command = normalize_action(intent.action)

            if self.table.is_security_sensitive(device_class):
                decision = await self.gate.authorize(device_class, request_id=request_id)
                if decision is AuthorizationDecision.DENIED:
                    return DispatchOutcome.denied(DENIED_MESSAGE)

            if self.table.is_location_addressed(device_class):
                written = await self._apply_to_location(device_class, intent.location, command, request_id)
                message = f"{device_class.label} {intent.action} in {intent.location}"
            else:
                address = self.table.fixed_address(device_class)
                await self.applier.apply(address, command, request_id=request_id)
                written = (address,)
                message = f"{device_class.label} {intent.action}"

        except DispatchError as e:
            logger.info(
                f"[{request_id}] Dispatch failed ({e.kind.value}): {e.detail}",
                extra={"target": intent.target, "action": intent.action, "location": intent.location},
            )
            return DispatchOutcome.from_error(e)

        return DispatchOutcome.applied(message, addresses=written)

    async def _apply_to_location(
        self,
        device_class: DeviceClass,
        location: str,
        command: CanonicalCommand,
        request_id: str,
    ) -> Tuple[str, ...]:
        try:
            addresses = self.table.resolve(device_class, location)
        except UnknownLocationError as e:
            raise InvalidLocationError(device_class.value, location) from e

        logger.debug(f"[{request_id}] {device_class.value}@{location!r} -> {list(addresses)}")
        return await self.applier.apply_many(addresses, command, request_id=request_id)
