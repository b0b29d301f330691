"""
Device Command Applier - writes canonical commands to the store.

One apply() call is exactly one store write. Broadcasts go through
apply_many(), which stops at the first failing address: writes that
already landed stay in place (no rollback), the rest are never issued.
Re-sending the same command is always safe since a write is a plain
overwrite, not a delta.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from homeintent.core.errors import CommandFailureError, StoreError
from homeintent.devices.store import DeviceStore
from homeintent.devices.vocabulary import CanonicalCommand
from homeintent.monitoring import DispatchMonitor

logger = logging.getLogger("homeintent.services.command_applier")


class DeviceCommandApplier:
    """
    Applies canonical commands to device addresses.

    Usage:
        applier = DeviceCommandApplier(store)
        await applier.apply("light1/turn", CanonicalCommand.ASSERT)
        written = await applier.apply_many(addresses, CanonicalCommand.CLEAR)
    """

    def __init__(self, store: DeviceStore, monitor: Optional[DispatchMonitor] = None):
        self.store = store
        self.monitor = monitor

    async def apply(
        self,
        address: str,
        command: CanonicalCommand,
        request_id: str = "",
    ) -> None:
        """
        Write one command to one address.

        Raises:
            CommandFailureError: if the store write fails
        """
        try:
            await self.store.set(address, command.value)
        except StoreError as e:
            self._track(request_id, address, command, success=False, error=e.detail)
            raise CommandFailureError(address, e.detail) from e
        self._track(request_id, address, command, success=True)

    async def apply_many(
        self,
        addresses: Sequence[str],
        command: CanonicalCommand,
        request_id: str = "",
    ) -> Tuple[str, ...]:
        """
        Write one command to each address in order, fail-fast.

        Returns:
            The addresses written (all of them on success)

        Raises:
            CommandFailureError: on the first failed write; `written`
                holds the addresses mutated before it
        """
        written: List[str] = []
        for address in addresses:
            try:
                await self.apply(address, command, request_id=request_id)
            except CommandFailureError as e:
                if written:
                    logger.warning(
                        f"[{request_id}] Broadcast aborted at '{address}' after "
                        f"{len(written)}/{len(addresses)} writes",
                        extra={"written": list(written), "failed_address": address},
                    )
                raise CommandFailureError(address, e.cause, written=written) from e
            written.append(address)
        return tuple(written)

    def _track(
        self,
        request_id: str,
        address: str,
        command: CanonicalCommand,
        success: bool,
        error: Optional[str] = None,
    ) -> None:
        if self.monitor is not None:
            self.monitor.track_write(request_id, address, command.value, success=success, error=error)

