"""
Tests for the Authorization Gate.

Tests for:
- Permitted only on the exact "1" flag
- Fail-closed denial for every other value
- Read errors kept distinct from denials
- No caching between calls
"""

import pytest

from homeintent.core.errors import AuthorizationReadError, FailureKind
from homeintent.devices.address_table import DEFAULT_ADDRESS_TABLE
from homeintent.devices.store import InMemoryDeviceStore
from homeintent.devices.vocabulary import DeviceClass
from homeintent.services.authorization import AuthorizationDecision, AuthorizationGate

FLAG = "camera/isOwner"


def gate_for(store: InMemoryDeviceStore) -> AuthorizationGate:
    return AuthorizationGate(store, DEFAULT_ADDRESS_TABLE)


class TestAuthorize:
    """Tests for authorize()."""

    @pytest.mark.asyncio
    async def test_owner_flag_permits(self):
        store = InMemoryDeviceStore({FLAG: "1"})

        decision = await gate_for(store).authorize(DeviceClass.DOOR)

        assert decision is AuthorizationDecision.PERMITTED
        assert store.reads == [FLAG]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("flag", ["0", "", None, 1, True, "true", "yes", " 1", "11"])
    async def test_anything_else_denies(self, flag):
        store = InMemoryDeviceStore({FLAG: flag})

        decision = await gate_for(store).authorize(DeviceClass.DOOR)

        assert decision is AuthorizationDecision.DENIED

    @pytest.mark.asyncio
    async def test_missing_flag_denies(self):
        decision = await gate_for(InMemoryDeviceStore()).authorize(DeviceClass.DOOR)

        assert decision is AuthorizationDecision.DENIED

    @pytest.mark.asyncio
    async def test_read_error_is_not_a_denial(self):
        store = InMemoryDeviceStore({FLAG: "1"}, fail_on=[FLAG])

        with pytest.raises(AuthorizationReadError) as exc_info:
            await gate_for(store).authorize(DeviceClass.DOOR)

        assert exc_info.value.kind == FailureKind.AUTH_FAILURE
        assert exc_info.value.address == FLAG

    @pytest.mark.asyncio
    async def test_ungated_class_skips_read(self):
        store = InMemoryDeviceStore()

        decision = await gate_for(store).authorize(DeviceClass.LIGHT)

        assert decision is AuthorizationDecision.NOT_REQUIRED
        assert store.reads == []

    @pytest.mark.asyncio
    async def test_flag_read_fresh_every_time(self):
        store = InMemoryDeviceStore({FLAG: "1"})
        gate = gate_for(store)

        first = await gate.authorize(DeviceClass.DOOR)
        store.values[FLAG] = "0"
        second = await gate.authorize(DeviceClass.DOOR)

        assert first is AuthorizationDecision.PERMITTED
        assert second is AuthorizationDecision.DENIED
        assert store.reads == [FLAG, FLAG]
