"""
Devices Module - what can be controlled and where its state lives.

- vocabulary: DeviceClass, CanonicalCommand, action normalization
- address_table: location → address resolution
- store: device-state store backends (Firebase, in-memory)
"""

from homeintent.devices.vocabulary import (
    DeviceClass,
    CanonicalCommand,
    normalize_action,
    decode_command,
)
from homeintent.devices.address_table import (
    AddressTable,
    ALL_LOCATIONS,
    DEFAULT_ADDRESS_TABLE,
)
from homeintent.devices.store import (
    DeviceStore,
    FirebaseDeviceStore,
    InMemoryDeviceStore,
    build_store,
)

__all__ = [
    "DeviceClass",
    "CanonicalCommand",
    "normalize_action",
    "decode_command",
    "AddressTable",
    "ALL_LOCATIONS",
    "DEFAULT_ADDRESS_TABLE",
    "DeviceStore",
    "FirebaseDeviceStore",
    "InMemoryDeviceStore",
    "build_store",
]
