"""
Address Table - Maps symbolic locations to device-state addresses.

Users say "living room" or "wc"; the store knows "light1/turn" and
"light4/turn". This module holds that mapping for every device class,
plus the two other kinds of address the dispatcher needs:

- fixed addresses for classes that are not location-addressed (the door)
- authorization addresses for security-sensitive classes

The table is compiled-in configuration. It is validated once at
construction and is read-only afterwards, so it can be shared between
concurrent requests without locking.

Resolution:
==========
- "all" → every address of the class, in table order, no duplicates
- exact, case-sensitive location or alias → one address
- anything else → UnknownLocationError
"""

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from homeintent.core.errors import AddressTableError, UnknownLocationError
from homeintent.devices.vocabulary import DeviceClass

logger = logging.getLogger("homeintent.devices.address_table")

# Reserved location meaning "every address of this class"
ALL_LOCATIONS = "all"


class AddressTable:
    """
    Immutable per-class location → address mapping.

    Usage:
        table = AddressTable(
            locations={DeviceClass.LIGHT: {"kitchen": "light3/turn"}},
            fixed={DeviceClass.DOOR: "door/turn"},
            authorization={DeviceClass.DOOR: "camera/isOwner"},
        )

        table.resolve(DeviceClass.LIGHT, "kitchen")   # ("light3/turn",)
        table.resolve(DeviceClass.LIGHT, "all")       # every light address
    """

    def __init__(
        self,
        locations: Optional[Mapping[DeviceClass, Mapping[str, str]]] = None,
        aliases: Optional[Mapping[DeviceClass, Mapping[str, str]]] = None,
        fixed: Optional[Mapping[DeviceClass, str]] = None,
        authorization: Optional[Mapping[DeviceClass, str]] = None,
    ):
        self._locations: Dict[DeviceClass, Mapping[str, str]] = {}
        self._aliases: Dict[DeviceClass, Mapping[str, str]] = {}

        for device_class, table in (locations or {}).items():
            self._locations[device_class] = MappingProxyType(
                self._validate_locations(device_class, table)
            )
        for device_class, table in (aliases or {}).items():
            self._aliases[device_class] = MappingProxyType(
                self._validate_aliases(device_class, table)
            )

        self._fixed = MappingProxyType(dict(fixed or {}))
        self._authorization = MappingProxyType(dict(authorization or {}))

        overlap = set(self._fixed) & set(self._locations)
        if overlap:
            names = ", ".join(sorted(c.value for c in overlap))
            raise AddressTableError(f"classes both fixed and location-addressed: {names}")

        # Every supported class must be dispatchable
        unaddressed = [c.value for c in DeviceClass if c not in self._fixed and c not in self._locations]
        if unaddressed:
            raise AddressTableError(f"classes without any address: {', '.join(unaddressed)}")

    # -----------------------------------------------------------------------
    # VALIDATION
    # -----------------------------------------------------------------------

    @staticmethod
    def _validate_locations(device_class: DeviceClass, table: Mapping[str, str]) -> Dict[str, str]:
        seen: Dict[str, str] = {}
        for location, address in table.items():
            if location == ALL_LOCATIONS:
                raise AddressTableError(
                    f"'{ALL_LOCATIONS}' is reserved and cannot be a {device_class.value} location"
                )
            if address in seen.values():
                raise AddressTableError(
                    f"duplicate {device_class.value} address '{address}' for '{location}'"
                )
            seen[location] = address
        return seen

    def _validate_aliases(self, device_class: DeviceClass, table: Mapping[str, str]) -> Dict[str, str]:
        known = self._locations.get(device_class, {})
        result: Dict[str, str] = {}
        for alias, location in table.items():
            if alias == ALL_LOCATIONS:
                raise AddressTableError(f"'{ALL_LOCATIONS}' is reserved and cannot be an alias")
            if alias in known:
                raise AddressTableError(f"alias '{alias}' shadows a {device_class.value} location")
            if location not in known:
                raise AddressTableError(
                    f"alias '{alias}' points at unknown {device_class.value} location '{location}'"
                )
            result[alias] = location
        return result

    # -----------------------------------------------------------------------
    # LOOKUPS
    # -----------------------------------------------------------------------

    def resolve(self, device_class: DeviceClass, location: str) -> Tuple[str, ...]:
        """
        Resolve a symbolic location to concrete addresses.

        Args:
            device_class: Class whose table is searched
            location: Location name, alias, or "all"

        Returns:
            Tuple of addresses (one for a named location, all for "all")

        Raises:
            UnknownLocationError: if the location does not resolve
        """
        table = self._locations.get(device_class, {})

        if location == ALL_LOCATIONS:
            return tuple(table.values())

        canonical = self._aliases.get(device_class, {}).get(location, location)
        address = table.get(canonical)
        if address is None:
            logger.debug(f"No {device_class.value} address for location {location!r}")
            raise UnknownLocationError(device_class.value, location)
        return (address,)

    def locations(self, device_class: DeviceClass) -> Tuple[str, ...]:
        """Known location names for a class (aliases excluded), in table order."""
        return tuple(self._locations.get(device_class, {}))

    def is_location_addressed(self, device_class: DeviceClass) -> bool:
        return device_class in self._locations

    def fixed_address(self, device_class: DeviceClass) -> str:
        """
        Single address of a class that ignores locations.

        Raises:
            AddressTableError: if the class has no fixed address
        """
        try:
            return self._fixed[device_class]
        except KeyError:
            raise AddressTableError(f"{device_class.value} has no fixed address") from None

    def authorization_address(self, device_class: DeviceClass) -> Optional[str]:
        """Trust-state address gating this class, or None if it is not gated."""
        return self._authorization.get(device_class)

    def is_security_sensitive(self, device_class: DeviceClass) -> bool:
        return device_class in self._authorization


# ---------------------------------------------------------------------------
# DEFAULT TABLE
# ---------------------------------------------------------------------------
LIGHT_PREFIX = "light"

DEFAULT_ADDRESS_TABLE = AddressTable(
    locations={
        DeviceClass.LIGHT: {
            "living room": f"{LIGHT_PREFIX}1/turn",
            "bedroom": f"{LIGHT_PREFIX}2/turn",
            "kitchen": f"{LIGHT_PREFIX}3/turn",
            "toilet": f"{LIGHT_PREFIX}4/turn",
        },
    },
    aliases={
        DeviceClass.LIGHT: {"wc": "toilet"},
    },
    fixed={
        DeviceClass.DOOR: "door/turn",
    },
    authorization={
        DeviceClass.DOOR: "camera/isOwner",
    },
)
