"""
Tests for the Address Table - location resolution.

Tests for:
- Named location lookup (exact, case-sensitive)
- "all" broadcast resolution
- Aliases
- Construction-time validation
"""

import pytest

from homeintent.core.errors import AddressTableError, UnknownLocationError
from homeintent.devices.address_table import ALL_LOCATIONS, DEFAULT_ADDRESS_TABLE, AddressTable
from homeintent.devices.vocabulary import DeviceClass


@pytest.fixture
def table() -> AddressTable:
    return DEFAULT_ADDRESS_TABLE


class TestResolveNamedLocation:
    """Tests for single-location lookups."""

    @pytest.mark.parametrize("location,address", [
        ("living room", "light1/turn"),
        ("bedroom", "light2/turn"),
        ("kitchen", "light3/turn"),
        ("toilet", "light4/turn"),
    ])
    def test_known_locations(self, table, location, address):
        assert table.resolve(DeviceClass.LIGHT, location) == (address,)

    def test_alias_resolves_to_same_address(self, table):
        assert table.resolve(DeviceClass.LIGHT, "wc") == table.resolve(DeviceClass.LIGHT, "toilet")

    @pytest.mark.parametrize("location", ["garage", "Kitchen", " kitchen", "kitchen ", "", "ALL"])
    def test_unknown_location(self, table, location):
        with pytest.raises(UnknownLocationError) as exc_info:
            table.resolve(DeviceClass.LIGHT, location)

        assert exc_info.value.location == location

    def test_class_without_locations(self, table):
        with pytest.raises(UnknownLocationError):
            table.resolve(DeviceClass.DOOR, "kitchen")


class TestResolveAll:
    """Tests for the "all" broadcast location."""

    def test_all_returns_every_address_in_order(self, table):
        addresses = table.resolve(DeviceClass.LIGHT, ALL_LOCATIONS)

        assert addresses == ("light1/turn", "light2/turn", "light3/turn", "light4/turn")

    def test_all_has_no_duplicates_despite_alias(self, table):
        addresses = table.resolve(DeviceClass.LIGHT, "all")

        assert len(addresses) == len(set(addresses))

    def test_all_covers_every_named_location(self, table):
        addresses = set(table.resolve(DeviceClass.LIGHT, "all"))

        for location in table.locations(DeviceClass.LIGHT):
            assert table.resolve(DeviceClass.LIGHT, location)[0] in addresses

    def test_all_is_deterministic(self, table):
        assert table.resolve(DeviceClass.LIGHT, "all") == table.resolve(DeviceClass.LIGHT, "all")

    def test_all_for_class_without_locations(self, table):
        assert table.resolve(DeviceClass.DOOR, "all") == ()


class TestFixedAndAuthorization:
    """Tests for door addressing and the security-sensitive marker."""

    def test_door_fixed_address(self, table):
        assert table.fixed_address(DeviceClass.DOOR) == "door/turn"

    def test_light_has_no_fixed_address(self, table):
        with pytest.raises(AddressTableError):
            table.fixed_address(DeviceClass.LIGHT)

    def test_door_is_security_sensitive(self, table):
        assert table.is_security_sensitive(DeviceClass.DOOR)
        assert table.authorization_address(DeviceClass.DOOR) == "camera/isOwner"

    def test_light_is_not_security_sensitive(self, table):
        assert not table.is_security_sensitive(DeviceClass.LIGHT)
        assert table.authorization_address(DeviceClass.LIGHT) is None

    def test_location_addressing(self, table):
        assert table.is_location_addressed(DeviceClass.LIGHT)
        assert not table.is_location_addressed(DeviceClass.DOOR)


class TestValidation:
    """Tests for construction-time invariants."""

    def test_reserved_all_location_rejected(self):
        with pytest.raises(AddressTableError):
            AddressTable(locations={DeviceClass.LIGHT: {"all": "light9/turn"}})

    def test_reserved_all_alias_rejected(self):
        with pytest.raises(AddressTableError):
            AddressTable(
                locations={DeviceClass.LIGHT: {"kitchen": "light3/turn"}},
                aliases={DeviceClass.LIGHT: {"all": "kitchen"}},
            )

    def test_duplicate_address_rejected(self):
        with pytest.raises(AddressTableError):
            AddressTable(locations={DeviceClass.LIGHT: {"toilet": "light4/turn", "wc": "light4/turn"}})

    def test_alias_to_unknown_location_rejected(self):
        with pytest.raises(AddressTableError):
            AddressTable(
                locations={DeviceClass.LIGHT: {"kitchen": "light3/turn"}},
                aliases={DeviceClass.LIGHT: {"wc": "toilet"}},
            )

    def test_alias_shadowing_location_rejected(self):
        with pytest.raises(AddressTableError):
            AddressTable(
                locations={DeviceClass.LIGHT: {"kitchen": "light3/turn", "toilet": "light4/turn"}},
                aliases={DeviceClass.LIGHT: {"kitchen": "toilet"}},
            )

    def test_class_cannot_be_fixed_and_located(self):
        with pytest.raises(AddressTableError):
            AddressTable(
                locations={DeviceClass.DOOR: {"front": "door/turn"}},
                fixed={DeviceClass.DOOR: "door/turn"},
            )

    def test_class_without_address_rejected(self):
        """A table must give every device class somewhere to write."""
        with pytest.raises(AddressTableError) as exc_info:
            AddressTable(locations={DeviceClass.LIGHT: {"garage": "light9/turn"}})

        assert "door" in str(exc_info.value)

    def test_every_class_addressed(self):
        table = AddressTable(
            locations={DeviceClass.LIGHT: {"garage": "light9/turn"}},
            fixed={DeviceClass.DOOR: "gate/turn"},
        )

        assert table.fixed_address(DeviceClass.DOOR) == "gate/turn"

    def test_table_is_read_only(self):
        door = {DeviceClass.DOOR: "door/turn"}
        table = AddressTable(locations={DeviceClass.LIGHT: {"kitchen": "light3/turn"}}, fixed=door)
        source = {"kitchen": "light3/turn"}
        table_from_source = AddressTable(locations={DeviceClass.LIGHT: source}, fixed=door)

        source["garage"] = "light9/turn"

        with pytest.raises(UnknownLocationError):
            table_from_source.resolve(DeviceClass.LIGHT, "garage")
        assert table.locations(DeviceClass.LIGHT) == ("kitchen",)
