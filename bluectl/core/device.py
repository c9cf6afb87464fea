"""Handle on a peer device object exposed by BlueZ."""

from __future__ import annotations

from typing import Any

from bluectl.core.identifiers import decode_child_name
from bluectl.core.model import BLUEZ_ROOT_PATH, BLUEZ_SERVICE, DEVICE_INTERFACE
from bluectl.transports.base import BusLink
from bluectl.transports.dbus import DBusLink


class Device:
    def __init__(
        self,
        bus: Any,
        adapter: str,
        child_name: str,
        *,
        link: BusLink | None = None,
    ) -> None:
        self.bus = bus
        self.adapter = adapter
        self.child_name = child_name
        self.link = link or DBusLink(bus, BLUEZ_SERVICE, self.path, DEVICE_INTERFACE)

    @property
    def path(self) -> str:
        return f"{BLUEZ_ROOT_PATH}/{self.adapter}/{self.child_name}"

    @property
    def address(self) -> str:
        return decode_child_name(self.child_name)

    async def get_name(self) -> str:
        return await self.link.get_property("Name")

    async def get_alias(self) -> str:
        return await self.link.get_property("Alias")

    async def get_address_type(self) -> str:
        return await self.link.get_property("AddressType")

    async def get_rssi(self) -> int:
        return await self.link.get_property("RSSI")

    async def is_connected(self) -> bool:
        return await self.link.get_property("Connected")

    async def is_paired(self) -> bool:
        return await self.link.get_property("Paired")

    async def describe(self) -> str:
        alias = await self.get_alias()
        return f"{alias} [{self.address}]"

    def __repr__(self) -> str:
        return f"Device(adapter={self.adapter!r}, address={self.address!r})"
