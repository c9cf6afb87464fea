"""Service layer used by CLI and future UI frontends."""

from __future__ import annotations

import logging
from typing import Any

from bluectl.core.adapter import Adapter
from bluectl.core.errors import AdapterNotFoundError
from bluectl.core.model import ADAPTER_INTERFACE, BLUEZ_ROOT_PATH, BLUEZ_SERVICE
from bluectl.transports.base import BusLink
from bluectl.transports.dbus import DBusLink, connect_system_bus

LOGGER = logging.getLogger(__name__)


class Bluetooth:
    """Entry point to the BlueZ object tree.

    Used as an async context manager. When no ``bus`` is given, entering opens
    a system bus connection and exiting closes it; an injected bus is left open.
    """

    def __init__(self, bus: Any = None, *, root_link: BusLink | None = None) -> None:
        self.bus = bus
        self._owns_bus = False
        self._root_link = root_link

    async def __aenter__(self) -> Bluetooth:
        if self.bus is None:
            self.bus = await connect_system_bus()
            self._owns_bus = True
            LOGGER.debug("Connected to system bus")
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._owns_bus and self.bus is not None:
            self.bus.disconnect()
            LOGGER.debug("Disconnected from system bus")
            self.bus = None
            self._owns_bus = False

    @property
    def root_link(self) -> BusLink:
        if self._root_link is None:
            self._root_link = DBusLink(self.bus, BLUEZ_SERVICE, BLUEZ_ROOT_PATH, ADAPTER_INTERFACE)
        return self._root_link

    def _adapter(self, name: str) -> Adapter:
        return Adapter(self.bus, name)

    async def adapters(self) -> list[str]:
        return await self.root_link.children()

    async def get_adapter(self, name: str) -> Adapter:
        if name not in await self.adapters():
            raise AdapterNotFoundError(f"Adapter not found: {name}")
        return self._adapter(name)

    async def default_adapter(self) -> Adapter:
        names = await self.adapters()
        if not names:
            raise AdapterNotFoundError("No available adapters found")
        return self._adapter(names[0])

    async def active_adapters(self) -> list[str]:
        active: list[str] = []
        for name in await self.adapters():
            if await self._adapter(name).is_powered():
                active.append(name)
        return active
