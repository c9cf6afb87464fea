"""Coordinator for one local BlueZ adapter."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

from bluectl.core.device import Device
from bluectl.core.errors import (
    DeviceNotFoundError,
    DiscoveryInProgressError,
    DiscoveryNotStartedError,
    WrongParameterError,
)
from bluectl.core.identifiers import decode_child_name, encode_address
from bluectl.core.model import ADAPTER_INTERFACE, AdapterRef, DiscoveryState
from bluectl.core.polling import poll_until_found
from bluectl.transports.base import BusLink
from bluectl.transports.dbus import DBusLink
from bluectl.transports.typed_value import build_typed_value

DEFAULT_TIMEOUT_S = 120.0
DEFAULT_POLL_INTERVAL_S = 1.0
DEFAULT_DISCOVERY_OPTIONS: dict[str, Any] = {"transport": "le", "duplicate_data": True}

# option key -> (SetDiscoveryFilter key, type tag)
DISCOVERY_FILTER_KEYS: dict[str, tuple[str, str]] = {
    "transport": ("Transport", "string"),
    "duplicate_data": ("DuplicateData", "boolean"),
    "uuids": ("UUIDs", "string_array"),
    "rssi": ("RSSI", "int16"),
    "pathloss": ("Pathloss", "uint16"),
    "discoverable": ("Discoverable", "boolean"),
    "pattern": ("Pattern", "string"),
}
LOGGER = logging.getLogger(__name__)


def build_discovery_filter(options: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``options`` over the defaults and type each value for the bus.

    Keys outside :data:`DISCOVERY_FILTER_KEYS` are forwarded as given.
    """
    merged = {**DEFAULT_DISCOVERY_OPTIONS, **options}
    filters: dict[str, Any] = {}
    for key, value in merged.items():
        known = DISCOVERY_FILTER_KEYS.get(key)
        if known is None:
            filters[key] = value
            continue
        bus_key, type_tag = known
        filters[bus_key] = build_typed_value(type_tag, value)
    return filters


class Adapter:
    """Local Bluetooth adapter exposed by BlueZ as ``/org/bluez/<adapter>``.

    Every accessor reads the live bus state; nothing is cached between calls.
    The discovery preconditions are checked against the live ``Discovering``
    property and are not atomic with the call that follows, so concurrent
    start/stop calls can race.
    """

    def __init__(self, bus: Any, adapter: str, *, link: BusLink | None = None) -> None:
        self.ref = AdapterRef(bus=bus, adapter=adapter)
        self.link = link or DBusLink(bus, self.ref.service, self.ref.path, ADAPTER_INTERFACE)

    @property
    def name(self) -> str:
        return self.ref.adapter

    @property
    def path(self) -> str:
        return self.ref.path

    async def get_address(self) -> str:
        return await self.link.get_property("Address")

    async def get_address_type(self) -> str:
        """Address type, ``public`` or ``random``."""
        return await self.link.get_property("AddressType")

    async def get_name(self) -> str:
        """System name of the adapter."""
        return await self.link.get_property("Name")

    async def get_alias(self) -> str:
        """Friendly name of the adapter."""
        return await self.link.get_property("Alias")

    async def is_powered(self) -> bool:
        return await self.link.get_property("Powered")

    async def is_discovering(self) -> bool:
        return await self.link.get_property("Discovering")

    async def get_discovery_state(self) -> DiscoveryState:
        return DiscoveryState.from_discovering(await self.is_discovering())

    async def set_powered(self, powered: bool) -> None:
        await self.link.set_property("Powered", build_typed_value("boolean", powered))

    async def set_alias(self, alias: str) -> None:
        await self.link.set_property("Alias", build_typed_value("string", alias))

    async def start_discovery(self, options: Mapping[str, Any] | None = None) -> None:
        """Apply a discovery filter, then start a discovery session.

        Raises:
            WrongParameterError: ``options`` is not a mapping, or a value does not
                fit its filter type.
            DiscoveryInProgressError: the adapter is already discovering.
        """
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise WrongParameterError("Wrong parameter")
        try:
            filters = build_discovery_filter(options)
        except (TypeError, ValueError) as exc:
            raise WrongParameterError(f"Wrong parameter: {exc}") from exc
        if await self.get_discovery_state() is DiscoveryState.DISCOVERING:
            raise DiscoveryInProgressError("Discovery already in progress")

        LOGGER.debug("Setting discovery filter on %s: %s", self.name, sorted(filters))
        await self.link.call_method("SetDiscoveryFilter", filters, signature="a{sv}")
        await self.link.call_method("StartDiscovery")
        LOGGER.debug("Discovery started on %s", self.name)

    async def stop_discovery(self) -> None:
        """Cancel the discovery session started by :meth:`start_discovery`."""
        if await self.get_discovery_state() is DiscoveryState.IDLE:
            raise DiscoveryNotStartedError("No discovery started")
        await self.link.call_method("StopDiscovery")
        LOGGER.debug("Discovery stopped on %s", self.name)

    @asynccontextmanager
    async def discovery_session(self, options: Mapping[str, Any] | None = None) -> AsyncIterator[Adapter]:
        """Run discovery for the duration of an ``async with`` block.

        BlueZ drops a discovery session when the client that started it leaves
        the bus, so the session must live inside the bus connection that uses it.
        """
        await self.start_discovery(options)
        try:
            yield self
        finally:
            if await self.is_discovering():
                await self.stop_discovery()

    async def get_discovery_filters(self) -> list[str]:
        """Filter keys supported by this adapter's ``SetDiscoveryFilter``."""
        filters = await self.link.call_method("GetDiscoveryFilters")
        return list(filters or [])

    async def list_peers(self) -> list[str]:
        """Addresses of the peers BlueZ currently knows, in bus order."""
        children = await self.link.children()
        return [decode_child_name(child) for child in children]

    async def get_peer(self, address: str) -> Device:
        child_name = encode_address(address)
        children = await self.link.children()
        if child_name not in children:
            raise DeviceNotFoundError("Device not found")
        return Device(self.ref.bus, self.ref.adapter, child_name)

    async def wait_for_peer(
        self,
        address: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        poll_interval_s: float = DEFAULT_POLL_INTERVAL_S,
    ) -> Device:
        """Wait until ``address`` shows up under the adapter and return its handle.

        The child set is polled every ``poll_interval_s`` seconds. Lookup misses
        keep the wait going; any other failure ends it and propagates.

        Raises:
            OperationTimeoutError: the peer did not appear within ``timeout_s``.
        """
        LOGGER.debug(
            "Waiting for %s on %s (timeout %.1fs, interval %.1fs)",
            address,
            self.name,
            timeout_s,
            poll_interval_s,
        )
        return await poll_until_found(
            lambda: self.get_peer(address),
            timeout_s=timeout_s,
            interval_s=poll_interval_s,
            miss=DeviceNotFoundError,
        )

    async def remove_peer(self, address: str) -> None:
        """Ask BlueZ to forget ``address`` and drop its child object."""
        device = await self.get_peer(address)
        await self.link.call_method("RemoveDevice", device.path, signature="o")

    async def describe(self) -> str:
        alias = await self.get_alias()
        address = await self.get_address()
        return f"{alias} [{address}]"

    def __repr__(self) -> str:
        return f"Adapter(name={self.name!r})"
