"""D-Bus bus link implementation using dbus_fast."""

from __future__ import annotations

import logging
from typing import Any

from dbus_fast import BusType, Message, MessageType
from dbus_fast.aio import MessageBus
from dbus_fast.introspection import Node

from bluectl.core.errors import BusCallError, TransportConnectError

PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"
INTROSPECTABLE_INTERFACE = "org.freedesktop.DBus.Introspectable"
LOGGER = logging.getLogger(__name__)


async def connect_system_bus() -> MessageBus:
    try:
        return await MessageBus(bus_type=BusType.SYSTEM).connect()
    except Exception as exc:
        raise TransportConnectError(
            f"Could not connect to the D-Bus system bus: {exc}"
        ) from exc


class DBusLink:
    """Handle on one interface of one remote object.

    Nothing is cached: every read, write, call, and child listing is a fresh
    round trip on ``bus``.
    """

    def __init__(self, bus: MessageBus, service: str, path: str, interface: str) -> None:
        self.bus = bus
        self.service = service
        self.path = path
        self.interface = interface

    async def _call(
        self,
        *,
        interface: str,
        member: str,
        signature: str = "",
        body: list[Any] | None = None,
    ) -> list[Any]:
        LOGGER.debug("D-Bus call %s %s.%s", self.path, interface, member)
        reply = await self.bus.call(
            Message(
                destination=self.service,
                path=self.path,
                interface=interface,
                member=member,
                signature=signature,
                body=body or [],
            )
        )
        if reply is None:
            return []
        if reply.message_type == MessageType.ERROR:
            detail = reply.body[0] if reply.body and isinstance(reply.body[0], str) else ""
            raise BusCallError(reply.error_name or "org.freedesktop.DBus.Error.Failed", detail)
        return reply.body

    async def get_property(self, name: str) -> Any:
        body = await self._call(
            interface=PROPERTIES_INTERFACE,
            member="Get",
            signature="ss",
            body=[self.interface, name],
        )
        return body[0].value

    async def set_property(self, name: str, value: Any) -> None:
        await self._call(
            interface=PROPERTIES_INTERFACE,
            member="Set",
            signature="ssv",
            body=[self.interface, name, value],
        )

    async def call_method(self, name: str, *args: Any, signature: str = "") -> Any:
        body = await self._call(
            interface=self.interface,
            member=name,
            signature=signature,
            body=list(args),
        )
        if not body:
            return None
        return body[0] if len(body) == 1 else body

    async def children(self) -> list[str]:
        body = await self._call(interface=INTROSPECTABLE_INTERFACE, member="Introspect")
        node = Node.parse(body[0])
        return [child.name for child in node.nodes if child.name]
