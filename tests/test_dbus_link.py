from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from dbus_fast import MessageType, Variant

from bluectl.core.errors import BusCallError
from bluectl.transports.dbus import DBusLink
from bluectl.transports.typed_value import build_typed_value

INTROSPECTION_XML = """
<node>
  <interface name="org.bluez.Adapter1"/>
  <node name="dev_AA_BB_CC_DD_EE_FF"/>
  <node name="dev_11_22_33_44_55_66"/>
</node>
"""


class FakeBus:
    def __init__(self, replies: list[SimpleNamespace]) -> None:
        self.replies = list(replies)
        self.sent = []

    async def call(self, message):
        self.sent.append(message)
        return self.replies.pop(0)


def _ok(*body) -> SimpleNamespace:
    return SimpleNamespace(message_type=MessageType.METHOD_RETURN, body=list(body), error_name=None)


def _link(bus: FakeBus) -> DBusLink:
    return DBusLink(bus, "org.bluez", "/org/bluez/hci0", "org.bluez.Adapter1")


def test_get_property_unwraps_variant() -> None:
    bus = FakeBus([_ok(Variant("s", "00:1A:7D:DA:71:13"))])

    value = asyncio.run(_link(bus).get_property("Address"))

    assert value == "00:1A:7D:DA:71:13"
    message = bus.sent[0]
    assert message.destination == "org.bluez"
    assert message.path == "/org/bluez/hci0"
    assert message.interface == "org.freedesktop.DBus.Properties"
    assert message.member == "Get"
    assert message.body == ["org.bluez.Adapter1", "Address"]


def test_set_property_sends_typed_value() -> None:
    bus = FakeBus([_ok()])

    asyncio.run(_link(bus).set_property("Powered", build_typed_value("boolean", True)))

    message = bus.sent[0]
    assert message.member == "Set"
    assert message.signature == "ssv"
    assert message.body[2].value is True


def test_call_method_targets_bound_interface() -> None:
    bus = FakeBus([_ok()])
    filters = {"Transport": build_typed_value("string", "le")}

    result = asyncio.run(_link(bus).call_method("SetDiscoveryFilter", filters, signature="a{sv}"))

    assert result is None
    message = bus.sent[0]
    assert message.interface == "org.bluez.Adapter1"
    assert message.member == "SetDiscoveryFilter"
    assert message.signature == "a{sv}"


def test_children_parses_introspection_in_order() -> None:
    bus = FakeBus([_ok(INTROSPECTION_XML)])

    children = asyncio.run(_link(bus).children())

    assert children == ["dev_AA_BB_CC_DD_EE_FF", "dev_11_22_33_44_55_66"]
    assert bus.sent[0].interface == "org.freedesktop.DBus.Introspectable"


def test_error_reply_raises_bus_call_error() -> None:
    reply = SimpleNamespace(
        message_type=MessageType.ERROR,
        body=["Operation already in progress"],
        error_name="org.bluez.Error.InProgress",
    )
    bus = FakeBus([reply])

    with pytest.raises(BusCallError) as excinfo:
        asyncio.run(_link(bus).call_method("StartDiscovery"))

    assert excinfo.value.error_name == "org.bluez.Error.InProgress"
    assert "already in progress" in str(excinfo.value)


def test_every_read_is_a_round_trip() -> None:
    bus = FakeBus([_ok(Variant("b", False)), _ok(Variant("b", True))])
    link = _link(bus)

    assert asyncio.run(link.get_property("Discovering")) is False
    assert asyncio.run(link.get_property("Discovering")) is True
    assert len(bus.sent) == 2
