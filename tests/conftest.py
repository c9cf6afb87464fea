from __future__ import annotations

import asyncio
from typing import Any

import pytest


class FakeLink:
    """In-memory stand-in for a bus link bound to one adapter."""

    def __init__(self, properties: dict[str, Any] | None = None, children: list[str] | None = None) -> None:
        self.properties: dict[str, Any] = dict(properties or {})
        self.child_names: list[str] = list(children or [])
        self.calls: list[tuple[str, tuple[Any, ...], str]] = []
        self.reads: list[str] = []
        self.writes: list[tuple[str, Any]] = []
        self.children_calls = 0
        self.log: list[str] = []
        self.failures: dict[str, Exception] = {}
        self.appear_after: dict[str, float] = {}

    async def get_property(self, name: str) -> Any:
        await asyncio.sleep(0)
        self.reads.append(name)
        return self.properties[name]

    async def set_property(self, name: str, value: Any) -> None:
        self.writes.append((name, value))
        self.properties[name] = value.value

    async def call_method(self, name: str, *args: Any, signature: str = "") -> Any:
        await asyncio.sleep(0)
        self.calls.append((name, args, signature))
        self.log.append(name)
        if name in self.failures:
            raise self.failures[name]
        if name == "StartDiscovery":
            self.properties["Discovering"] = True
        elif name == "StopDiscovery":
            self.properties["Discovering"] = False
        elif name == "GetDiscoveryFilters":
            return ["UUIDs", "RSSI", "Pathloss", "Transport", "DuplicateData"]
        return None

    async def children(self) -> list[str]:
        await asyncio.sleep(0)
        self.children_calls += 1
        self.log.append("children")
        if "children" in self.failures:
            raise self.failures["children"]
        now = asyncio.get_running_loop().time()
        for name, when in list(self.appear_after.items()):
            if now >= when:
                self.child_names.append(name)
                del self.appear_after[name]
        return list(self.child_names)

    def add_child_later(self, name: str, delay_s: float) -> None:
        self.appear_after[name] = asyncio.get_running_loop().time() + delay_s

    @property
    def method_names(self) -> list[str]:
        return [name for name, _, _ in self.calls]


@pytest.fixture
def link() -> FakeLink:
    return FakeLink(
        properties={
            "Address": "00:1A:7D:DA:71:13",
            "AddressType": "public",
            "Name": "workstation",
            "Alias": "Workstation",
            "Powered": True,
            "Discovering": False,
        },
        children=["dev_11_22_33_44_55_66", "dev_AA_BB_CC_DD_EE_FF"],
    )
