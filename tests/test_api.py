from __future__ import annotations

import asyncio

from bluectl import api
from bluectl.api import Adapter, Bluetooth, Device, DiscoveryState


class FakeRootLink:
    async def children(self) -> list[str]:
        return ["hci0"]


def test_public_exports_resolve() -> None:
    for name in api.__all__:
        assert hasattr(api, name), name


def test_public_flow_discover_wait_stop(monkeypatch, link) -> None:
    async def _run() -> tuple[Device, DiscoveryState]:
        async with Bluetooth(object(), root_link=FakeRootLink()) as bluetooth:
            monkeypatch.setattr(bluetooth, "_adapter", lambda name: Adapter(None, name, link=link))
            adapter = await bluetooth.default_adapter()
            await adapter.start_discovery({"transport": "le"})
            link.add_child_later("dev_C0_FF_EE_00_00_01", 0.1)
            device = await adapter.wait_for_peer("C0:FF:EE:00:00:01", timeout_s=1.0, poll_interval_s=0.05)
            await adapter.stop_discovery()
            return device, await adapter.get_discovery_state()

    device, state = asyncio.run(_run())
    assert device.address == "C0:FF:EE:00:00:01"
    assert state is DiscoveryState.IDLE
    assert link.method_names == ["SetDiscoveryFilter", "StartDiscovery", "StopDiscovery"]
