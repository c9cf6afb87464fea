"""Stable public API for building tooling on top of bluectl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.

Typical use::

    async with Bluetooth() as bluetooth:
        adapter = await bluetooth.default_adapter()
        await adapter.start_discovery()
        device = await adapter.wait_for_peer("AA:BB:CC:DD:EE:FF", timeout_s=30)
        await adapter.stop_discovery()
"""

from __future__ import annotations

from bluectl.core.adapter import (
    DEFAULT_DISCOVERY_OPTIONS,
    DEFAULT_POLL_INTERVAL_S,
    DEFAULT_TIMEOUT_S,
    Adapter,
    build_discovery_filter,
)
from bluectl.core.device import Device
from bluectl.core.errors import (
    AdapterNotFoundError,
    BluectlError,
    BusCallError,
    DeviceNotFoundError,
    DiscoveryInProgressError,
    DiscoveryNotStartedError,
    DiscoveryStateError,
    LookupMissError,
    OperationTimeoutError,
    SettingsLoadError,
    SettingsValidationError,
    TransportConnectError,
    TransportError,
    WrongParameterError,
)
from bluectl.core.identifiers import decode_child_name, encode_address
from bluectl.core.model import AdapterRef, DiscoveryState, Settings
from bluectl.core.polling import poll_until_found
from bluectl.core.service import Bluetooth
from bluectl.core.settings import LoadedSettings, load_settings
from bluectl.transports.base import BusLink
from bluectl.transports.dbus import DBusLink
from bluectl.transports.typed_value import build_typed_value

__all__ = [
    "BluectlError",
    "SettingsLoadError",
    "SettingsValidationError",
    "DiscoveryStateError",
    "DiscoveryInProgressError",
    "DiscoveryNotStartedError",
    "WrongParameterError",
    "LookupMissError",
    "AdapterNotFoundError",
    "DeviceNotFoundError",
    "OperationTimeoutError",
    "TransportError",
    "TransportConnectError",
    "BusCallError",
    "DEFAULT_DISCOVERY_OPTIONS",
    "DEFAULT_POLL_INTERVAL_S",
    "DEFAULT_TIMEOUT_S",
    "Adapter",
    "AdapterRef",
    "Bluetooth",
    "BusLink",
    "DBusLink",
    "Device",
    "DiscoveryState",
    "LoadedSettings",
    "Settings",
    "build_discovery_filter",
    "build_typed_value",
    "decode_child_name",
    "encode_address",
    "load_settings",
    "poll_until_found",
]
