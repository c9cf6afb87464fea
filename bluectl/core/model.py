"""Core data models used across service, adapter, settings, and CLI."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

BLUEZ_SERVICE = "org.bluez"
BLUEZ_ROOT_PATH = "/org/bluez"
ADAPTER_INTERFACE = "org.bluez.Adapter1"
DEVICE_INTERFACE = "org.bluez.Device1"


class DiscoveryState(enum.Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"

    @classmethod
    def from_discovering(cls, discovering: bool) -> DiscoveryState:
        return cls.DISCOVERING if discovering else cls.IDLE


@dataclass(frozen=True)
class AdapterRef:
    bus: Any
    adapter: str
    service: str = BLUEZ_SERVICE

    @property
    def path(self) -> str:
        return f"{BLUEZ_ROOT_PATH}/{self.adapter}"


@dataclass(frozen=True)
class DiscoveryDefaults:
    transport: str = "le"
    duplicate_data: bool = True


@dataclass(frozen=True)
class WaitDefaults:
    timeout_s: float = 120.0
    poll_interval_s: float = 1.0


@dataclass(frozen=True)
class Settings:
    adapter: str | None = None
    wait: WaitDefaults = field(default_factory=WaitDefaults)
    discovery: DiscoveryDefaults = field(default_factory=DiscoveryDefaults)
