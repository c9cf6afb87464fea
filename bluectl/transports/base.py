"""Bus link interface."""

from __future__ import annotations

from typing import Any, Protocol


class BusLink(Protocol):
    async def get_property(self, name: str) -> Any:
        """Read one property of the bound interface."""

    async def set_property(self, name: str, value: Any) -> None:
        """Write one property of the bound interface; ``value`` is already typed."""

    async def call_method(self, name: str, *args: Any, signature: str = "") -> Any:
        """Invoke a method of the bound interface and return its reply body."""

    async def children(self) -> list[str]:
        """Return the immediate child node names under the bound path."""
