"""Typer CLI entrypoint."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer

from bluectl.core.adapter import Adapter
from bluectl.core.device import Device
from bluectl.core.errors import BluectlError
from bluectl.core.model import Settings
from bluectl.core.service import Bluetooth
from bluectl.core.settings import load_settings

T = TypeVar("T")

app = typer.Typer(help="BlueZ adapter control over D-Bus")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _load_settings() -> Settings:
    loaded = load_settings()
    for warning in loaded.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return loaded.settings


def _with_adapter(adapter_name: str | None, action: Callable[[Adapter], Awaitable[T]]) -> T:
    async def _run() -> T:
        async with Bluetooth() as bluetooth:
            if adapter_name:
                adapter = await bluetooth.get_adapter(adapter_name)
            else:
                adapter = await bluetooth.default_adapter()
            return await action(adapter)

    return asyncio.run(_run())


@app.command("adapters")
def list_adapters() -> None:
    """List adapters exposed by BlueZ."""
    async def _run() -> tuple[list[str], list[str]]:
        async with Bluetooth() as bluetooth:
            return await bluetooth.adapters(), await bluetooth.active_adapters()

    try:
        names, active = asyncio.run(_run())
        if not names:
            typer.echo("No adapters found")
            raise typer.Exit(code=1)
        for name in names:
            state = "powered" if name in active else "off"
            typer.echo(f"{name} ({state})")
    except BluectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("info")
def adapter_info(
    adapter: str | None = typer.Option(None, "--adapter", "-a", help="Adapter name, e.g. hci0"),
) -> None:
    """Show adapter identity and state."""
    async def _info(target: Adapter) -> dict[str, object]:
        return {
            "summary": await target.describe(),
            "name": await target.get_name(),
            "address_type": await target.get_address_type(),
            "powered": await target.is_powered(),
            "discovery": (await target.get_discovery_state()).value,
        }

    try:
        settings = _load_settings()
        info = _with_adapter(adapter or settings.adapter, _info)
        typer.echo(info["summary"])
        typer.echo(f"  name: {info['name']}")
        typer.echo(f"  address type: {info['address_type']}")
        typer.echo(f"  powered: {'yes' if info['powered'] else 'no'}")
        typer.echo(f"  discovery: {info['discovery']}")
    except BluectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("devices")
def list_devices(
    adapter: str | None = typer.Option(None, "--adapter", "-a", help="Adapter name, e.g. hci0"),
) -> None:
    """List peers currently known to the adapter."""
    try:
        settings = _load_settings()
        peers = _with_adapter(adapter or settings.adapter, lambda target: target.list_peers())
        if not peers:
            typer.echo("No devices found")
            return
        for address in peers:
            typer.echo(address)
    except BluectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def _discovery_options(settings: Settings, transport: str | None, no_duplicates: bool) -> dict[str, object]:
    return {
        "transport": transport or settings.discovery.transport,
        "duplicate_data": settings.discovery.duplicate_data and not no_duplicates,
    }


@app.command("discover")
def discover(
    adapter: str | None = typer.Option(None, "--adapter", "-a", help="Adapter name, e.g. hci0"),
    duration: float = typer.Option(10.0, "--duration", "-d", min=0.0, help="Seconds to scan"),
    transport: str | None = typer.Option(None, "--transport", help="auto, bredr or le"),
    no_duplicates: bool = typer.Option(
        False,
        "--no-duplicates",
        help="Suppress duplicate advertisement reports",
    ),
) -> None:
    """Scan for DURATION seconds, then list the peers the adapter knows.

    The scan stops when the command exits.
    """
    async def _scan(target: Adapter) -> list[str]:
        async with target.discovery_session(options):
            await asyncio.sleep(duration)
            return await target.list_peers()

    try:
        settings = _load_settings()
        options = _discovery_options(settings, transport, no_duplicates)
        typer.echo(f"Scanning for {duration:g}s (transport={options['transport']})")
        peers = _with_adapter(adapter or settings.adapter, _scan)
        if not peers:
            typer.echo("No devices found")
            return
        for address in peers:
            typer.echo(address)
    except BluectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("wait")
def wait_for_device(
    address: str,
    adapter: str | None = typer.Option(None, "--adapter", "-a", help="Adapter name, e.g. hci0"),
    timeout: float | None = typer.Option(None, "--timeout", help="Seconds before giving up"),
    interval: float | None = typer.Option(None, "--interval", help="Seconds between lookups"),
    discover_first: bool = typer.Option(
        False,
        "--discover/--no-discover",
        help="Scan while waiting; the scan stops when the command exits",
    ),
    transport: str | None = typer.Option(None, "--transport", help="auto, bredr or le"),
) -> None:
    """Wait until ADDRESS appears under the adapter.

    Without --discover only peers BlueZ already knows, or finds through another
    client's scan, will show up.
    """
    try:
        settings = _load_settings()
        timeout_s = timeout if timeout is not None else settings.wait.timeout_s
        poll_interval_s = interval if interval is not None else settings.wait.poll_interval_s

        async def _wait(target: Adapter) -> Device:
            if not discover_first:
                return await target.wait_for_peer(address, timeout_s, poll_interval_s)
            options = _discovery_options(settings, transport, False)
            async with target.discovery_session(options):
                return await target.wait_for_peer(address, timeout_s, poll_interval_s)

        device = _with_adapter(adapter or settings.adapter, _wait)
        typer.echo(f"Found {device.address} at {device.path}")
    except BluectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
