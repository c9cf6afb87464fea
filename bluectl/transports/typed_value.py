"""Wrap raw Python values with D-Bus type tags."""

from __future__ import annotations

from typing import Any

from dbus_fast import Variant

TYPE_SIGNATURES: dict[str, str] = {
    "string": "s",
    "object_path": "o",
    "boolean": "b",
    "byte": "y",
    "int16": "n",
    "uint16": "q",
    "int32": "i",
    "uint32": "u",
    "int64": "x",
    "uint64": "t",
    "double": "d",
    "string_array": "as",
    "bytes": "ay",
}


def build_typed_value(type_tag: str, value: Any) -> Variant:
    try:
        signature = TYPE_SIGNATURES[type_tag]
    except KeyError:
        raise ValueError(f"Unknown D-Bus type tag '{type_tag}'") from None
    if signature == "ay":
        value = bytes(value)
    elif signature == "as":
        if isinstance(value, (str, bytes)):
            raise ValueError(f"'{type_tag}' expects a list of strings, got {value!r}")
        value = [str(item) for item in value]
    return Variant(signature, value)
