"""Mapping between peer addresses and BlueZ child object names."""

from __future__ import annotations

CHILD_PREFIX = "dev_"
ADDRESS_SEPARATOR = ":"
PATH_SEPARATOR = "_"


def encode_address(address: str) -> str:
    """Return the child node name BlueZ uses for ``address``.

    ``AA:BB:CC:DD:EE:FF`` becomes ``dev_AA_BB_CC_DD_EE_FF``. The address is not
    validated; a malformed one simply never matches a real child.
    """
    return CHILD_PREFIX + address.replace(ADDRESS_SEPARATOR, PATH_SEPARATOR)


def decode_child_name(child_name: str) -> str:
    return child_name[len(CHILD_PREFIX):].replace(PATH_SEPARATOR, ADDRESS_SEPARATOR)
