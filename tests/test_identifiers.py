from bluectl.core.identifiers import decode_child_name, encode_address


def test_encode_replaces_separators_and_adds_prefix() -> None:
    assert encode_address("AA:BB:CC:DD:EE:FF") == "dev_AA_BB_CC_DD_EE_FF"


def test_decode_strips_prefix_and_restores_separators() -> None:
    assert decode_child_name("dev_00_1A_7D_DA_71_13") == "00:1A:7D:DA:71:13"


def test_decode_inverts_encode() -> None:
    for address in ("AA:BB:CC:DD:EE:FF", "00:00:00:00:00:00", "de:ad:be:ef:00:01"):
        assert decode_child_name(encode_address(address)) == address


def test_malformed_address_is_not_validated() -> None:
    assert encode_address("not-an-address") == "dev_not-an-address"
