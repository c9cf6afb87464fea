import pytest

from bluectl.transports.typed_value import build_typed_value


def test_string_and_boolean_tags() -> None:
    assert build_typed_value("string", "le").signature == "s"
    typed = build_typed_value("boolean", True)
    assert typed.signature == "b"
    assert typed.value is True


def test_string_array_coerces_items() -> None:
    typed = build_typed_value("string_array", ("180d", "180f"))
    assert typed.signature == "as"
    assert typed.value == ["180d", "180f"]


def test_unknown_tag_rejected() -> None:
    with pytest.raises(ValueError):
        build_typed_value("float128", 1.0)


def test_string_array_rejects_bare_string() -> None:
    with pytest.raises(ValueError):
        build_typed_value("string_array", "180d")
    with pytest.raises(ValueError):
        build_typed_value("string_array", b"180d")
