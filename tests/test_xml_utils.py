import pytest

from proptree.errors import XmlParserError
from proptree.xml_utils import (
    XMLATTR,
    XMLCOMMENT,
    XMLDECL,
    XMLTEXT,
    XmlFlags,
    XmlWriterSettings,
    condense,
    decode_char_entities,
    encode_char_entities,
    validate_flags,
)


def test_flag_values_fixed_by_format():
    assert XmlFlags(0x1) is XmlFlags.NO_CONCAT_TEXT
    assert XmlFlags(0x2) is XmlFlags.NO_COMMENTS
    assert XmlFlags(0x4) is XmlFlags.TRIM_WHITESPACE
    combined = XmlFlags.NO_CONCAT_TEXT | XmlFlags.NO_COMMENTS | XmlFlags.TRIM_WHITESPACE
    assert int(combined) == 7
    assert validate_flags(int(combined)) is True


@pytest.mark.parametrize(
    "flags",
    [0, XmlFlags.NO_CONCAT_TEXT, XmlFlags.NO_COMMENTS | XmlFlags.TRIM_WHITESPACE, 7],
)
def test_validate_flags_accepts_known(flags):
    assert validate_flags(flags) is True


@pytest.mark.parametrize("flags", [8, 0x10, 0x9])
def test_validate_flags_rejects_unknown(flags):
    assert validate_flags(flags) is False


def test_writer_settings_defaults():
    settings = XmlWriterSettings()
    assert settings.indent_char == " "
    assert settings.indent_count == 0
    assert settings.encoding == "utf-8"


@pytest.mark.parametrize(
    "key, encoded",
    [
        (XMLDECL, "&lt;?xml&gt;"),
        (XMLATTR, "&lt;xmlattr&gt;"),
        (XMLCOMMENT, "&lt;xmlcomment&gt;"),
        (XMLTEXT, "&lt;xmltext&gt;"),
    ],
)
def test_special_keys(key, encoded):
    assert encode_char_entities(key) == encoded
    assert decode_char_entities(encoded) == key


def test_condense_collapses_runs():
    assert condense("a  \t\n b") == "a b"


def test_condense_keeps_single_spaces_and_has_no_double_spaces():
    result = condense(" x \n\n y\t\tz ")
    assert "  " not in result
    assert result.split() == ["x", "y", "z"]


def test_encode_empty():
    assert encode_char_entities("") == ""


@pytest.mark.parametrize(
    "raw, encoded",
    [("<", "&lt;"), (">", "&gt;"), ("&", "&amp;"), ('"', "&quot;"), ("'", "&apos;")],
)
def test_encode_each_entity(raw, encoded):
    assert encode_char_entities(raw) == encoded
    assert decode_char_entities(encoded) == raw


def test_encode_only_spaces():
    result = encode_char_entities("   ")
    assert result.startswith("&#32;")
    assert result[len("&#32;"):] == "  "


@pytest.mark.parametrize(
    "text", ["plain", "a < b && c > d", "'quoted' \"text\"", " leading", "x & y;"]
)
def test_round_trip(text):
    assert decode_char_entities(encode_char_entities(text)) == text


def test_decode_plain_text_unchanged():
    assert decode_char_entities("no entities here") == "no entities here"


@pytest.mark.parametrize("bad", ["a & b", "&unknown;", "&#32;"])
def test_decode_invalid_raises(bad):
    with pytest.raises(XmlParserError) as info:
        decode_char_entities(bad)
    assert info.value.message == "invalid character entity"