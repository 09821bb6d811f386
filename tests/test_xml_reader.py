import io

import pytest

from proptree.errors import XmlParserError
from proptree.ptree import PropertyTree
from proptree.xml_reader import read_xml
from proptree.xml_utils import XMLATTR, XMLCOMMENT, XMLTEXT, XmlFlags


def _read(text, flags=0):
    return read_xml(io.StringIO(text), flags)


def test_elements_and_text():
    tree = _read("<root><a>hello</a><b>world</b></root>")
    assert [key for key, _ in tree] == ["root"]
    assert [key for key, _ in tree.get_child("root")] == ["a", "b"]
    assert tree.get("root.a") == "hello"
    assert tree.get("root.b") == "world"


def test_attributes_in_order():
    tree = _read('<root x="1" y="two"/>')
    attrs = tree.get_child("root").get_child(XMLATTR)
    assert [key for key, _ in attrs] == ["x", "y"]
    assert attrs.get("x") == "1"
    assert attrs.get("y") == "two"


def test_no_attribute_node_without_attributes():
    tree = _read("<root/>")
    assert tree.get_child("root").count(XMLATTR) == 0
    assert tree.get_child("root").empty()


def test_text_is_concatenated_by_default():
    tree = _read("<root>one<a/>two</root>")
    root = tree.get_child("root")
    assert root.data == "onetwo"
    assert root.count(XMLTEXT) == 0


def test_no_concat_text_creates_text_nodes():
    tree = _read("<root>one<a/>two</root>", XmlFlags.NO_CONCAT_TEXT)
    root = tree.get_child("root")
    assert root.data == ""
    assert [key for key, _ in root] == [XMLTEXT, "a", XMLTEXT]
    assert [child.data for _, child in root.equal_range(XMLTEXT)] == ["one", "two"]


def test_comments_kept_by_default():
    tree = _read("<root><!-- note --></root>")
    assert tree.get_child("root").get(XMLCOMMENT) == " note "


def test_top_level_comment():
    tree = _read("<!--c--><root/>")
    assert [key for key, _ in tree] == [XMLCOMMENT, "root"]
    assert tree.get(XMLCOMMENT) == "c"


def test_no_comments_flag():
    tree = _read("<root><!-- note --></root>", XmlFlags.NO_COMMENTS)
    assert tree.get_child("root").count(XMLCOMMENT) == 0


def test_whitespace_only_text_is_dropped():
    tree = _read("<root>\n  <a>x</a>\n</root>")
    assert tree.get_child("root").data == ""
    assert tree.get("root.a") == "x"


def test_whitespace_kept_without_trim():
    tree = _read("<root><a>  x  y  </a></root>")
    assert tree.get("root.a") == "  x  y  "


def test_trim_whitespace_condenses_and_trims():
    tree = _read("<root><a>  x \n\t y  </a></root>", XmlFlags.TRIM_WHITESPACE)
    assert tree.get("root.a") == "x y"


def test_cdata_is_kept_verbatim():
    tree = _read("<root><![CDATA[ <b>&amp; ]]></root>", XmlFlags.TRIM_WHITESPACE)
    assert tree.get_child("root").data == " <b>&amp; "


def test_entities_are_decoded():
    tree = _read("<root a=\"&quot;q&quot;\">&lt;x&gt; &amp; &apos;</root>")
    root = tree.get_child("root")
    assert root.data == "<x> & '"
    assert root.get(XMLATTR + "." + "a") == '"q"'


def test_declaration_is_skipped():
    tree = _read('<?xml version="1.0" encoding="utf-8"?>\n<root>v</root>')
    assert [key for key, _ in tree] == ["root"]
    assert tree.get("root") == "v"


def test_empty_document_gives_empty_tree():
    tree = _read("")
    assert tree == PropertyTree()


def test_error_reports_line():
    with pytest.raises(XmlParserError) as info:
        _read("<a>\n<b>\n</a>")
    assert info.value.line == 3


def test_unclosed_element_is_an_error():
    with pytest.raises(XmlParserError):
        _read("<a>")


def test_invalid_flags():
    with pytest.raises(ValueError):
        _read("<a/>", 0x8)


def test_read_from_file(tmp_path):
    path = tmp_path / "doc.xml"
    path.write_text('<root k="v"><child>text</child></root>', encoding="utf-8")
    tree = read_xml(path)
    assert tree.get("root.child") == "text"
    assert tree.get("root." + XMLATTR + ".k") == "v"


def test_file_error_carries_filename(tmp_path):
    path = tmp_path / "bad.xml"
    path.write_text("<root>\n</wrong>", encoding="utf-8")
    with pytest.raises(XmlParserError) as info:
        read_xml(str(path))
    assert info.value.filename == str(path)
    assert info.value.line == 2


def test_missing_file(tmp_path):
    path = tmp_path / "missing.xml"
    with pytest.raises(XmlParserError) as info:
        read_xml(path)
    assert info.value.message == "cannot open file"
    assert info.value.filename == str(path)


def test_bytes_stream():
    tree = read_xml(io.BytesIO("<root>caf\u00e9</root>".encode("utf-8")))
    assert tree.get("root") == "caf\u00e9"