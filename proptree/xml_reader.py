"""Reading XML documents into property trees."""

from __future__ import annotations

import os
from typing import IO, Any, Union
from xml.parsers import expat

from .errors import XmlParserError
from .ptree import PropertyTree
from .xml_utils import XMLATTR, XMLCOMMENT, XMLTEXT, XmlFlags, condense, validate_flags

__all__ = ["read_xml"]

Source = Union[str, "os.PathLike[str]", IO[str], IO[bytes]]

_XML_WHITESPACE = " \t\n\r"


class _TreeBuilder:
    """Receives parser events and assembles the resulting tree."""

    def __init__(self, flags: int) -> None:
        self.flags = XmlFlags(flags)
        self.root = PropertyTree()
        self.stack: list[PropertyTree] = [self.root]
        self.buffer: list[str] = []
        self.in_cdata = False

    def attach(self, parser: Any) -> None:
        parser.ordered_attributes = True
        parser.StartElementHandler = self.start_element
        parser.EndElementHandler = self.end_element
        parser.CharacterDataHandler = self.character_data
        parser.CommentHandler = self.comment
        parser.StartCdataSectionHandler = self.start_cdata
        parser.EndCdataSectionHandler = self.end_cdata

    def _add_text(self, text: str) -> None:
        node = self.stack[-1]
        if self.flags & XmlFlags.NO_CONCAT_TEXT:
            node.push_back(XMLTEXT, PropertyTree(text))
        else:
            node.data += text

    def flush(self) -> None:
        if not self.buffer:
            return
        text = "".join(self.buffer)
        self.buffer.clear()
        if self.in_cdata:
            self._add_text(text)
            return
        if not text.strip(_XML_WHITESPACE):
            return
        if self.flags & XmlFlags.TRIM_WHITESPACE:
            text = condense(text).strip(" ")
        self._add_text(text)

    def start_element(self, name: str, attributes: list[str]) -> None:
        self.flush()
        node = self.stack[-1].push_back(name, PropertyTree())
        if attributes:
            attr_root = node.push_back(XMLATTR, PropertyTree())
            for attr_name, value in zip(attributes[::2], attributes[1::2]):
                attr_root.push_back(attr_name, PropertyTree(value))
        self.stack.append(node)

    def end_element(self, name: str) -> None:
        self.flush()
        self.stack.pop()

    def character_data(self, text: str) -> None:
        self.buffer.append(text)

    def comment(self, text: str) -> None:
        self.flush()
        if not self.flags & XmlFlags.NO_COMMENTS:
            self.stack[-1].push_back(XMLCOMMENT, PropertyTree(text))

    def start_cdata(self) -> None:
        self.flush()
        self.in_cdata = True

    def end_cdata(self) -> None:
        self.flush()
        self.in_cdata = False


def _parse(data: Union[str, bytes], flags: int, filename: str) -> PropertyTree:
    builder = _TreeBuilder(flags)
    parser = expat.ParserCreate()
    builder.attach(parser)
    try:
        parser.Parse(data, True)
    except expat.ExpatError as error:
        # A document without any element is accepted, as long as nothing
        # was left open.
        no_elements = error.code == expat.errors.codes[expat.errors.XML_ERROR_NO_ELEMENTS]
        if not (no_elements and len(builder.stack) == 1):
            raise XmlParserError(expat.ErrorString(error.code), filename, error.lineno) from None
    builder.flush()
    return builder.root


def read_xml(source: Source, flags: int = 0) -> PropertyTree:
    """Parse XML from a file name or a stream into a new tree.

    Elements become children keyed by their tag name. Attributes are put
    under a ``<xmlattr>`` child, comments under ``<xmlcomment>`` keys and
    text is appended to the element's data, or put under ``<xmltext>``
    keys when :attr:`XmlFlags.NO_CONCAT_TEXT` is set.
    """
    if not validate_flags(flags):
        raise ValueError(f"invalid XML parser flags: {flags!r}")

    if isinstance(source, (str, os.PathLike)):
        filename = os.fspath(source)
        try:
            with open(filename, "rb") as stream:
                data: Union[str, bytes] = stream.read()
        except FileNotFoundError:
            raise XmlParserError("cannot open file", filename, 0) from None
        except OSError:
            raise XmlParserError("read error", filename, 0) from None
        return _parse(data, flags, filename)

    try:
        data = source.read()
    except OSError:
        raise XmlParserError("read error", "", 0) from None
    return _parse(data, flags, "")