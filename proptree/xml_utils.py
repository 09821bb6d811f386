"""Helpers shared by the XML reader and writer."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .errors import XmlParserError

__all__ = [
    "XmlFlags",
    "XmlWriterSettings",
    "validate_flags",
    "condense",
    "encode_char_entities",
    "decode_char_entities",
    "XMLDECL",
    "XMLATTR",
    "XMLCOMMENT",
    "XMLTEXT",
]

XMLDECL = "<?xml>"
XMLATTR = "<xmlattr>"
XMLCOMMENT = "<xmlcomment>"
XMLTEXT = "<xmltext>"

_SPACE_CHARS = frozenset(" \t\n\r\f\v")

_ENCODE = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
    "'": "&apos;",
}

_DECODE = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "apos": "'",
}


class XmlFlags(enum.IntFlag):
    """Options controlling how XML is read into a tree."""

    NONE = 0
    NO_CONCAT_TEXT = 0x1
    NO_COMMENTS = 0x2
    TRIM_WHITESPACE = 0x4


_ALL_FLAGS = XmlFlags.NO_CONCAT_TEXT | XmlFlags.NO_COMMENTS | XmlFlags.TRIM_WHITESPACE


def validate_flags(flags: int) -> bool:
    """Whether ``flags`` hold only known XML parser flags."""
    return (int(flags) & ~int(_ALL_FLAGS)) == 0


@dataclass(frozen=True)
class XmlWriterSettings:
    """XML writer settings; the defaults mean no pretty printing."""

    indent_char: str = " "
    indent_count: int = 0
    encoding: str = "utf-8"


def condense(text: str) -> str:
    """Collapse every run of whitespace into a single space."""
    out: list[str] = []
    in_space = False
    for ch in text:
        if ch in _SPACE_CHARS:
            if not in_space:
                out.append(" ")
                in_space = True
        else:
            out.append(ch)
            in_space = False
    return "".join(out)


def encode_char_entities(text: str) -> str:
    """Replace XML special characters with entity references.

    Text made only of spaces gets its first space encoded so that it
    survives whitespace trimming.
    """
    if not text:
        return text
    if text.strip(" ") == "":
        return "&#32;" + " " * (len(text) - 1)
    return "".join(_ENCODE.get(ch, ch) for ch in text)


def decode_char_entities(text: str) -> str:
    """Replace the five predefined entity references with their characters."""
    out: list[str] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch != "&":
            out.append(ch)
            pos += 1
            continue
        semicolon = text.find(";", pos + 1)
        if semicolon == -1:
            raise XmlParserError("invalid character entity", "", 0)
        entity = text[pos + 1:semicolon]
        try:
            out.append(_DECODE[entity])
        except KeyError:
            raise XmlParserError("invalid character entity", "", 0) from None
        pos = semicolon + 1
    return "".join(out)