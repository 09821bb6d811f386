"""Writing property trees in the INFO format."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import IO, Any, Union

from .errors import InfoParserError
from .ptree import PropertyTree

__all__ = [
    "InfoWriterSettings",
    "create_escapes",
    "is_simple_key",
    "is_simple_data",
    "write_info",
]

Target = Union[str, "os.PathLike[str]", IO[str]]

_ESCAPES = {
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\v": "\\v",
    '"': '\\"',
    "\\": "\\\\",
}

_SPECIAL_CHARS = frozenset(" \t{};\n\"")


@dataclass(frozen=True)
class InfoWriterSettings:
    """Indentation used when writing nested INFO blocks."""

    indent_char: str = " "
    indent_count: int = 4

    def indent(self, level: int) -> str:
        """The indentation string for the given nesting level."""
        return self.indent_char * (level * self.indent_count)


def create_escapes(text: str) -> str:
    """Replace characters that cannot appear literally with escape sequences."""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def _is_simple(text: str) -> bool:
    return bool(text) and not any(ch in _SPECIAL_CHARS for ch in text)


def is_simple_key(key: str) -> bool:
    """Whether ``key`` can be written without quotation marks."""
    return _is_simple(key)


def is_simple_data(data: str) -> bool:
    """Whether ``data`` can be written without quotation marks."""
    return _is_simple(data)


def _has_data(tree: PropertyTree) -> bool:
    return tree.data is not None and tree.data != ""


def _render(
    tree: PropertyTree, indent: int, settings: InfoWriterSettings, out: list[str]
) -> None:
    if indent >= 0:
        if _has_data(tree):
            data = create_escapes(tree.get_value(str))
            if is_simple_data(data):
                out.append(f" {data}\n")
            else:
                out.append(f' "{data}"\n')
        elif tree.empty():
            out.append(' ""\n')
        else:
            out.append("\n")

    if tree.empty():
        return

    if indent >= 0:
        out.append(f"{settings.indent(indent)}{{\n")

    for key, child in tree:
        escaped = create_escapes(key)
        out.append(settings.indent(indent + 1))
        out.append(escaped if is_simple_key(escaped) else f'"{escaped}"')
        _render(child, indent + 1, settings, out)

    if indent >= 0:
        out.append(f"{settings.indent(indent)}}}\n")


def _to_text(tree: PropertyTree, settings: InfoWriterSettings) -> str:
    out: list[str] = []
    _render(tree, -1, settings, out)
    return "".join(out)


def _is_path(obj: Any) -> bool:
    return isinstance(obj, (str, os.PathLike))


def write_info(
    target: Target, tree: PropertyTree, settings: InfoWriterSettings | None = None
) -> None:
    """Write ``tree`` in INFO format to a file name or a text stream."""
    settings = InfoWriterSettings() if settings is None else settings
    text = _to_text(tree, settings)

    if not _is_path(target):
        try:
            target.write(text)
            target.flush()
        except (OSError, ValueError):
            raise InfoParserError("write error", "", 0) from None
        return

    filename = os.fspath(target)
    try:
        stream = open(filename, "w", encoding="utf-8")
    except OSError:
        raise InfoParserError("cannot open file", filename, 0) from None
    with stream:
        try:
            stream.write(text)
            stream.flush()
        except OSError:
            raise InfoParserError("write error", filename, 0) from None