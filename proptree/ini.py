"""Reading and writing property trees in INI format."""

from __future__ import annotations

import os
from typing import IO, Any, Union

from .errors import IniParserError
from .ptree import PropertyTree

__all__ = ["validate_flags", "read_ini", "write_ini"]

_WHITESPACE = " \t\n\r\f\v"

Source = Union[str, "os.PathLike[str]", IO[str]]


def validate_flags(flags: int) -> bool:
    """Whether ``flags`` are valid for the INI parser; none are supported."""
    return flags == 0


def _trim(text: str) -> str:
    return text.strip(_WHITESPACE)


def _is_path(obj: Any) -> bool:
    return isinstance(obj, (str, os.PathLike))


def _has_data(tree: PropertyTree) -> bool:
    return tree.data is not None and tree.data != ""


def _parse(text: str) -> PropertyTree:
    local = PropertyTree()
    section: PropertyTree | None = None

    for line_no, raw in enumerate(text.split("\n"), start=1):
        line = _trim(raw)
        if not line or line[0] in ";#":
            continue
        if line[0] == "[":
            if section is not None and section.empty():
                local.pop_back()
            end = line.find("]")
            if end == -1:
                raise IniParserError("unmatched '['", "", line_no)
            key = _trim(line[1:end])
            if local.find(key) is not None:
                raise IniParserError("duplicate section name", "", line_no)
            section = local.push_back(key, PropertyTree())
            continue

        container = local if section is None else section
        eqpos = line.find("=")
        if eqpos == -1:
            raise IniParserError("'=' character not found in line", "", line_no)
        if eqpos == 0:
            raise IniParserError("key expected", "", line_no)
        key = _trim(line[:eqpos])
        data = _trim(line[eqpos + 1:])
        if container.find(key) is not None:
            raise IniParserError("duplicate key name", "", line_no)
        container.push_back(key, PropertyTree(data))

    if section is not None and section.empty():
        local.pop_back()
    return local


def read_ini(source: Source) -> PropertyTree:
    """Parse INI data from a file name or a text stream into a new tree."""
    if not _is_path(source):
        return _parse(source.read())

    filename = os.fspath(source)
    try:
        with open(filename, encoding="utf-8") as stream:
            text = stream.read()
    except OSError:
        raise IniParserError("cannot open file", filename, 0) from None
    try:
        return _parse(text)
    except IniParserError as error:
        raise IniParserError(error.message, filename, error.line) from None


def _check_dupes(tree: PropertyTree) -> None:
    ordered = tree.ordered_items()
    for (previous, _), (current, _) in zip(ordered, ordered[1:]):
        if previous == current:
            raise IniParserError("duplicate key", "", 0)


def _render_keys(tree: PropertyTree, throw_on_children: bool) -> list[str]:
    lines = []
    for key, child in tree:
        if not child.empty():
            if throw_on_children:
                raise IniParserError("ptree is too deep", "", 0)
            continue
        lines.append(f"{key}={child.get_value(str)}\n")
    return lines


def _render_sections(tree: PropertyTree) -> list[str]:
    lines = []
    for key, child in tree:
        if child.empty():
            continue
        _check_dupes(child)
        if _has_data(child):
            raise IniParserError("mixed data and children", "", 0)
        lines.append(f"[{key}]\n")
        lines.extend(_render_keys(child, True))
    return lines


def _render(tree: PropertyTree, flags: int) -> str:
    if not validate_flags(flags):
        raise ValueError(f"invalid INI writer flags: {flags!r}")
    if _has_data(tree):
        raise IniParserError("ptree has data on root", "", 0)
    _check_dupes(tree)
    return "".join(_render_keys(tree, False) + _render_sections(tree))


def write_ini(target: Source, tree: PropertyTree, flags: int = 0) -> None:
    """Write ``tree`` as INI to a file name or a text stream.

    The tree must have no data on its root, be at most two levels deep,
    hold no node with both data and children, and have no duplicate keys
    on any level.
    """
    if not _is_path(target):
        target.write(_render(tree, flags))
        return

    filename = os.fspath(target)
    try:
        stream = open(filename, "w", encoding="utf-8")
    except OSError:
        raise IniParserError("cannot open file", filename, 0) from None
    with stream:
        try:
            text = _render(tree, flags)
        except IniParserError as error:
            raise IniParserError(error.message, filename, error.line) from None
        try:
            stream.write(text)
            stream.flush()
        except OSError:
            raise IniParserError("write error", filename, 0) from None