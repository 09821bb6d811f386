"""Exception hierarchy for property trees and their file formats."""

from __future__ import annotations

from typing import Any

__all__ = [
    "PtreeError",
    "PtreeBadData",
    "PtreeBadPath",
    "FileParserError",
    "IniParserError",
    "InfoParserError",
    "XmlParserError",
    "JsonParserError",
]


class PtreeError(Exception):
    """Base class for all property tree errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @property
    def message(self) -> str:
        """The human readable message of this error."""
        return str(self.args[0]) if self.args else ""


class PtreeBadData(PtreeError):
    """Translation between a value and the tree's data failed."""

    def __init__(self, message: str, data: Any) -> None:
        super().__init__(message)
        self.data = data


class PtreeBadPath(PtreeError):
    """The requested path does not exist in the tree."""

    def __init__(self, message: str, path: Any) -> None:
        super().__init__(message)
        self.path = path


class FileParserError(PtreeError):
    """Error raised while reading or writing a tree from or to a file."""

    def __init__(self, message: str, filename: str = "", line: int = 0) -> None:
        self._message = message
        self.filename = filename
        self.line = line
        super().__init__(self._format(message, filename, line))

    @property
    def message(self) -> str:
        """The bare message, without file name and line number."""
        return self._message

    @staticmethod
    def _format(message: str, filename: str, line: int) -> str:
        location = filename or "<unspecified file>"
        if line > 0:
            location = f"{location}({line})"
        return f"{location}: {message}"

    def __reduce__(self):
        return (type(self), (self._message, self.filename, self.line))


class IniParserError(FileParserError):
    """Error in INI formatted data."""


class InfoParserError(FileParserError):
    """Error in INFO formatted data."""


class XmlParserError(FileParserError):
    """Error in XML formatted data."""


class JsonParserError(FileParserError):
    """Error in JSON formatted data."""