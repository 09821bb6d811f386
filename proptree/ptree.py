"""Hierarchical property trees with path based access to their nodes."""

from __future__ import annotations

import copy
import re
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol, Union

from .errors import PtreeBadData, PtreeBadPath

__all__ = ["Path", "StreamTranslator", "PropertyTree"]

_MISSING: Any = object()
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_WHITESPACE = " \t\n\r\f\v"


class Path:
    """A key path such as ``"a.b.c"`` that is consumed fragment by fragment."""

    def __init__(self, value: str = "", separator: str = ".") -> None:
        if len(separator) != 1:
            raise ValueError("path separator must be a single character")
        self._value = value
        self.separator = separator
        self._start = 0

    @property
    def remaining(self) -> str:
        """The part of the path not yet consumed by :meth:`reduce`."""
        return self._value[self._start:]

    def _copy(self) -> "Path":
        result = Path(self._value, self.separator)
        result._start = self._start
        return result

    def __truediv__(self, other: Union["Path", str]) -> "Path":
        if isinstance(other, str):
            other = Path(other)
        elif not isinstance(other, Path):
            return NotImplemented
        if other.separator != self.separator and not (other.empty() or other.single()):
            raise ValueError("incompatible path separators")
        result = self._copy()
        if not other.empty():
            prefix = "" if self.empty() else self.separator
            result._value = self._value + prefix + other.remaining
        return result

    def __rtruediv__(self, other: str) -> "Path":
        if not isinstance(other, str):
            return NotImplemented
        return Path(other) / self

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Path({self._value!r}, {self.separator!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            other = Path(other, self.separator)
        if not isinstance(other, Path):
            return NotImplemented
        return self.separator == other.separator and self.remaining == other.remaining

    __hash__ = None  # type: ignore[assignment]

    def reduce(self) -> str:
        """Consume and return the next key fragment."""
        if self.empty():
            raise ValueError("reducing empty path")
        end = self._value.find(self.separator, self._start)
        if end == -1:
            end = len(self._value)
        part = self._value[self._start:end]
        self._start = end
        if not self.empty():
            self._start += 1
        return part

    def empty(self) -> bool:
        """Whether nothing of the path remains."""
        return self._start >= len(self._value)

    def single(self) -> bool:
        """Whether the remaining path is a single fragment."""
        return self.separator not in self.remaining


class Translator(Protocol):
    def get_value(self, data: Any, type_: Any) -> Any: ...

    def put_value(self, value: Any) -> Any: ...


class StreamTranslator:
    """Converts between string data and Python values; ``None`` means failure."""

    def get_value(self, data: Any, type_: Callable[..., Any] = str) -> Any:
        if not isinstance(data, str):
            return data if isinstance(type_, type) and isinstance(data, type_) else None
        if type_ is str:
            return data
        text = data.strip(_WHITESPACE)
        if type_ is bool:
            if text == "true":
                return True
            if text == "false":
                return False
            if _INT_RE.fullmatch(text) and int(text) in (0, 1):
                return int(text) == 1
            return None
        if type_ is int:
            return int(text) if _INT_RE.fullmatch(text) else None
        if type_ is float:
            return float(text) if _FLOAT_RE.fullmatch(text) else None
        try:
            return type_(text)
        except (ValueError, TypeError):
            return None

    def put_value(self, value: Any) -> Optional[str]:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            return repr(value)
        if isinstance(value, str):
            return value
        return str(value)


_DEFAULT_TRANSLATOR = StreamTranslator()

PathLike = Union[Path, str]


def _to_path(path: PathLike) -> Path:
    if isinstance(path, Path):
        return path._copy()
    return Path(path)


def _resolve_type(type_: Any, default: Any) -> Any:
    if type_ is not None:
        return type_
    if default is not _MISSING and default is not None:
        return type(default)
    return str


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", repr(type_))


class PropertyTree:
    """A node holding data and an ordered sequence of keyed child nodes."""

    def __init__(self, data: Any = "", ignore_case: bool = False) -> None:
        self.data = data
        self.ignore_case = ignore_case
        self._children: list[tuple[str, PropertyTree]] = []

    # -- internals ---------------------------------------------------------

    def _norm(self, key: str) -> str:
        return key.lower() if self.ignore_case else key

    def _clone(self, ignore_case: bool) -> "PropertyTree":
        result = PropertyTree(copy.deepcopy(self.data), ignore_case)
        result._children = [(key, child._clone(ignore_case)) for key, child in self._children]
        return result

    def _walk(self, path: PathLike) -> Optional["PropertyTree"]:
        p = _to_path(path)
        node: Optional[PropertyTree] = self
        while node is not None and not p.empty():
            node = node.find(p.reduce())
        return node

    def _force(self, p: Path) -> "PropertyTree":
        if p.empty():
            raise ValueError("empty path not allowed here")
        node = self
        while not p.single():
            fragment = p.reduce()
            child = node.find(fragment)
            node = node.push_back(fragment) if child is None else child
        if p.empty():
            raise ValueError("path ends with a separator")
        return node

    def _sort_key(self, item: tuple[str, "PropertyTree"]) -> str:
        return self._norm(item[0])

    # -- container view ----------------------------------------------------

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[tuple[str, "PropertyTree"]]:
        return iter(list(self._children))

    def __reversed__(self) -> Iterator[tuple[str, "PropertyTree"]]:
        return reversed(list(self._children))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyTree):
            return NotImplemented
        if len(self) != len(other) or self.data != other.data:
            return False
        mine = self.ordered_items()
        theirs = other.ordered_items()
        return all(
            self._norm(k1) == self._norm(k2) and c1 == c2
            for (k1, c1), (k2, c2) in zip(mine, theirs)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PropertyTree({self.data!r}, children={len(self._children)})"

    def __delitem__(self, index: Union[int, slice]) -> None:
        del self._children[index]

    def __getitem__(self, index: Union[int, slice]) -> Any:
        return self._children[index]

    def copy(self) -> "PropertyTree":
        """Return a deep copy of this tree."""
        return self._clone(self.ignore_case)

    def assign(self, other: "PropertyTree") -> "PropertyTree":
        """Replace data and children with a copy of ``other``'s."""
        clone = other._clone(self.ignore_case)
        self.data = clone.data
        self._children = clone._children
        return self

    def swap(self, other: "PropertyTree") -> None:
        """Exchange data and children with ``other``."""
        self.data, other.data = other.data, self.data
        self._children, other._children = other._children, self._children

    def empty(self) -> bool:
        """Whether this node has no children."""
        return not self._children

    def front(self) -> tuple[str, "PropertyTree"]:
        if not self._children:
            raise IndexError("front of empty tree")
        return self._children[0]

    def back(self) -> tuple[str, "PropertyTree"]:
        if not self._children:
            raise IndexError("back of empty tree")
        return self._children[-1]

    def insert(
        self, index: int, key: str, child: Optional["PropertyTree"] = None
    ) -> "PropertyTree":
        """Insert a copy of ``child`` under ``key`` before ``index``; return it."""
        if child is None:
            node = PropertyTree(ignore_case=self.ignore_case)
        else:
            node = child._clone(self.ignore_case)
        self._children.insert(index, (key, node))
        return node

    def extend(self, index: int, items: Iterable[tuple[str, "PropertyTree"]]) -> None:
        """Insert copies of the given (key, child) pairs before ``index``."""
        for offset, (key, child) in enumerate(list(items)):
            self.insert(index + offset, key, child)

    def push_front(self, key: str, child: Optional["PropertyTree"] = None) -> "PropertyTree":
        return self.insert(0, key, child)

    def push_back(self, key: str, child: Optional["PropertyTree"] = None) -> "PropertyTree":
        return self.insert(len(self._children), key, child)

    def pop_front(self) -> tuple[str, "PropertyTree"]:
        if not self._children:
            raise IndexError("pop from empty tree")
        return self._children.pop(0)

    def pop_back(self) -> tuple[str, "PropertyTree"]:
        if not self._children:
            raise IndexError("pop from empty tree")
        return self._children.pop()

    def reverse(self) -> None:
        self._children.reverse()

    def sort(self, key: Optional[Callable[[tuple[str, "PropertyTree"]], Any]] = None) -> None:
        """Stable sort of the children; by key order unless ``key`` is given."""
        self._children.sort(key=self._sort_key if key is None else key)

    # -- associative view --------------------------------------------------

    def ordered_items(self) -> list[tuple[str, "PropertyTree"]]:
        """The children in key order."""
        return sorted(self._children, key=self._sort_key)

    def find(self, key: str) -> Optional["PropertyTree"]:
        """The first child with ``key``, or ``None``."""
        target = self._norm(key)
        return next((c for k, c in self._children if self._norm(k) == target), None)

    def index_of(self, key: str) -> int:
        """Sequence position of the first child with ``key``."""
        target = self._norm(key)
        for index, (k, _) in enumerate(self._children):
            if self._norm(k) == target:
                return index
        raise KeyError(key)

    def equal_range(self, key: str) -> list[tuple[str, "PropertyTree"]]:
        target = self._norm(key)
        return [item for item in self._children if self._norm(item[0]) == target]

    def count(self, key: str) -> int:
        return len(self.equal_range(key))

    def erase(self, key: str) -> int:
        """Remove all children with ``key`` and return how many were removed."""
        target = self._norm(key)
        before = len(self._children)
        self._children = [item for item in self._children if self._norm(item[0]) != target]
        return before - len(self._children)

    def clear(self) -> None:
        """Remove both data and children."""
        self.data = ""
        self._children = []

    # -- property tree view ------------------------------------------------

    def get_child(self, path: PathLike, default: Any = _MISSING) -> Any:
        node = self._walk(path)
        if node is not None:
            return node
        if default is not _MISSING:
            return default
        raise PtreeBadPath(f"No such node ({path})", path)

    def get_child_optional(self, path: PathLike) -> Optional["PropertyTree"]:
        return self._walk(path)

    def put_child(self, path: PathLike, value: "PropertyTree") -> "PropertyTree":
        """Set the node at ``path`` to a copy of ``value``, creating parents."""
        p = _to_path(path)
        parent = self._force(p)
        fragment = p.reduce()
        existing = parent.find(fragment)
        if existing is not None:
            return existing.assign(value)
        return parent.push_back(fragment, value)

    def add_child(self, path: PathLike, value: "PropertyTree") -> "PropertyTree":
        """Add a copy of ``value`` at ``path``, even if the key exists already."""
        p = _to_path(path)
        parent = self._force(p)
        return parent.push_back(p.reduce(), value)

    def get_value(
        self, type_: Any = None, default: Any = _MISSING, translator: Optional[Translator] = None
    ) -> Any:
        type_ = _resolve_type(type_, default)
        tr = _DEFAULT_TRANSLATOR if translator is None else translator
        value = tr.get_value(self.data, type_)
        if value is not None:
            return value
        if default is not _MISSING:
            return default
        raise PtreeBadData(f'conversion of data to type "{_type_name(type_)}" failed', self.data)

    def get_value_optional(self, type_: Any = str, translator: Optional[Translator] = None) -> Any:
        tr = _DEFAULT_TRANSLATOR if translator is None else translator
        return tr.get_value(self.data, type_)

    def put_value(self, value: Any, translator: Optional[Translator] = None) -> None:
        tr = _DEFAULT_TRANSLATOR if translator is None else translator
        data = tr.put_value(value)
        if data is None:
            raise PtreeBadData(
                f'conversion of type "{type(value).__name__}" to data failed', value
            )
        self.data = data

    def get(
        self,
        path: PathLike,
        type_: Any = None,
        default: Any = _MISSING,
        translator: Optional[Translator] = None,
    ) -> Any:
        if default is _MISSING:
            return self.get_child(path).get_value(type_, translator=translator)
        node = self._walk(path)
        if node is None:
            return default
        return node.get_value(type_, default, translator)

    def get_optional(
        self, path: PathLike, type_: Any = str, translator: Optional[Translator] = None
    ) -> Any:
        node = self._walk(path)
        if node is None:
            return None
        return node.get_value_optional(type_, translator)

    def put(
        self, path: PathLike, value: Any, translator: Optional[Translator] = None
    ) -> "PropertyTree":
        """Set the value at ``path``, creating the node and parents if needed."""
        node = self._walk(path)
        if node is None:
            node = self.put_child(path, PropertyTree(ignore_case=self.ignore_case))
        node.put_value(value, translator)
        return node

    def add(
        self, path: PathLike, value: Any, translator: Optional[Translator] = None
    ) -> "PropertyTree":
        """Add a new node at ``path`` holding ``value``."""
        node = self.add_child(path, PropertyTree(ignore_case=self.ignore_case))
        node.put_value(value, translator)
        return node