# proptree

A property tree is a hierarchy of nodes. Every node holds one value (a string
by default) and an ordered sequence of children, each child under a key that
need not be unique. Nodes are reached by dotted paths such as `"server.port"`.

## Building and reading a tree

```python
from proptree.ptree import PropertyTree, Path

tree = PropertyTree()
tree.put("server.host", "localhost")
tree.put("server.port", 8080)

tree.get("server.port", int)           # 8080
tree.get("server.timeout", int, 30)    # 30, the default
tree.get_optional("server.user", str)  # None

tree.add("server.alias", "a")           # adds a sibling even if one exists
tree.put(Path("logs/level", "/"), "debug")  # custom path separator
```

`put` replaces the value of an existing node and creates missing parents;
`add` always appends a new node. `put_child`, `add_child`, `get_child` and
`get_child_optional` work with whole subtrees. A node also behaves as a
sequence of `(key, child)` pairs: it supports `len`, iteration, `reversed`,
indexing and `del`, plus `push_front`, `push_back`, `pop_front`, `pop_back`,
`insert`, `extend`, `reverse`, `sort`, `find`, `count`, `equal_range` and
`erase`. Two trees compare equal when their data, keys and children match.

Values are stored as text and converted on the way in and out by a
`StreamTranslator`. Any object with `get_value(data, type_)` (returning
`None` on failure) and `put_value(value)` can be passed as `translator` to
`put`, `get` and the related methods, which lets a tree hold data other than
strings. A failed conversion raises `proptree.errors.PtreeBadData`; a missing
path raises `proptree.errors.PtreeBadPath`.

Trees created with `ignore_case=True` compare keys without regard to case.

## File formats

```python
from proptree.ini import read_ini, write_ini
from proptree.info_writer import write_info, InfoWriterSettings
from proptree.xml_reader import read_xml
from proptree.xml_utils import XmlFlags

config = read_ini("settings.ini")
write_ini("copy.ini", config)

write_info("settings.info", config, InfoWriterSettings())

doc = read_xml("data.xml", XmlFlags.TRIM_WHITESPACE)
```

Each of these accepts either a file name or an open text stream (`read_xml`
also takes a binary stream).

- INI: sections become children of the root, keys become leaves. Writing
  requires a tree at most two levels deep, with no data on the root, no node
  holding both data and children, and no duplicate keys on a level.
- INFO: `write_info` writes nested `key value { ... }` blocks, quoting and
  escaping keys and values where needed. Indentation is set by
  `InfoWriterSettings` (four spaces by default).
- XML: elements become children keyed by tag name, attributes go under a
  `<xmlattr>` child, comments under `<xmlcomment>` keys, and text is appended
  to the element's data, or put under `<xmltext>` keys with
  `XmlFlags.NO_CONCAT_TEXT`. `XmlFlags.NO_COMMENTS` drops comments and
  `XmlFlags.TRIM_WHITESPACE` collapses and trims whitespace in text.
  `proptree.xml_utils` also offers `condense`, `encode_char_entities` and
  `decode_char_entities`.

Parse and write errors raise `IniParserError`, `InfoParserError` or
`XmlParserError` from `proptree.errors`, carrying the file name and line
number.

## What is not included

- INFO files can be written but not read.
- XML can be read but not written; `XmlWriterSettings` exists but nothing
  uses it yet.
- There is no JSON reader or writer; `JsonParserError` is only an error type.
- There is no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```