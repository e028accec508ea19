"""Dotted cookie names and nested-structure access.

A cookie name such as ``"prefs.theme"`` addresses the ``theme`` entry inside
the structured value of the root cookie ``prefs``. ``split`` separates the
root from the sub-path; ``get_at``, ``insert_at`` and ``remove_at`` walk the
decoded structure by that sub-path.

Segments are never validated here: ``"a..b"`` yields an empty middle
segment and it is used as a literal (empty) key.
"""

from collections.abc import Mapping, Sequence
from copy import deepcopy
from dataclasses import dataclass
from typing import Any

_MISSING = object()


@dataclass(frozen=True, slots=True)
class CookiePath:
    """A dotted cookie name split into its segments."""

    name: str
    parts: tuple[str, ...]

    @property
    def root(self) -> str:
        """Name of the transported cookie (always the first segment)."""
        return self.parts[0]

    @property
    def subpath(self) -> tuple[str, ...]:
        """Segments below the root cookie."""
        return self.parts[1:]

    @property
    def is_nested(self) -> bool:
        return len(self.parts) > 1


def split(name: str) -> CookiePath:
    """Split *name* on ``.`` into a ``CookiePath``.

    ``""`` and single-segment names give one part equal to *name*.
    """
    return CookiePath(name=name, parts=tuple(name.split(".")))


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment, _MISSING)
    if isinstance(node, Sequence) and not isinstance(node, str):
        try:
            index = int(segment)
        except ValueError:
            return _MISSING
        if 0 <= index < len(node):
            return node[index]
    return _MISSING


def get_at(structure: Any, path: Sequence[str], default: Any = None) -> Any:
    """Return the value at *path* inside *structure*, or *default*.

    Digit segments index into lists. An empty *path* returns *structure*.
    """
    node = structure
    for segment in path:
        node = _child(node, segment)
        if node is _MISSING:
            return default
    return node


def has_at(structure: Any, path: Sequence[str]) -> bool:
    """True if *path* resolves to a present entry (``None`` values count)."""
    return get_at(structure, path, _MISSING) is not _MISSING


def _index(node: list, segment: str) -> int | None:
    """In-range list index for *segment*, ``len(node)`` to append, else ``None``."""
    try:
        index = int(segment)
    except ValueError:
        return None
    return index if 0 <= index <= len(node) else None


def _set(node: dict | list, segment: str, value: Any) -> None:
    if isinstance(node, list):
        index = _index(node, segment)
        if index == len(node):
            node.append(value)
        else:
            node[index] = value
    else:
        node[segment] = value


def _writable(node: Any, segment: str) -> bool:
    """True if *segment* can be stored into *node* without replacing it."""
    if isinstance(node, dict):
        return True
    return isinstance(node, list) and _index(node, segment) is not None


def insert_at(structure: Any, path: Sequence[str], value: Any) -> Any:
    """Return a copy of *structure* with *value* stored at *path*.

    Digit segments assign into lists (an index equal to the length
    appends). Missing intermediate mappings are created; a node that
    cannot hold the next segment (a scalar, or a list given a non-index
    segment) is replaced by a new mapping. *structure* is not mutated.
    """
    if not path:
        return deepcopy(value)
    root = deepcopy(structure) if _writable(structure, path[0]) else {}
    node = root
    *parents, leaf = path
    for i, segment in enumerate(parents):
        child = _child(node, segment)
        if not _writable(child, path[i + 1]):
            child = {}
            _set(node, segment, child)
        node = child
    _set(node, leaf, deepcopy(value))
    return root


def remove_at(structure: Any, path: Sequence[str]) -> Any:
    """Return a copy of *structure* without the leaf at *path*.

    Parents left empty by the removal are kept. A path that does not
    resolve returns an unchanged copy.
    """
    root = deepcopy(structure)
    if not path:
        return root
    *parents, leaf = path
    parent = get_at(root, parents, _MISSING)
    if isinstance(parent, dict):
        parent.pop(leaf, None)
    elif isinstance(parent, list):
        try:
            index = int(leaf)
        except ValueError:
            return root
        if 0 <= index < len(parent):
            del parent[index]
    return root
