# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NestedList node classes.

A snapshot is a tuple of nodes. Each node is either a Group, holding an
ordered tuple of child nodes, or an Entry, holding a key/value mapping.
Nodes are never modified once built: every change produces new nodes
through the ``with_*`` helpers, so a snapshot can be shared freely.

Example:
    >>> docs = Group('docs', (Entry('readme', {'lines': 10}),))
    >>> docs.children[0].data['lines']
    10
    >>> docs.with_name('manuals').name
    'manuals'
"""

from __future__ import annotations

import copy
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Union


class Group:
    """A named container of child nodes.

    Attributes:
        name: The group name, unique among its siblings when the owning
            store enforces uniqueness.
        children: Tuple of child nodes in insertion order.
    """

    __slots__ = ('name', 'children')

    kind = 'group'
    is_group = True
    is_entry = False

    def __init__(self, name: str, children: Iterable[Node] = ()) -> None:
        self.name = name
        self.children: tuple[Node, ...] = tuple(children)

    def __repr__(self) -> str:
        return f"Group({self.name!r}, children={len(self.children)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return _same_tree(self, other)

    __hash__ = None  # type: ignore[assignment]

    def with_name(self, name: str) -> Group:
        """Return a copy of this group with a different name."""
        return Group(name, self.children)

    def with_children(self, children: Iterable[Node]) -> Group:
        """Return a copy of this group holding ``children``."""
        return Group(self.name, children)

    def as_dict(self) -> dict[str, Any]:
        """Convert to a plain dict, including the whole subtree."""
        return _to_plain(self)


class Entry:
    """A named leaf holding key/value data.

    The data mapping is copied at construction and exposed read-only.

    Attributes:
        name: The entry name.
        data: Read-only view of the entry's key/value data.
    """

    __slots__ = ('name', '_data')

    kind = 'entry'
    is_group = False
    is_entry = True

    def __init__(self, name: str, data: Mapping[str, Any] | None = None) -> None:
        self.name = name
        self._data: dict[str, Any] = dict(data or {})

    def __repr__(self) -> str:
        return f"Entry({self.name!r}, data={self._data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.name == other.name and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    @property
    def data(self) -> Mapping[str, Any]:
        return MappingProxyType(self._data)

    def with_name(self, name: str) -> Entry:
        """Return a copy of this entry with a different name."""
        return Entry(name, self._data)

    def with_data(self, data: Mapping[str, Any]) -> Entry:
        """Return a copy of this entry whose data is ``data``."""
        return Entry(self.name, data)

    def as_dict(self) -> dict[str, Any]:
        """Convert to a plain dict. Data values are deep-copied."""
        return {'name': self.name, 'data': copy.deepcopy(self._data)}


Node = Union[Group, Entry]


def walk(nodes: Iterable[Node]) -> Iterator[tuple[tuple[str, ...], Node]]:
    """Walk a snapshot depth-first, yielding ``(path, node)`` pairs.

    Paths are tuples of names from the root down to the node itself.
    Siblings are visited in insertion order.

    Example:
        >>> for path, node in walk(store.snapshot):
        ...     print(','.join(path), node.kind)
    """
    stack = [((), node) for node in reversed(tuple(nodes))]
    while stack:
        prefix, node = stack.pop()
        path = prefix + (node.name,)
        yield path, node
        if node.is_group:
            stack.extend((path, child) for child in reversed(node.children))


def _same_tree(left: Node, right: Node) -> bool:
    """Compare two subtrees structurally, without recursion."""
    stack = [(left, right)]
    while stack:
        a, b = stack.pop()
        if a is b:
            continue
        if a.kind != b.kind or a.name != b.name:
            return False
        if a.is_entry:
            if a._data != b._data:
                return False
            continue
        if len(a.children) != len(b.children):
            return False
        stack.extend(zip(a.children, b.children))
    return True


def _to_plain(node: Node) -> dict[str, Any]:
    """Convert a subtree to plain dicts, without recursion."""
    result: dict[str, Any] = {}
    stack = [(node, result)]
    while stack:
        current, plain = stack.pop()
        plain['name'] = current.name
        if current.is_entry:
            plain['data'] = copy.deepcopy(current._data)
            continue
        children: list[dict[str, Any]] = []
        plain['children'] = children
        for child in current.children:
            child_plain: dict[str, Any] = {}
            children.append(child_plain)
            stack.append((child, child_plain))
    return result
