# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for NestedList.

Converts plain Python data (as produced by ``json.load``) into snapshot
nodes and back.

Plain shape:
    - Group: ``{'name': 'docs', 'children': [...]}``. The key
      ``'entries'`` is accepted in place of ``'children'``.
    - Entry: ``{'name': 'readme', 'data': {...}}``. A dict with neither
      children nor data is an entry with empty data.

Group and Entry instances are accepted too. They are rebuilt with their
data deep-copied, so the caller keeps no reference into the snapshot.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable, Sequence

from .exceptions import InvalidDataError, NameExistsError
from .node import Entry, Group, Node


def load_nodes(source: Iterable[Any], unique: bool = True) -> tuple[Node, ...]:
    """Build a snapshot from nodes or plain dicts.

    Args:
        source: Iterable of Group/Entry instances or plain dicts.
        unique: If True, reject duplicate names among siblings.

    Returns:
        Tuple of root nodes.

    Raises:
        InvalidDataError: If an item is neither a node nor a valid dict.
        NameExistsError: If unique is True and siblings share a name.

    Example:
        >>> load_nodes([{'name': 'docs', 'entries': [{'name': 'readme'}]}])
        (Group('docs', children=1),)
    """
    if isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
        raise InvalidDataError(
            f"source must be a list of nodes, not {type(source).__name__}"
        )
    top: list[Node] = []
    # Tasks: ('node', item, path, out) parses an item into `out`;
    # ('group', name, path, children, out) closes a group once its
    # children have been built.
    stack: list[tuple] = [
        ('node', item, (), top) for item in reversed(list(source))
    ]
    while stack:
        task = stack.pop()
        if task[0] == 'group':
            _, name, path, children, out = task
            if unique:
                _check_unique(children, path)
            out.append(Group(name, children))
            continue

        _, item, path, out = task
        name, children, data = _parse_item(item)
        if children is None:
            out.append(Entry(name, data))
            continue
        group_path = path + (name,)
        built: list[Node] = []
        stack.append(('group', name, group_path, built, out))
        stack.extend(('node', child, group_path, built) for child in reversed(children))

    if unique:
        _check_unique(top, ())
    return tuple(top)


def _check_unique(nodes: Sequence[Node], path: tuple[str, ...]) -> None:
    seen: set[str] = set()
    for node in nodes:
        if node.name in seen:
            raise NameExistsError(node.name, path)
        seen.add(node.name)


def _parse_item(item: Any) -> tuple[str, Sequence[Any] | None, dict[str, Any]]:
    """Split an item into (name, children, data).

    children is None for entries; data is a deep copy for entries.
    """
    if isinstance(item, Group):
        return item.name, item.children, {}
    if isinstance(item, Entry):
        return item.name, None, copy.deepcopy(dict(item.data))
    if not isinstance(item, dict):
        raise InvalidDataError(
            f"node must be a Group, an Entry or a dict, not {type(item).__name__}"
        )

    name = item.get('name')
    if not isinstance(name, str) or not name:
        raise InvalidDataError(f"node name must be a non-empty string: {item!r}")

    if 'children' in item or 'entries' in item:
        if 'children' in item and 'entries' in item:
            raise InvalidDataError(f"node '{name}' has both children and entries")
        if 'data' in item:
            raise InvalidDataError(f"node '{name}' has both children and data")
        children = item['children'] if 'children' in item else item['entries']
        if not isinstance(children, list):
            raise InvalidDataError(f"children of '{name}' must be a list")
        return name, children, {}

    data = item.get('data', {})
    if not isinstance(data, dict):
        raise InvalidDataError(f"data of '{name}' must be a dict")
    return name, None, copy.deepcopy(data)


def dump_nodes(nodes: Iterable[Node]) -> list[dict[str, Any]]:
    """Convert a snapshot to a list of plain dicts.

    Example:
        >>> dump_nodes(store.snapshot)
        [{'name': 'docs', 'children': [{'name': 'readme', 'data': {}}]}]
    """
    return [node.as_dict() for node in nodes]
