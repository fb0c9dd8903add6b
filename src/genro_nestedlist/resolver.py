# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path resolution over NestedList snapshots.

A path is a sequence of names. Container-targeting paths name the groups
to descend through (empty path = root). Node-targeting paths use the last
name for the node itself and the preceding names for its containing groups.

All functions here are pure: they read the snapshot they are given and
never modify it. ``rebuild`` returns a new root and leaves the old one
untouched.
"""

from __future__ import annotations

from typing import Callable, Sequence

from .exceptions import InvalidPathError
from .node import Node


def find_index(container: Sequence[Node], name: str) -> int:
    """Return the position of the first child named ``name``, or -1."""
    for i, node in enumerate(container):
        if node.name == name:
            return i
    return -1


def _walk_spine(
    root: Sequence[Node], path: Sequence[str]
) -> tuple[list[tuple[Sequence[Node], int]], Sequence[Node]]:
    """Walk ``path`` through ``root`` group by group.

    Returns:
        Tuple of (spine, container) where spine lists, for each path
        element, the container it was found in and its index there, and
        container is the children of the last group walked through.

    Raises:
        InvalidPathError: If a name is missing or names an entry.
    """
    spine: list[tuple[Sequence[Node], int]] = []
    container = root
    for depth, name in enumerate(path):
        idx = find_index(container, name)
        if idx < 0:
            raise InvalidPathError(
                path, f"Path segment '{name}' not found at depth {depth}"
            )
        node = container[idx]
        if not node.is_group:
            raise InvalidPathError(
                path, f"'{name}' is an entry, it has no children"
            )
        spine.append((container, idx))
        container = node.children
    return spine, container


def resolve(root: Sequence[Node], path: Sequence[str]) -> Sequence[Node]:
    """Resolve a container path to the sequence of nodes it names.

    Args:
        root: The root sequence of a snapshot.
        path: Names of the groups to descend through.

    Returns:
        ``root`` itself for an empty path, else the children of the
        deepest group.

    Raises:
        InvalidPathError: If any name is missing or names an entry.
    """
    _, container = _walk_spine(root, path)
    return container


def resolve_node(root: Sequence[Node], path: Sequence[str]) -> Node:
    """Resolve a node path to the node it names.

    Raises:
        InvalidPathError: If the path is empty, its prefix does not
            resolve, or the last name matches no node.
    """
    if not path:
        raise InvalidPathError(path, "Empty path does not name a node")
    container = resolve(root, path[:-1])
    idx = find_index(container, path[-1])
    if idx < 0:
        raise InvalidPathError(path, f"Node '{path[-1]}' not found")
    return container[idx]


def rebuild(
    root: Sequence[Node],
    path: Sequence[str],
    edit: Callable[[Sequence[Node]], Sequence[Node]],
) -> tuple[Node, ...]:
    """Return a new root with the container at ``path`` replaced by ``edit``.

    Every group on the way from the root to the edited container is
    replaced by a copy; all other nodes are shared with ``root``.

    Args:
        root: The current root sequence.
        path: Container path, as for ``resolve``.
        edit: Called with the resolved container, returns its replacement.
            It may raise to abort; nothing has been built at that point.

    Raises:
        InvalidPathError: If ``path`` does not resolve.
    """
    spine, container = _walk_spine(root, path)
    new_children = tuple(edit(container))
    for parent, idx in reversed(spine):
        group = parent[idx].with_children(new_children)
        new_children = tuple(parent[:idx]) + (group,) + tuple(parent[idx + 1:])
    return new_children
