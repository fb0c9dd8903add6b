# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NestedList - A copy-on-write store of groups and entries.

This module provides the NestedList class, which owns the current tree
snapshot and exposes path-addressed operations on it. Every mutation
builds a new snapshot that shares unmodified subtrees with the previous
one; snapshots handed out earlier are never altered.

Key Features:
    - **Path addressing**: Paths are sequences of names ('a', 'b', 'c')
    - **Sibling uniqueness**: Optional, enabled by default
    - **Copy-on-write**: Only groups on the path to a change are copied
    - **Atomic operations**: A failing call leaves the snapshot unchanged
    - **Subscriptions**: Callbacks notified after each committed change

Example:
    Basic usage::

        store = NestedList()
        store.add_group('A')
        store.add_group('B', ['A'])
        store.add_entry('x', ['A', 'B'], {'k': 1})

        store.get_entry(['A', 'B', 'x']).data  # {'k': 1}

        store.change_entry_data(['A', 'B', 'x'], {'j': 2})
        store.get_entry(['A', 'B', 'x']).data  # {'k': 1, 'j': 2}

        before = store.snapshot
        store.remove_entry(['A', 'B', 'x'])
        # `before` still holds 'x'
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Iterable, Iterator, Mapping, Sequence

from .exceptions import (
    EntryNameRequiredError,
    InvalidChangeTypeError,
    InvalidPathError,
    NameExistsError,
)
from .loading import dump_nodes, load_nodes
from .node import Entry, Group, Node, walk
from .resolver import find_index, rebuild, resolve_node
from .text import format_path

logger = logging.getLogger(__name__)

REPLACE = 'replace'
MERGE = 'merge'
CHANGE_MODES = (REPLACE, MERGE)

SubscriberCallback = Callable[..., Any]


def _as_path(path: Sequence[str] | None) -> tuple[str, ...]:
    """Normalize a path argument to a tuple of names."""
    if path is None:
        return ()
    if isinstance(path, (str, bytes)):
        raise TypeError(
            "path must be a sequence of names, not a string "
            "(see genro_nestedlist.text.parse_path)"
        )
    return tuple(path)


def _as_node_path(path: Sequence[str] | None) -> tuple[str, ...]:
    """Normalize a path that must name a node (non-empty)."""
    path = _as_path(path)
    if not path:
        raise InvalidPathError(path, "Empty path does not name a node")
    return path


def _check_name(name: Any) -> str:
    if name is None or name == '':
        raise EntryNameRequiredError()
    if not isinstance(name, str):
        raise TypeError(f"name must be a string, not {type(name).__name__}")
    return name


class NestedList:
    """A hierarchical list of groups and entries addressed by path.

    NestedList provides:
    - add_group(name, path) / add_entry(name, path, data): Append children
    - rename_entry(path, new_name): Rename a group or entry
    - change_entry_data(path, data, mode): Replace or merge entry data
    - remove_entry(path): Remove a group or entry
    - get_entry(path): Read a node from the current snapshot

    The current snapshot is a tuple of root nodes, replaced (never
    modified) by each successful mutation.

    The store does no locking. Callers sharing it between threads must
    serialize mutations themselves.

    Attributes:
        snapshot: The current tuple of root nodes.
        unique: Whether sibling names must be unique.
    """

    __slots__ = ('_snapshot', '_unique', '_subscribers')

    def __init__(
        self,
        source: Iterable[Any] | None = None,
        unique: bool = True,
    ) -> None:
        """Initialize a NestedList.

        Args:
            source: Optional initial snapshot: an iterable of Group/Entry
                nodes or plain dicts (see ``loading.load_nodes``).
            unique: If True (default), names must be unique among siblings.
                Fixed for the lifetime of the store.

        Raises:
            NameExistsError: If unique is True and source has duplicate
                sibling names.

        Example:
            >>> NestedList()
            >>> NestedList([{'name': 'docs', 'children': []}])
            >>> NestedList(other.snapshot, unique=False)
        """
        self._unique = bool(unique)
        self._snapshot: tuple[Node, ...] = (
            load_nodes(source, unique=self._unique) if source is not None else ()
        )
        self._subscribers: dict[str, SubscriberCallback] = {}

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"NestedList({[node.name for node in self._snapshot]})"

    def __len__(self) -> int:
        """Return the number of root nodes."""
        return len(self._snapshot)

    def __iter__(self) -> Iterator[Node]:
        """Iterate over root nodes in insertion order."""
        return iter(self._snapshot)

    def __contains__(self, path: Sequence[str]) -> bool:
        """Check if a node path resolves in the current snapshot."""
        try:
            self.get_entry(path)
        except InvalidPathError:
            return False
        return True

    @property
    def snapshot(self) -> tuple[Node, ...]:
        """The current snapshot (read-only)."""
        return self._snapshot

    @property
    def unique(self) -> bool:
        return self._unique

    # ==================== Mutations ====================

    def add_group(self, name: str, path: Sequence[str] = ()) -> None:
        """Append an empty group to the container at ``path``.

        Args:
            name: Name of the new group.
            path: Groups to descend through; empty for the root.

        Raises:
            EntryNameRequiredError: If name is missing or empty.
            InvalidPathError: If path does not resolve.
            NameExistsError: If unique and a sibling is already named ``name``.
        """
        self._add_node(Group(_check_name(name)), path, 'add_group')

    def add_entry(
        self,
        name: str,
        path: Sequence[str] = (),
        data: Mapping[str, Any] | None = None,
    ) -> None:
        """Append an entry to the container at ``path``.

        Args:
            name: Name of the new entry.
            path: Groups to descend through; empty for the root.
            data: Initial key/value data (copied). Defaults to empty.

        Raises:
            EntryNameRequiredError: If name is missing or empty.
            InvalidPathError: If path does not resolve.
            NameExistsError: If unique and a sibling is already named ``name``.
        """
        name = _check_name(name)
        if data is None:
            data = {}
        elif not isinstance(data, Mapping):
            raise TypeError(f"data must be a mapping, not {type(data).__name__}")
        self._add_node(Entry(name, copy.deepcopy(dict(data))), path, 'add_entry')

    def remove_entry(self, path: Sequence[str]) -> None:
        """Remove the group or entry named by ``path``.

        Sibling order is otherwise preserved.

        Raises:
            InvalidPathError: If path is empty, does not resolve, or names
                no existing node.
        """
        path = _as_node_path(path)
        name = path[-1]

        def edit(container: Sequence[Node]) -> tuple[Node, ...]:
            idx = find_index(container, name)
            if idx < 0:
                raise InvalidPathError(path, f"Node '{name}' not found")
            return tuple(container[:idx]) + tuple(container[idx + 1:])

        self._commit(rebuild(self._snapshot, path[:-1], edit), 'remove_entry', path)

    def rename_entry(self, path: Sequence[str], new_name: str) -> None:
        """Rename the group or entry named by ``path``.

        Position, children and data are preserved. When uniqueness is
        enabled the new name must not be used by another sibling.

        Raises:
            EntryNameRequiredError: If new_name is missing or empty.
            InvalidPathError: If path is empty or does not resolve.
            NameExistsError: If unique and another sibling is named ``new_name``.
        """
        new_name = _check_name(new_name)
        path = _as_node_path(path)

        def update(container: Sequence[Node], idx: int) -> Node:
            node = container[idx]
            if (
                self._unique
                and new_name != node.name
                and find_index(container, new_name) >= 0
            ):
                raise NameExistsError(new_name, path[:-1])
            return node.with_name(new_name)

        self._update_node(path, update, 'rename_entry', path[:-1] + (new_name,))

    def change_entry_data(
        self,
        path: Sequence[str],
        data: Mapping[str, Any],
        mode: str = MERGE,
    ) -> None:
        """Replace or merge the data of the entry named by ``path``.

        Args:
            path: Path of an entry (not a group).
            data: Key/value mapping (copied).
            mode: 'merge' (default) writes each key of ``data`` over the
                existing data, keeping other keys. 'replace' makes ``data``
                the entry's whole data.

        Raises:
            InvalidChangeTypeError: If mode is not 'replace' or 'merge'.
            InvalidPathError: If path is empty, does not resolve, or names
                a group.

        Example:
            >>> store.change_entry_data(['x'], {'b': 3, 'c': 4})
            >>> store.change_entry_data(['x'], {}, mode='replace')  # clear
        """
        if mode not in CHANGE_MODES:
            raise InvalidChangeTypeError(mode)
        if not isinstance(data, Mapping):
            raise TypeError(f"data must be a mapping, not {type(data).__name__}")
        path = _as_node_path(path)
        new_data = copy.deepcopy(dict(data))

        def update(container: Sequence[Node], idx: int) -> Node:
            node = container[idx]
            if not node.is_entry:
                raise InvalidPathError(path, f"'{node.name}' is a group, not an entry")
            if mode == REPLACE:
                return node.with_data(new_data)
            merged = copy.deepcopy(dict(node.data))
            merged.update(new_data)
            return node.with_data(merged)

        self._update_node(path, update, 'change_entry_data', path)

    # ==================== Query ====================

    def get_entry(self, path: Sequence[str]) -> Node:
        """Return the group or entry named by ``path``.

        Reads the current snapshot without copying. The returned node is
        immutable; change it through the mutation methods.

        Raises:
            InvalidPathError: If path is empty, does not resolve, or names
                no existing node.
        """
        return resolve_node(self._snapshot, _as_node_path(path))

    def walk(self) -> Iterator[tuple[tuple[str, ...], Node]]:
        """Yield ``(path, node)`` for every node, depth-first."""
        return walk(self._snapshot)

    def as_list(self) -> list[dict[str, Any]]:
        """Convert the current snapshot to a list of plain dicts."""
        return dump_nodes(self._snapshot)

    # ==================== Subscriptions ====================

    def subscribe(self, subscriber_id: str, callback: SubscriberCallback) -> None:
        """Register a callback notified after each committed change.

        The callback is called with keyword arguments: ``store``,
        ``event`` (the operation name, e.g. 'add_group'), ``path`` (path
        of the changed node), ``snapshot`` (the new snapshot) and
        ``previous`` (the snapshot it replaced). Registering an existing
        id replaces its callback.

        Example:
            >>> def on_change(event, path, **kwargs):
            ...     print(event, path)
            >>> store.subscribe('printer', on_change)
        """
        self._subscribers[subscriber_id] = callback

    def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a subscription. Unknown ids are ignored."""
        self._subscribers.pop(subscriber_id, None)

    # ==================== Internals ====================

    def _add_node(self, node: Node, path: Sequence[str], event: str) -> None:
        path = _as_path(path)

        def edit(container: Sequence[Node]) -> tuple[Node, ...]:
            if self._unique and find_index(container, node.name) >= 0:
                raise NameExistsError(node.name, path)
            return tuple(container) + (node,)

        self._commit(rebuild(self._snapshot, path, edit), event, path + (node.name,))

    def _update_node(
        self,
        path: tuple[str, ...],
        update: Callable[[Sequence[Node], int], Node],
        event: str,
        changed_path: tuple[str, ...],
    ) -> None:
        """Replace the node at ``path`` with ``update(container, index)``."""
        name = path[-1]

        def edit(container: Sequence[Node]) -> tuple[Node, ...]:
            idx = find_index(container, name)
            if idx < 0:
                raise InvalidPathError(path, f"Node '{name}' not found")
            node = update(container, idx)
            return tuple(container[:idx]) + (node,) + tuple(container[idx + 1:])

        self._commit(rebuild(self._snapshot, path[:-1], edit), event, changed_path)

    def _commit(
        self, snapshot: tuple[Node, ...], event: str, path: tuple[str, ...]
    ) -> None:
        """Install a new snapshot and notify subscribers."""
        previous = self._snapshot
        self._snapshot = snapshot
        logger.debug("%s %s committed", event, format_path(path))
        for callback in list(self._subscribers.values()):
            callback(
                store=self,
                event=event,
                path=path,
                snapshot=snapshot,
                previous=previous,
            )


def create_store(
    initial: Iterable[Any] | None = None, unique: bool = True
) -> NestedList:
    """Create a NestedList from an optional initial snapshot."""
    return NestedList(initial, unique=unique)
