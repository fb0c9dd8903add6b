# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-NestedList - Path-addressed tree of groups and entries.

A lightweight, zero-dependency library providing an in-memory,
copy-on-write hierarchy of named groups and key/value entries
for the Genro ecosystem (Genro Kyō).
"""

__version__ = "0.1.0"

from .exceptions import (
    EntryNameRequiredError,
    InvalidChangeTypeError,
    InvalidDataError,
    InvalidPathError,
    NameExistsError,
    NestedListError,
)
from .loading import dump_nodes, load_nodes
from .node import Entry, Group, Node, walk
from .render import render_tree
from .resolver import resolve, resolve_node
from .store import CHANGE_MODES, MERGE, REPLACE, NestedList, create_store
from .text import format_data, format_path, parse_data, parse_path

__all__ = [
    # Core classes
    "NestedList",
    "create_store",
    "Group",
    "Entry",
    "Node",
    # Change modes
    "MERGE",
    "REPLACE",
    "CHANGE_MODES",
    # Path resolution
    "resolve",
    "resolve_node",
    "walk",
    # Loading and text helpers
    "load_nodes",
    "dump_nodes",
    "parse_path",
    "format_path",
    "parse_data",
    "format_data",
    "render_tree",
    # Exceptions
    "NestedListError",
    "EntryNameRequiredError",
    "NameExistsError",
    "InvalidPathError",
    "InvalidChangeTypeError",
    "InvalidDataError",
]
