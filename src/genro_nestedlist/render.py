# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Plain-text outline of a NestedList snapshot."""

from __future__ import annotations

import json
from typing import Iterable

from .node import Node, walk


def render_tree(nodes: Iterable[Node], indent: str = '  ') -> str:
    """Render a snapshot as an indented outline.

    Groups end with '/', entries are followed by their data as compact
    JSON.

    Example:
        >>> print(render_tree(store.snapshot))
        A/
          B/
            x {"k": 1}
    """
    lines = []
    for path, node in walk(nodes):
        prefix = indent * (len(path) - 1)
        if node.is_group:
            lines.append(f"{prefix}{node.name}/")
        else:
            data = json.dumps(dict(node.data), sort_keys=True, default=str)
            lines.append(f"{prefix}{node.name} {data}")
    return '\n'.join(lines)
