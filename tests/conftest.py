# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for NestedList tests."""

import pytest

from genro_nestedlist import NestedList


@pytest.fixture
def store():
    """Store holding A/B/x plus a root entry 'note'.

    Layout::

        A/
          B/
            x {"k": 1}
          C/
        note {"text": "hi"}
    """
    store = NestedList()
    store.add_group('A')
    store.add_group('B', ['A'])
    store.add_entry('x', ['A', 'B'], {'k': 1})
    store.add_group('C', ['A'])
    store.add_entry('note', [], {'text': 'hi'})
    return store


@pytest.fixture
def loose_store():
    """Empty store with uniqueness disabled."""
    return NestedList(unique=False)
