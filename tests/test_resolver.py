# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for path resolution and spine rebuilding."""

import pytest

from genro_nestedlist import Entry, Group, InvalidPathError, resolve, resolve_node
from genro_nestedlist.resolver import find_index, rebuild


@pytest.fixture
def root():
    return (
        Group('A', (
            Group('B', (Entry('x', {'k': 1}),)),
            Group('C'),
        )),
        Entry('note', {'text': 'hi'}),
    )


class TestFindIndex:
    """Tests for find_index."""

    def test_found(self, root):
        """Test index of an existing name."""
        assert find_index(root, 'note') == 1

    def test_missing(self, root):
        """Test -1 for a missing name."""
        assert find_index(root, 'nope') == -1

    def test_first_match(self):
        """Test duplicates resolve to the first sibling."""
        assert find_index((Entry('a'), Entry('b'), Entry('b')), 'b') == 1


class TestResolve:
    """Tests for resolve."""

    def test_empty_path_is_root(self, root):
        """Test an empty path resolves to the root itself."""
        assert resolve(root, []) is root

    def test_nested(self, root):
        """Test resolving to a nested container."""
        container = resolve(root, ['A', 'B'])
        assert container == (Entry('x', {'k': 1}),)

    def test_missing_segment(self, root):
        """Test a missing name fails."""
        with pytest.raises(InvalidPathError) as excinfo:
            resolve(root, ['A', 'Z'])
        assert excinfo.value.path == ('A', 'Z')

    def test_through_entry(self, root):
        """Test descending through an entry fails."""
        with pytest.raises(InvalidPathError, match="is an entry"):
            resolve(root, ['note'])

    def test_long_path(self):
        """Test deep paths resolve without recursion."""
        node = Group('n')
        for _ in range(5000):
            node = Group('n', (node,))
        container = resolve((node,), ['n'] * 5001)
        assert container == ()


class TestResolveNode:
    """Tests for resolve_node."""

    def test_entry(self, root):
        """Test resolving an entry."""
        assert resolve_node(root, ['A', 'B', 'x']) == Entry('x', {'k': 1})

    def test_group(self, root):
        """Test resolving a group."""
        assert resolve_node(root, ['A', 'C']) == Group('C')

    def test_root_level(self, root):
        """Test resolving a root-level node."""
        assert resolve_node(root, ['note']) is root[1]

    def test_empty_path(self, root):
        """Test an empty path names no node."""
        with pytest.raises(InvalidPathError):
            resolve_node(root, [])

    def test_missing_node(self, root):
        """Test a missing last name fails."""
        with pytest.raises(InvalidPathError, match="'y' not found"):
            resolve_node(root, ['A', 'B', 'y'])

    def test_bad_prefix(self, root):
        """Test a prefix through an entry fails."""
        with pytest.raises(InvalidPathError):
            resolve_node(root, ['note', 'x'])


class TestRebuild:
    """Tests for rebuild."""

    def test_edit_root(self, root):
        """Test editing the root container."""
        new_root = rebuild(root, [], lambda c: c + (Entry('y'),))
        assert [n.name for n in new_root] == ['A', 'note', 'y']
        assert new_root[0] is root[0]
        assert len(root) == 2

    def test_spine_copied_siblings_shared(self, root):
        """Test groups on the path are copied and the rest is shared."""
        new_root = rebuild(root, ['A', 'B'], lambda c: c + (Entry('y'),))
        new_a = new_root[0]
        assert new_a is not root[0]
        assert new_a.children[0] is not root[0].children[0]
        assert new_a.children[1] is root[0].children[1]
        assert new_root[1] is root[1]
        assert new_a.children[0].children[0] is root[0].children[0].children[0]
        assert [n.name for n in root[0].children[0].children] == ['x']

    def test_invalid_path_skips_edit(self, root):
        """Test the edit is never called when the path fails."""
        calls = []
        with pytest.raises(InvalidPathError):
            rebuild(root, ['A', 'Z'], lambda c: calls.append(c) or c)
        assert calls == []

    def test_edit_error_propagates(self, root):
        """Test errors raised by the edit propagate unchanged."""
        def edit(container):
            raise ValueError('no')

        with pytest.raises(ValueError, match='no'):
            rebuild(root, ['A'], edit)
