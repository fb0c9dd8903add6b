# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the command shell."""

import io
import json

import pytest

from genro_nestedlist import InvalidPathError, NameExistsError, NestedList
from genro_nestedlist.cli import CommandError, Shell, main


@pytest.fixture
def shell():
    return Shell(NestedList(), out=io.StringIO())


class TestShell:
    """Tests for Shell commands."""

    def test_build_tree(self, shell):
        """Test group, entry and show commands."""
        shell.execute('group A')
        shell.execute('group B A')
        shell.execute('entry x A,B {"k": 1}')
        shell.execute('show')
        assert shell.out.getvalue() == 'A/\n  B/\n    x {"k": 1}\n'

    def test_entry_without_data(self, shell):
        """Test entry with no data gets an empty mapping."""
        shell.execute('entry x')
        assert dict(shell.store.get_entry(['x']).data) == {}

    def test_merge_and_replace(self, shell):
        """Test merge and replace commands, with ',' as the root path."""
        shell.execute('entry x , {"a": 1, "b": 2}')
        shell.execute('merge x {"b": 3, "c": 4}')
        assert dict(shell.store.get_entry(['x']).data) == {'a': 1, 'b': 3, 'c': 4}
        shell.execute('replace x {"z": 0}')
        assert dict(shell.store.get_entry(['x']).data) == {'z': 0}

    def test_rename_and_remove(self, shell):
        """Test rename and remove commands."""
        shell.execute('group A')
        shell.execute('rename A Z')
        assert [n.name for n in shell.store] == ['Z']
        shell.execute('remove Z')
        assert len(shell.store) == 0

    def test_get(self, shell):
        """Test get prints a node as JSON."""
        shell.execute('group A')
        shell.execute('entry x A {"k": 1}')
        shell.execute('get A,x')
        assert json.loads(shell.out.getvalue()) == {'name': 'x', 'data': {'k': 1}}

    def test_dump(self, shell):
        """Test dump prints the whole tree as JSON."""
        shell.execute('group A')
        shell.execute('dump')
        assert json.loads(shell.out.getvalue()) == [{'name': 'A', 'children': []}]

    def test_comments_and_blank_lines(self, shell):
        """Test comments and blank lines are ignored."""
        shell.execute('')
        shell.execute('   # a comment')
        assert len(shell.store) == 0

    def test_unknown_command(self, shell):
        """Test unknown commands raise CommandError."""
        with pytest.raises(CommandError, match="Unknown command"):
            shell.execute('frobnicate A')

    def test_missing_arguments(self, shell):
        """Test commands with too few arguments raise CommandError."""
        with pytest.raises(CommandError):
            shell.execute('rename A')

    def test_extra_arguments(self, shell):
        """Test show takes no arguments."""
        with pytest.raises(CommandError):
            shell.execute('show A')

    def test_store_errors_propagate(self, shell):
        """Test store errors reach the caller of execute."""
        shell.execute('group A')
        with pytest.raises(NameExistsError):
            shell.execute('group A')
        with pytest.raises(InvalidPathError):
            shell.execute('remove Q')

    def test_run_counts_failures(self, shell, caplog):
        """Test run continues past failures and logs them."""
        failures = shell.run([
            'group A\n',
            'group A\n',
            'entry x Q\n',
            'entry y A\n',
        ])
        assert failures == 2
        assert ['A', 'y'] in shell.store
        assert 'line 2' in caplog.text
        assert 'NameExistsError' in caplog.text
        assert 'line 3' in caplog.text


class TestMain:
    """Tests for the console entry point."""

    def test_script(self, tmp_path, capsys):
        """Test running commands from a script file."""
        script = tmp_path / 'commands.txt'
        script.write_text('group A\nentry x A {"k": 1}\nshow\n')
        assert main(['--script', str(script)]) == 0
        assert capsys.readouterr().out == 'A/\n  x {"k": 1}\n'

    def test_stdin(self, monkeypatch, capsys):
        """Test reading commands from stdin."""
        monkeypatch.setattr('sys.stdin', io.StringIO('group A\nshow\n'))
        assert main([]) == 0
        assert capsys.readouterr().out == 'A/\n'

    def test_failure_exit_status(self, tmp_path):
        """Test exit status 1 when a command fails."""
        script = tmp_path / 'commands.txt'
        script.write_text('group A\ngroup A\n')
        assert main(['--script', str(script)]) == 1

    def test_load(self, tmp_path, capsys):
        """Test loading an initial tree from JSON."""
        initial = tmp_path / 'tree.json'
        initial.write_text(json.dumps([{'name': 'A', 'entries': [{'name': 'x'}]}]))
        script = tmp_path / 'commands.txt'
        script.write_text('show\n')
        assert main(['--load', str(initial), '--script', str(script)]) == 0
        assert capsys.readouterr().out == 'A/\n  x {}\n'

    def test_load_duplicates(self, tmp_path):
        """Test a tree with duplicates needs --allow-duplicates."""
        initial = tmp_path / 'tree.json'
        initial.write_text(json.dumps([{'name': 'x'}, {'name': 'x'}]))
        script = tmp_path / 'commands.txt'
        script.write_text('group x\n')
        assert main(['--load', str(initial), '--script', str(script)]) == 2
        assert main([
            '--load', str(initial), '--script', str(script), '--allow-duplicates',
        ]) == 0

    def test_script_missing_file(self, tmp_path, caplog):
        """Test a missing script file exits with status 2."""
        assert main(['--script', str(tmp_path / 'nope.txt')]) == 2
        assert 'cannot read' in caplog.text

    def test_load_missing_file(self, tmp_path):
        """Test a missing load file exits with status 2."""
        assert main(['--load', str(tmp_path / 'missing.json')]) == 2
