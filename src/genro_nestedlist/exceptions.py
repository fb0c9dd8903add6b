# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NestedList exceptions."""

from __future__ import annotations

from typing import Any, Sequence


class NestedListError(Exception):
    """Base exception for NestedList errors."""

    pass


class EntryNameRequiredError(NestedListError, ValueError):
    """Raised when a required group/entry name is missing or empty."""

    def __init__(self, message: str = "Entry name is required.") -> None:
        super().__init__(message)


class NameExistsError(NestedListError, ValueError):
    """Raised when a sibling with the same name already exists.

    Attributes:
        name: The conflicting name.
        path: Path of the container where the conflict was found.
    """

    def __init__(self, name: str, path: Sequence[str] = ()) -> None:
        self.name = name
        self.path = tuple(path)
        where = '/'.join(self.path) or '<root>'
        super().__init__(f"Name '{name}' already exists in '{where}'")


class InvalidPathError(NestedListError, KeyError):
    """Raised when a path does not resolve.

    Subclasses KeyError so that callers catching lookup failures by path
    keep working.

    Attributes:
        path: The path that failed to resolve.
    """

    def __init__(self, path: Sequence[str], reason: str = "Invalid path") -> None:
        self.path = tuple(path)
        self.reason = reason
        super().__init__(f"{reason}: {list(self.path)!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class InvalidChangeTypeError(NestedListError, ValueError):
    """Raised when change_entry_data gets a mode other than replace/merge."""

    def __init__(self, mode: Any) -> None:
        self.mode = mode
        super().__init__(
            f"Invalid change type {mode!r}, expected 'replace' or 'merge'"
        )


class InvalidDataError(NestedListError, ValueError):
    """Raised when text or plain data cannot be turned into nodes or entry data."""

    pass
