"""Centralized enums for rustmod.

This module provides the kind, policy and status enums used throughout
rustmod, replacing magic strings with type-safe constants.
"""

from enum import Enum


class ModuleKind(str, Enum):
    """Shape of a new module on disk."""

    FILE = "file"
    DIRECTORY = "directory"


class InsertionPolicy(str, Enum):
    """Where a declaration line goes in the parent file."""

    TOP = "top"
    HEADER = "header"


class DuplicateCheck(str, Enum):
    """How an existing declaration is detected."""

    SUBSTRING = "substring"
    LINE = "line"


class SyncStatus(str, Enum):
    """Outcome of a declaration sync."""

    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"
    FAILED = "failed"
