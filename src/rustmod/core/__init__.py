"""Core module scaffolding logic for rustmod."""

from .creator import CreatedModule, create_module, resolve_target_directory
from .declarations import SyncResult, find_parent_file, insert_declaration, sync_declaration
from .enums import DuplicateCheck, InsertionPolicy, ModuleKind, SyncStatus
from .errors import (
    InvalidNameError,
    InvalidVisibilityError,
    ModuleExistsError,
    ParentUpdateError,
    RustModError,
)
from .naming import NormalizedName, build_declaration_line, normalize, visibility_keyword

__all__ = [
    "CreatedModule",
    "DuplicateCheck",
    "InsertionPolicy",
    "InvalidNameError",
    "InvalidVisibilityError",
    "ModuleExistsError",
    "ModuleKind",
    "NormalizedName",
    "ParentUpdateError",
    "RustModError",
    "SyncResult",
    "SyncStatus",
    "build_declaration_line",
    "create_module",
    "find_parent_file",
    "insert_declaration",
    "normalize",
    "resolve_target_directory",
    "sync_declaration",
    "visibility_keyword",
]
