"""Module name validation and normalization.

A raw name is what the user types. It may carry a single trailing marker
that selects the module shape:

- ``my_module/``   -> directory module (``my_module/mod.rs``)
- ``my_module.rs`` -> file module (``my_module.rs``)
- ``my_module.``   -> file module (``my_module.rs``)
- ``my_module``    -> directory module, the default

Directory is the default because it leaves room for submodules later.
"""

import re
from dataclasses import dataclass

from rustmod.core.enums import ModuleKind
from rustmod.core.errors import InvalidNameError

# No leading digit or period, no trailing underscore, no periods in the base.
MODULE_NAME_PATTERN = re.compile(r"(?![0-9.])[A-Za-z0-9_]*[A-Za-z0-9](?:\.rs|/|\.)?")

INVALID_NAME_MESSAGE = "Module name must be a valid Rust identifier (snake_case)"

# Strict and reserved keywords (2018 edition and later)
RUST_KEYWORDS = frozenset(
    {
        "as", "async", "await", "break", "const", "continue", "crate", "dyn",
        "else", "enum", "extern", "false", "fn", "for", "gen", "if", "impl",
        "in", "let", "loop", "match", "mod", "move", "mut", "pub", "ref",
        "return", "self", "Self", "static", "struct", "super", "trait", "true",
        "type", "unsafe", "use", "where", "while",
        "abstract", "become", "box", "do", "final", "macro", "override",
        "priv", "try", "typeof", "unsized", "virtual", "yield",
    }
)

# lib.rs, main.rs and mod.rs are parent files, never child modules
PARENT_FILE_STEMS = frozenset({"lib", "main", "mod"})


@dataclass(frozen=True)
class NormalizedName:
    """A validated module identifier and the shape to create it with."""

    identifier: str
    kind: ModuleKind


def name_error(raw: str) -> str | None:
    """Explain why a raw name cannot be used, or return None if it can.

    Args:
        raw: The name entered by the user.

    Returns:
        A user-facing message, or None for a valid name.
    """
    if MODULE_NAME_PATTERN.fullmatch(raw) is None:
        return INVALID_NAME_MESSAGE

    base = raw.rstrip("/").split(".")[0]
    if base in PARENT_FILE_STEMS:
        return f"'{base}' is reserved for the parent module file"
    if base in RUST_KEYWORDS:
        return f"'{base}' is a Rust keyword"
    return None


def is_valid_module_name(raw: str) -> bool:
    """Check whether a raw name is a valid module name.

    Args:
        raw: The name entered by the user.

    Returns:
        True if the name matches the module name grammar and is not
        reserved.
    """
    return name_error(raw) is None


def normalize(raw: str) -> NormalizedName:
    """Classify a raw name and strip its trailing marker.

    Args:
        raw: The name entered by the user.

    Returns:
        The normalized identifier and module kind.

    Raises:
        InvalidNameError: If the name does not match the grammar, is a
            Rust keyword or names a parent module file.
    """
    reason = name_error(raw)
    if reason is not None:
        raise InvalidNameError(raw, reason)

    if raw.endswith("/"):
        return NormalizedName(raw[:-1], ModuleKind.DIRECTORY)
    if raw.endswith("."):
        return NormalizedName(raw.split(".")[0], ModuleKind.FILE)
    if raw.endswith(".rs"):
        return NormalizedName(raw.split(".")[0], ModuleKind.FILE)
    return NormalizedName(raw, ModuleKind.DIRECTORY)


def visibility_keyword(label: str) -> str:
    """Map a visibility label to the keyword written before ``mod``.

    ``private`` maps to no keyword; any other label is used verbatim.
    """
    return "" if label == "private" else label


def build_declaration_line(identifier: str, keyword: str = "") -> str:
    """Compose the declaration line for a module.

    Args:
        identifier: Normalized module identifier.
        keyword: Visibility keyword, empty for the private default.

    Returns:
        A line such as ``pub(crate) mod parser;`` without a newline.
    """
    prefix = f"{keyword} " if keyword else ""
    return f"{prefix}mod {identifier};"
