"""Keep a directory's parent module file in sync with its child modules.

The parent file is the first of ``lib.rs``, ``main.rs`` and ``mod.rs``
found in the directory. When none exists a fresh ``mod.rs`` is created
holding just the new declaration.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from rustmod.core.enums import DuplicateCheck, InsertionPolicy, SyncStatus
from rustmod.core.header import find_header_end

logger = logging.getLogger(__name__)

# Crate root, then binary entry, then directory module
PARENT_FILE_PRIORITY = ("lib.rs", "main.rs", "mod.rs")

FALLBACK_PARENT_FILE = "mod.rs"


@dataclass
class SyncResult:
    """Outcome of :func:`sync_declaration`.

    Attributes:
        status: Inserted, already present or failed.
        path: The parent file that was (or would have been) updated.
        error: The I/O error when the sync failed.
    """

    status: SyncStatus
    path: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status != SyncStatus.FAILED


def find_parent_file(directory: Path) -> Path | None:
    """Return the highest-priority parent module file in ``directory``."""
    for name in PARENT_FILE_PRIORITY:
        candidate = Path(directory) / name
        if candidate.exists():
            return candidate
    return None


def has_declaration(
    text: str, declaration: str, check: DuplicateCheck = DuplicateCheck.SUBSTRING
) -> bool:
    """Check whether ``text`` already declares the module.

    The substring check treats any occurrence of the line as present, so
    ``mod foo;`` is also found inside ``pub mod foo;``. The line check only
    matches a whole line, ignoring surrounding whitespace.

    Args:
        text: Parent file contents.
        declaration: Declaration line without a newline.
        check: Duplicate detection mode.

    Returns:
        True if the declaration counts as already present.
    """
    if check == DuplicateCheck.LINE:
        return any(line.strip() == declaration for line in text.splitlines())
    return declaration in text


def insert_declaration(
    text: str, declaration: str, policy: InsertionPolicy = InsertionPolicy.HEADER
) -> str:
    """Insert a declaration line into parent file contents.

    Args:
        text: Current parent file contents.
        declaration: Declaration line without a newline.
        policy: ``TOP`` prepends the line and drops leading whitespace from
            the existing text. ``HEADER`` places it after the leading block
            of comments and inner attributes.

    Returns:
        The updated contents.
    """
    newline = "\r\n" if "\r\n" in text else "\n"

    if policy == InsertionPolicy.TOP:
        return f"{declaration}{newline}{text.lstrip()}"

    lines = text.splitlines(keepends=True)
    index = find_header_end(lines)

    if index == len(lines) and lines and not lines[-1].endswith(("\n", "\r")):
        lines[-1] += newline

    lines.insert(index, declaration + newline)
    return "".join(lines)


def sync_declaration(
    directory: Path,
    declaration: str,
    policy: InsertionPolicy = InsertionPolicy.HEADER,
    duplicate_check: DuplicateCheck = DuplicateCheck.SUBSTRING,
) -> SyncResult:
    """Add a module declaration to the parent file of ``directory``.

    Read and write failures are returned as a ``FAILED`` result, never
    raised, because by the time this runs the module itself exists.

    Args:
        directory: Directory holding the new module.
        declaration: Declaration line without a newline.
        policy: Insertion policy.
        duplicate_check: Duplicate detection mode.

    Returns:
        The sync outcome.
    """
    directory = Path(directory)
    parent_file = find_parent_file(directory)

    if parent_file is None:
        parent_file = directory / FALLBACK_PARENT_FILE
        try:
            _write_text(parent_file, declaration + "\n")
        except OSError as e:
            logger.error(f"Failed to create {parent_file}: {e}")
            return SyncResult(SyncStatus.FAILED, parent_file, e)

        logger.info(f"Created {parent_file} with '{declaration}'")
        return SyncResult(SyncStatus.INSERTED, parent_file)

    try:
        text = _read_text(parent_file)

        if has_declaration(text, declaration, duplicate_check):
            logger.info(f"'{declaration}' already present in {parent_file}")
            return SyncResult(SyncStatus.ALREADY_PRESENT, parent_file)

        _write_text(parent_file, insert_declaration(text, declaration, policy))
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to update {parent_file}: {e}")
        return SyncResult(SyncStatus.FAILED, parent_file, e)

    logger.info(f"Added '{declaration}' to {parent_file}")
    return SyncResult(SyncStatus.INSERTED, parent_file)


def _read_text(path: Path) -> str:
    # newline="" keeps CRLF files intact through the round trip
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
