"""Create module files and directories on disk."""

import logging
from dataclasses import dataclass
from pathlib import Path

from rustmod.core.enums import ModuleKind
from rustmod.core.errors import ModuleExistsError

logger = logging.getLogger(__name__)

MODULE_FILE_NAME = "mod.rs"
SOURCE_SUFFIX = ".rs"


@dataclass(frozen=True)
class CreatedModule:
    """A module that was just written to disk.

    Attributes:
        identifier: Normalized module identifier.
        kind: File or directory module.
        path: The created ``<id>.rs`` file or ``<id>/`` directory.
        entry_file: The source file to open for editing.
    """

    identifier: str
    kind: ModuleKind
    path: Path
    entry_file: Path


def resolve_target_directory(location: Path) -> Path:
    """Resolve a selected location to the directory modules go into.

    Args:
        location: A directory, or a file whose parent is used.

    Returns:
        The target directory.
    """
    location = Path(location)
    if location.is_dir():
        return location
    return location.parent


def create_module(parent_dir: Path, identifier: str, kind: ModuleKind) -> CreatedModule:
    """Create an empty file or directory module under ``parent_dir``.

    The existence check and the write are separate steps. Creation itself
    is exclusive, so anything created in between surfaces as an
    ``OSError`` from the write rather than a ``ModuleExistsError``.

    Args:
        parent_dir: Directory to create the module in.
        identifier: Normalized module identifier.
        kind: File or directory module.

    Returns:
        The created module.

    Raises:
        ModuleExistsError: If the target path is already taken.
        OSError: If the filesystem write fails.
    """
    parent_dir = Path(parent_dir)

    if kind == ModuleKind.DIRECTORY:
        return _create_directory_module(parent_dir, identifier)
    return _create_file_module(parent_dir, identifier)


def _create_directory_module(parent_dir: Path, identifier: str) -> CreatedModule:
    module_dir = parent_dir / identifier
    # A file or a directory with this name both collide.
    if module_dir.exists():
        raise ModuleExistsError(module_dir)

    module_dir.mkdir()
    entry_file = module_dir / MODULE_FILE_NAME
    entry_file.touch(exist_ok=False)

    logger.info(f"Created directory module {module_dir}")
    return CreatedModule(identifier, ModuleKind.DIRECTORY, module_dir, entry_file)


def _create_file_module(parent_dir: Path, identifier: str) -> CreatedModule:
    module_file = parent_dir / f"{identifier}{SOURCE_SUFFIX}"
    if module_file.exists():
        raise ModuleExistsError(module_file)

    module_file.touch(exist_ok=False)

    logger.info(f"Created file module {module_file}")
    return CreatedModule(identifier, ModuleKind.FILE, module_file, module_file)
