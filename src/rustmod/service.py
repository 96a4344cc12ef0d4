"""Request/response entry point for scaffolding a module.

``scaffold_module`` takes already-collected input (raw name, visibility
label, selected location) and returns a structured result. It never
prompts; hosts such as the CLI collect input and render the outcome.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from rustmod.config import RustModSettings, get_settings
from rustmod.core.creator import CreatedModule, create_module, resolve_target_directory
from rustmod.core.declarations import SyncResult, sync_declaration
from rustmod.core.enums import SyncStatus
from rustmod.core.errors import InvalidVisibilityError, ParentUpdateError
from rustmod.core.naming import build_declaration_line, normalize, visibility_keyword

logger = logging.getLogger(__name__)


@dataclass
class ScaffoldRequest:
    """Input for one scaffold invocation.

    Attributes:
        raw_name: Module name as typed, optionally with a trailing marker.
        visibility_label: One of the configured visibility labels.
        location: Selected file or directory in the source tree.
    """

    raw_name: str
    visibility_label: str
    location: Path


@dataclass
class ScaffoldResult:
    """Outcome of a scaffold invocation that created a module."""

    module: CreatedModule
    declaration: str
    sync: SyncResult

    @property
    def parent_updated(self) -> bool:
        """False when the module exists but its parent file was not updated."""
        return self.sync.status != SyncStatus.FAILED

    def raise_for_parent(self) -> None:
        """Raise ``ParentUpdateError`` if the parent file update failed."""
        if not self.parent_updated:
            raise ParentUpdateError(self.sync.path, self.sync.error)


def scaffold_module(
    request: ScaffoldRequest, settings: RustModSettings | None = None
) -> ScaffoldResult:
    """Create a module and declare it in its parent module file.

    Args:
        request: Collected user input.
        settings: Settings to use. Defaults to :func:`get_settings`.

    Returns:
        The created module and the declaration sync outcome.

    Raises:
        InvalidNameError: If the raw name is invalid. Nothing is created.
        InvalidVisibilityError: If the label is not configured. Nothing is
            created.
        ModuleExistsError: If the module path is taken. Nothing is created.
        OSError: If creating the module fails.
    """
    if settings is None:
        settings = get_settings()

    name = normalize(request.raw_name)

    if request.visibility_label not in settings.visibility_labels:
        raise InvalidVisibilityError(request.visibility_label, settings.visibility_labels)

    target_dir = resolve_target_directory(Path(request.location))
    module = create_module(target_dir, name.identifier, name.kind)

    declaration = build_declaration_line(
        name.identifier, visibility_keyword(request.visibility_label)
    )
    sync = sync_declaration(
        target_dir,
        declaration,
        policy=settings.insertion_policy,
        duplicate_check=settings.duplicate_check,
    )

    if sync.status == SyncStatus.FAILED:
        logger.warning(f"Module '{name.identifier}' created but parent file was not updated")

    return ScaffoldResult(module=module, declaration=declaration, sync=sync)
