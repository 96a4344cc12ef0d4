"""Exceptions raised by rustmod."""

from pathlib import Path


class RustModError(Exception):
    """Base class for rustmod errors."""

    pass


class InvalidNameError(RustModError):
    """Raised when a raw module name is not a valid Rust module name."""

    def __init__(self, raw: str, reason: str | None = None):
        self.raw = raw
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Invalid module name: {raw!r}{detail}")


class InvalidVisibilityError(RustModError):
    """Raised when a visibility label is not one of the configured options."""

    def __init__(self, label: str, choices: list[str]):
        self.label = label
        self.choices = choices
        super().__init__(f"Unknown visibility {label!r} (expected one of: {', '.join(choices)})")


class ModuleExistsError(RustModError):
    """Raised when the module file or directory is already present."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"{path.name} already exists")


class ParentUpdateError(RustModError):
    """Raised when the parent declaration file could not be read or written.

    The module itself has already been created when this is raised.
    """

    def __init__(self, path: Path | None, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        name = path.name if path else "parent module file"
        super().__init__(f"Could not update {name}: {cause}")
