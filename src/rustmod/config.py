"""Configuration management for rustmod."""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rustmod.core.enums import DuplicateCheck, InsertionPolicy


class VisibilityOption(BaseModel):
    """A selectable visibility, shown as ``label - description``."""

    label: str = Field(min_length=1)
    description: str = ""


DEFAULT_VISIBILITY_OPTIONS = [
    VisibilityOption(label="pub", description="Visible to entire crate"),
    VisibilityOption(label="pub(super)", description="Visible to the parent module"),
    VisibilityOption(label="pub(crate)", description="Visible only within the crate"),
    VisibilityOption(label="private", description="Visible only within this module"),
]


class RustModSettings(BaseSettings):
    """rustmod configuration settings.

    Every field can be set from the environment with a ``RUSTMOD_`` prefix,
    e.g. ``RUSTMOD_AUTO_FOCUS=1`` or
    ``RUSTMOD_VISIBILITY_OPTIONS='[{"label": "pub"}, {"label": "private"}]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="RUSTMOD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Presentation
    auto_focus: bool = Field(default=False)
    show_notification: bool = Field(default=True)

    # Declaration sync
    insertion_policy: InsertionPolicy = Field(default=InsertionPolicy.HEADER)
    duplicate_check: DuplicateCheck = Field(default=DuplicateCheck.SUBSTRING)

    visibility_options: list[VisibilityOption] = Field(
        default_factory=lambda: [option.model_copy() for option in DEFAULT_VISIBILITY_OPTIONS]
    )

    @field_validator("visibility_options")
    @classmethod
    def _unique_labels(cls, options: list[VisibilityOption]) -> list[VisibilityOption]:
        if not options:
            raise ValueError("at least one visibility option is required")
        labels = [option.label for option in options]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ValueError(f"duplicate visibility labels: {', '.join(duplicates)}")
        return options

    @property
    def visibility_labels(self) -> list[str]:
        return [option.label for option in self.visibility_options]


def get_settings() -> RustModSettings:
    """Get rustmod settings instance."""
    return RustModSettings()
