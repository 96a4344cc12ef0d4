"""Tests for the scaffold request/response entry point."""

import pytest

from rustmod.config import RustModSettings, VisibilityOption
from rustmod.core.enums import DuplicateCheck, InsertionPolicy, ModuleKind, SyncStatus
from rustmod.core.errors import (
    InvalidNameError,
    InvalidVisibilityError,
    ModuleExistsError,
    ParentUpdateError,
)
from rustmod.service import ScaffoldRequest, scaffold_module


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return RustModSettings(_env_file=None)


@pytest.fixture
def src_dir(tmp_path):
    src = tmp_path / "proj" / "src"
    src.mkdir(parents=True)
    return src


class TestScaffoldModule:
    """End-to-end scaffold scenarios."""

    def test_directory_module_without_parent_file(self, src_dir, settings):
        """parser/ in an empty src creates parser/mod.rs and a fresh mod.rs."""
        result = scaffold_module(ScaffoldRequest("parser/", "private", src_dir), settings)

        assert (src_dir / "parser").is_dir()
        assert (src_dir / "parser" / "mod.rs").read_text() == ""
        assert (src_dir / "mod.rs").read_text() == "mod parser;\n"
        assert result.module.kind == ModuleKind.DIRECTORY
        assert result.declaration == "mod parser;"
        assert result.sync.status == SyncStatus.INSERTED
        assert result.parent_updated

    def test_file_module_into_lib_rs(self, src_dir, settings):
        """utils.rs with pub visibility is declared at the top of lib.rs."""
        (src_dir / "lib.rs").write_text("fn main() {}\n")

        result = scaffold_module(ScaffoldRequest("utils.rs", "pub", src_dir), settings)

        assert (src_dir / "utils.rs").read_text() == ""
        assert (src_dir / "lib.rs").read_text() == "pub mod utils;\nfn main() {}\n"
        assert result.module.kind == ModuleKind.FILE
        assert not (src_dir / "mod.rs").exists()

    def test_existing_directory_is_reported(self, src_dir, settings):
        """An existing utils/ directory aborts before touching parent files."""
        (src_dir / "utils").mkdir()
        (src_dir / "lib.rs").write_text("fn main() {}\n")

        with pytest.raises(ModuleExistsError):
            scaffold_module(ScaffoldRequest("utils", "pub", src_dir), settings)

        assert (src_dir / "lib.rs").read_text() == "fn main() {}\n"
        assert not (src_dir / "mod.rs").exists()

    def test_invalid_name_touches_nothing(self, src_dir, settings):
        with pytest.raises(InvalidNameError):
            scaffold_module(ScaffoldRequest("9lives", "pub", src_dir), settings)

        assert list(src_dir.iterdir()) == []

    def test_unknown_visibility_touches_nothing(self, src_dir, settings):
        with pytest.raises(InvalidVisibilityError) as exc_info:
            scaffold_module(ScaffoldRequest("parser", "public", src_dir), settings)

        assert exc_info.value.label == "public"
        assert list(src_dir.iterdir()) == []

    def test_file_location_resolves_to_its_directory(self, src_dir, settings):
        lib = src_dir / "lib.rs"
        lib.write_text("")

        scaffold_module(ScaffoldRequest("net.", "pub(crate)", lib), settings)

        assert (src_dir / "net.rs").exists()
        assert lib.read_text() == "pub(crate) mod net;\n"

    def test_header_policy_from_settings(self, src_dir, settings):
        (src_dir / "lib.rs").write_text("//! Docs\n#![deny(missing_docs)]\n\npub mod a;\n")

        scaffold_module(ScaffoldRequest("b.rs", "pub", src_dir), settings)

        assert (src_dir / "lib.rs").read_text() == (
            "//! Docs\n#![deny(missing_docs)]\n\npub mod b;\npub mod a;\n"
        )

    def test_top_policy_from_settings(self, src_dir):
        settings = RustModSettings(_env_file=None, insertion_policy=InsertionPolicy.TOP)
        (src_dir / "lib.rs").write_text("//! Docs\n")

        scaffold_module(ScaffoldRequest("b.rs", "pub", src_dir), settings)

        assert (src_dir / "lib.rs").read_text() == "pub mod b;\n//! Docs\n"

    def test_already_declared_module(self, src_dir, settings):
        (src_dir / "mod.rs").write_text("pub mod cache;\n")

        result = scaffold_module(ScaffoldRequest("cache/", "private", src_dir), settings)

        assert result.sync.status == SyncStatus.ALREADY_PRESENT
        assert (src_dir / "mod.rs").read_text() == "pub mod cache;\n"
        assert (src_dir / "cache" / "mod.rs").exists()

    def test_line_duplicate_check_from_settings(self, src_dir):
        settings = RustModSettings(_env_file=None, duplicate_check=DuplicateCheck.LINE)
        (src_dir / "mod.rs").write_text("pub mod cache;\n")

        result = scaffold_module(ScaffoldRequest("cache/", "private", src_dir), settings)

        assert result.sync.status == SyncStatus.INSERTED
        assert (src_dir / "mod.rs").read_text() == "mod cache;\npub mod cache;\n"

    def test_custom_visibility_option(self, src_dir):
        settings = RustModSettings(
            _env_file=None,
            visibility_options=[VisibilityOption(label="pub(in crate::net)")],
        )

        result = scaffold_module(ScaffoldRequest("tcp.rs", "pub(in crate::net)", src_dir), settings)

        assert result.declaration == "pub(in crate::net) mod tcp;"


class TestPartialSuccess:
    """Parent update failures after the module was created."""

    def test_failed_parent_update_keeps_module(self, src_dir, settings):
        (src_dir / "lib.rs").mkdir()

        result = scaffold_module(ScaffoldRequest("utils.rs", "pub", src_dir), settings)

        assert (src_dir / "utils.rs").exists()
        assert not result.parent_updated
        assert result.sync.status == SyncStatus.FAILED

        with pytest.raises(ParentUpdateError) as exc_info:
            result.raise_for_parent()
        assert exc_info.value.path == src_dir / "lib.rs"

    def test_raise_for_parent_is_noop_on_success(self, src_dir, settings):
        result = scaffold_module(ScaffoldRequest("utils.rs", "pub", src_dir), settings)
        result.raise_for_parent()


class TestReservedNames:
    """Names that would declare a parent file inside itself."""

    def test_lib_rs_name_touches_nothing(self, src_dir, settings):
        with pytest.raises(InvalidNameError) as exc_info:
            scaffold_module(ScaffoldRequest("lib.rs", "pub", src_dir), settings)

        assert "reserved" in exc_info.value.reason
        assert list(src_dir.iterdir()) == []

    def test_mod_keyword_leaves_main_rs_alone(self, src_dir, settings):
        (src_dir / "main.rs").write_text("fn main() {}\n")

        with pytest.raises(InvalidNameError):
            scaffold_module(ScaffoldRequest("mod.", "private", src_dir), settings)

        assert (src_dir / "main.rs").read_text() == "fn main() {}\n"
        assert not (src_dir / "mod.rs").exists()
