"""CLI entry point for rustmod."""

import logging
import sys
from pathlib import Path

# Configure logging early
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr),
    ],
)
logger = logging.getLogger(__name__)

# Fix Windows console encoding for non-ASCII paths
from rustmod.utils.windows import configure_console

configure_console()

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from pydantic import ValidationError
from pydantic_settings import SettingsError
from rich.table import Table

from rustmod import __version__
from rustmod.config import RustModSettings, get_settings
from rustmod.core.creator import MODULE_FILE_NAME, resolve_target_directory
from rustmod.core.enums import DuplicateCheck, InsertionPolicy, SyncStatus
from rustmod.core.errors import InvalidNameError, InvalidVisibilityError, ModuleExistsError
from rustmod.core.naming import (
    INVALID_NAME_MESSAGE,
    build_declaration_line,
    name_error,
    normalize,
    visibility_keyword,
)
from rustmod.service import ScaffoldRequest, scaffold_module

# Exit codes for the failure points of `rustmod new`
EXIT_INVALID_INPUT = 1
EXIT_ALREADY_EXISTS = 3
EXIT_WRITE_FAILED = 4
EXIT_PARENT_UPDATE_FAILED = 5

# Use force_terminal=True to ensure Rich works properly, and use safe encoding
console = Console(force_terminal=True, safe_box=True)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="rustmod")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """rustmod - Rust module scaffolding.

    Creates module files and directories and declares them in the
    parent lib.rs, main.rs or mod.rs.
    """
    if verbose:
        logging.getLogger("rustmod").setLevel(logging.DEBUG)

    if ctx.invoked_subcommand is None:
        console.print(
            Panel.fit(
                "[bold blue]rustmod[/bold blue]\n\n"
                "[dim]Rust module scaffolding[/dim]\n\n"
                f"Version: {__version__}\n\n"
                "Commands:\n"
                "  [green]rustmod new[/green] \\[PATH] \\[NAME] - Create a module and declare it\n"
                "  [green]rustmod check[/green] NAME         - Validate a module name\n"
                "  [green]rustmod visibilities[/green]       - List visibility options\n"
                "  [green]rustmod config[/green]             - Show effective settings\n",
                title="Welcome to rustmod",
                border_style="blue",
            )
        )


def _load_settings() -> RustModSettings:
    """Load settings, reporting invalid RUSTMOD_* values without a traceback."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("[red]Invalid rustmod settings:[/red]")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"  [red]{escape(field)}: {escape(error['msg'])}[/red]")
        sys.exit(EXIT_INVALID_INPUT)
    except SettingsError as e:
        console.print(f"[red]Invalid rustmod settings: {escape(str(e))}[/red]")
        sys.exit(EXIT_INVALID_INPUT)


def _validate_name(value: str) -> str:
    """Prompt value processor; an empty answer means cancel."""
    reason = name_error(value) if value else None
    if reason:
        raise click.BadParameter(reason)
    return value


def _prompt_name(target_dir: Path) -> str:
    is_submodule = (target_dir / MODULE_FILE_NAME).exists()
    text = "Enter submodule name" if is_submodule else "Enter module name"
    return click.prompt(text, default="", show_default=False, value_proc=_validate_name)


def _prompt_visibility(settings: RustModSettings) -> str:
    options = settings.visibility_options
    console.print("[bold]Select visibility for this module:[/bold]")
    for index, option in enumerate(options, start=1):
        console.print(
            f"  [cyan]{index}[/cyan]. {escape(option.label)} [dim]- {escape(option.description)}[/dim]"
        )
    choice = click.prompt("Visibility", type=click.IntRange(1, len(options)))
    return options[choice - 1].label


@cli.command()
@click.argument(
    "location",
    required=False,
    default=".",
    type=click.Path(exists=True, path_type=Path),
)
@click.argument("name", required=False)
@click.option("--visibility", "-v", help="Visibility label, e.g. pub or private")
@click.option(
    "--policy",
    type=click.Choice([p.value for p in InsertionPolicy]),
    default=None,
    help="Where to insert the declaration in the parent file",
)
@click.option(
    "--duplicate-check",
    type=click.Choice([c.value for c in DuplicateCheck]),
    default=None,
    help="How an existing declaration is detected",
)
@click.option("--focus/--no-focus", default=None, help="Open the new module file")
def new(
    location: Path,
    name: str | None,
    visibility: str | None,
    policy: str | None,
    duplicate_check: str | None,
    focus: bool | None,
) -> None:
    """Create module NAME in PATH and declare it in the parent module file.

    NAME ending in "/" or with no suffix creates NAME/mod.rs; NAME ending
    in ".rs" or "." creates NAME.rs. PATH may be a file, in which case its
    directory is used.
    """
    settings = _load_settings()
    if policy is not None:
        settings = settings.model_copy(update={"insertion_policy": InsertionPolicy(policy)})
    if duplicate_check is not None:
        settings = settings.model_copy(update={"duplicate_check": DuplicateCheck(duplicate_check)})
    auto_focus = settings.auto_focus if focus is None else focus

    target_dir = resolve_target_directory(location)

    reason = name_error(name) if name is not None else None
    if reason:
        console.print(f"[red]{escape(reason)}: {escape(name)}[/red]")
        sys.exit(EXIT_INVALID_INPUT)

    try:
        if name is None:
            name = _prompt_name(target_dir)
        if not name:
            logger.debug("Module creation cancelled")
            return
        if visibility is None:
            visibility = _prompt_visibility(settings)
    except click.Abort:
        logger.debug("Module creation cancelled")
        return

    request = ScaffoldRequest(raw_name=name, visibility_label=visibility, location=target_dir)

    try:
        result = scaffold_module(request, settings)
    except InvalidNameError as e:
        console.print(f"[red]{escape(e.reason or INVALID_NAME_MESSAGE)}: {escape(e.raw)}[/red]")
        sys.exit(EXIT_INVALID_INPUT)
    except InvalidVisibilityError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(EXIT_INVALID_INPUT)
    except ModuleExistsError as e:
        console.print(f"[red]{escape(e.path.name)} already exists![/red]")
        sys.exit(EXIT_ALREADY_EXISTS)
    except OSError as e:
        console.print(f"[red]Could not create module: {escape(str(e))}[/red]")
        sys.exit(EXIT_WRITE_FAILED)

    module = result.module

    if auto_focus:
        click.launch(str(module.entry_file))

    parent_name = result.sync.path.name if result.sync.path else MODULE_FILE_NAME

    if not result.parent_updated:
        console.print(
            f"[yellow]Module '{module.identifier}' created, "
            f"but could not update {parent_name}: {escape(str(result.sync.error))}[/yellow]"
        )
        sys.exit(EXIT_PARENT_UPDATE_FAILED)

    if settings.show_notification:
        if result.sync.status == SyncStatus.ALREADY_PRESENT:
            console.print(
                f"[green]Module '{module.identifier}' created[/green] "
                f"[dim]({parent_name} already declares it)[/dim]"
            )
        else:
            console.print(
                f"[green]Module '{module.identifier}' created and added to {parent_name}[/green]"
            )
        console.print(f"[dim]{escape(result.declaration)}[/dim]")


@cli.command()
@click.argument("name")
@click.option("--visibility", "-v", default="private", help="Visibility label for the preview")
def check(name: str, visibility: str) -> None:
    """Validate NAME and show what `rustmod new` would create."""
    settings = _load_settings()

    try:
        normalized = normalize(name)
    except InvalidNameError as e:
        console.print(f"[red]{escape(e.reason or INVALID_NAME_MESSAGE)}[/red]")
        sys.exit(EXIT_INVALID_INPUT)

    if visibility not in settings.visibility_labels:
        error = InvalidVisibilityError(visibility, settings.visibility_labels)
        console.print(f"[red]{escape(str(error))}[/red]")
        sys.exit(EXIT_INVALID_INPUT)

    declaration = build_declaration_line(normalized.identifier, visibility_keyword(visibility))
    console.print(f"[bold]Identifier:[/bold] {normalized.identifier}")
    console.print(f"[bold]Kind:[/bold] {normalized.kind.value}")
    console.print(f"[bold]Declaration:[/bold] {escape(declaration)}")


@cli.command()
def visibilities() -> None:
    """List the configured visibility options."""
    settings = _load_settings()

    table = Table(title="Visibility Options")
    table.add_column("#", justify="right")
    table.add_column("Label", style="cyan")
    table.add_column("Keyword", style="white")
    table.add_column("Description", style="dim")

    for index, option in enumerate(settings.visibility_options, start=1):
        keyword = visibility_keyword(option.label) or "(none)"
        table.add_row(str(index), escape(option.label), escape(keyword), escape(option.description))

    console.print(table)


@cli.command("config")
def show_config() -> None:
    """Show effective settings."""
    settings = _load_settings()

    console.print(f"[bold]Auto focus:[/bold] {settings.auto_focus}")
    console.print(f"[bold]Show notification:[/bold] {settings.show_notification}")
    console.print(f"[bold]Insertion policy:[/bold] {settings.insertion_policy.value}")
    console.print(f"[bold]Duplicate check:[/bold] {settings.duplicate_check.value}")
    labels = ", ".join(escape(label) for label in settings.visibility_labels)
    console.print(f"[bold]Visibility options:[/bold] {labels}")


if __name__ == "__main__":
    cli()
