"""Command-line interface for starter-kit."""

import logging
from pathlib import Path

import click
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from starter_kit import __version__
from starter_kit.answers import Answers, AnswersError
from starter_kit.config.loader import (
    get_home_config_path,
    get_local_config_path,
    home_config_exists,
    load_config,
    load_yaml_config,
    local_config_exists,
    resolve_answers_path,
    save_config,
)
from starter_kit.config.schema import CONFIG_KEYS, StarterKitConfig
from starter_kit.console import console, err_console

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _open_answers(ctx: click.Context) -> Answers:
    """Load the answers file for this invocation, exiting on bad content."""
    path: Path = ctx.obj["answers_path"]
    try:
        return Answers(path)
    except AnswersError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from None
    except OSError as e:
        shown = escape(str(path))
        console.print(f"[red]Cannot read {shown}: {escape(str(e))}[/red]")
        raise SystemExit(1) from None


def _save_answers(answers: Answers) -> None:
    try:
        answers.save_to_file()
    except OSError as e:
        path = escape(str(answers.save_to_path))
        console.print(f"[red]Cannot write {path}: {escape(str(e))}[/red]")
        raise SystemExit(1) from None


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"starter-kit [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--answers-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Answers file to use (overrides configuration).",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, answers_file: Path | None) -> None:
    """starter-kit - answers and template tokens for new libraries."""
    config = load_config()
    _configure_logging("DEBUG" if verbose else config.log_level or "WARNING")

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["answers_path"] = resolve_answers_path(config, answers_file)
    logger.debug("Using answers file %s", ctx.obj["answers_path"])

    if ctx.invoked_subcommand is None:
        console.print("[bold]starter-kit[/bold] - answers for scaffolding a library")
        console.print("\nRun [cyan]starter-kit --help[/cyan] for available commands.")


@main.group(invoke_without_command=True)
@click.pass_context
def answers(ctx: click.Context) -> None:
    """Inspect and edit saved answers.

    Use subcommands: starter-kit answers show, tokens, set, reset
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@answers.command("show")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON document.")
@click.pass_context
def answers_show(ctx: click.Context, as_json: bool) -> None:
    """Show every answer and its current value."""
    store = _open_answers(ctx)

    if as_json:
        click.echo(store.to_json())
        return

    table = Table(title=escape(str(store.save_to_path)))
    table.add_column("Token", style="cyan")
    table.add_column("Value")
    for token, value in store.to_dict().items():
        if value is None:
            shown = "[dim]null[/dim]"
        elif isinstance(value, list):
            shown = escape(", ".join(value)) if value else "[dim](empty)[/dim]"
        else:
            shown = escape(str(value))
        table.add_row(token, shown)
    console.print(table)


@answers.command("tokens")
@click.pass_context
def answers_tokens(ctx: click.Context) -> None:
    """List the template tokens, one per line."""
    for token in _open_answers(ctx).get_tokens():
        click.echo(token)


@answers.command("set")
@click.argument("token")
@click.argument("values", nargs=-1, required=True)
@click.pass_context
def answers_set(ctx: click.Context, token: str, values: tuple[str, ...]) -> None:
    """Set TOKEN to VALUES and save.

    List answers such as packageKeywords take several values; every other
    answer takes exactly one.
    """
    store = _open_answers(ctx)

    try:
        name = Answers.field_for_token(token)
        if isinstance(getattr(store, name), list):
            store.set(token, list(values))
        elif len(values) != 1:
            console.print(f"[red]'{token}' takes exactly one value[/red]")
            raise SystemExit(1)
        else:
            store.set(token, values[0])
    except AnswersError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from None

    _save_answers(store)
    console.print(f"[green]Saved {token} to {escape(str(store.save_to_path))}[/green]")


@answers.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def answers_reset(ctx: click.Context, yes: bool) -> None:
    """Overwrite the answers file with default answers."""
    path: Path = ctx.obj["answers_path"]
    if not yes and not click.confirm(f"Reset all answers in {path}?", default=False):
        console.print("[yellow]Answers not changed.[/yellow]")
        return

    # Existing content is not read, so an unreadable file can be reset too
    _save_answers(Answers.defaults(path))
    console.print(f"[green]Answers reset in {escape(str(path))}[/green]")


@main.group(invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show and edit starter-kit configuration."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Display the current effective configuration."""
    effective: StarterKitConfig = ctx.obj["config"]
    console.print("\n[bold]Current Effective Configuration:[/bold]")
    console.print(f"  [dim]Global: {escape(str(get_home_config_path()))}[/dim]")
    console.print(f"  [dim]Local: {escape(str(get_local_config_path()))}[/dim]")
    console.print()

    for key, value in effective.to_dict().items():
        console.print(f"  {key}: {escape(str(value))}")
    console.print(f"  answers path: {escape(str(ctx.obj['answers_path']))}")

    console.print()
    if home_config_exists():
        console.print("  [green]Global config: exists[/green]")
    else:
        console.print("  [dim]Global config: not found[/dim]")
    if local_config_exists():
        console.print("  [green]Local config: exists[/green]")
    else:
        console.print("  [dim]Local config: not found[/dim]")


@config.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
@click.option(
    "--global",
    "global_",
    is_flag=True,
    help="Write to the global config instead of the project config.",
)
def config_set(key: str, value: str, global_: bool) -> None:
    """Set KEY to VALUE in a config file, keeping its other settings."""
    change = StarterKitConfig.from_dict({key: value})
    if getattr(change, key) is None:
        console.print(f"[red]Invalid value for {key}: {escape(value)}[/red]")
        raise SystemExit(1)

    path = get_home_config_path() if global_ else get_local_config_path()
    existing = StarterKitConfig.from_dict(load_yaml_config(path) or {})
    save_config(existing.merge(change), path)
    console.print(f"[green]Saved {key} to {escape(str(path))}[/green]")
