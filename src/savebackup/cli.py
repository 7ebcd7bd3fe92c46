"""CLI entry point for savebackup."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from savebackup import __version__

# Exit codes
EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_CONFIG_ERROR = 2


# ===================================================================
# CLI group
# ===================================================================


@click.group()
@click.version_option(version=__version__, prog_name="savebackup")
@click.option("--settings", "-s", type=click.Path(dir_okay=False), help="Path to SaveBackup.ini.")
@click.option(
    "--home",
    type=click.Path(file_okay=False),
    help="Directory used in place of the user's home for defaults.",
)
@click.option("--quiet", "-q", is_flag=True, help="Hide info messages and the summary; errors are still shown.")
@click.pass_context
def main(ctx: click.Context, settings: str | None, home: str | None, quiet: bool) -> None:
    """Keep timestamped backups of files as they are saved."""
    ctx.ensure_object(dict)
    ctx.obj["settings_path"] = settings
    ctx.obj["home"] = home
    ctx.obj["quiet"] = quiet


# ===================================================================
# init
# ===================================================================


@main.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create SaveBackup.ini with default values if it does not exist."""
    from savebackup.settings import SettingsStore

    store = SettingsStore(ctx.obj["settings_path"], ctx.obj["home"])
    if store.bootstrap():
        click.echo(f"Created {store.path}")
    elif store.path.is_file():
        click.echo(f"{store.path} already exists")
    else:
        click.echo(f"Error: could not create {store.path}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)


# ===================================================================
# show
# ===================================================================


@main.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Show the effective settings."""
    from savebackup.settings import SettingsStore
    from savebackup.utils.output import print_settings

    store = SettingsStore(ctx.obj["settings_path"], ctx.obj["home"])
    settings = store.load()
    print_settings(settings, store.path)


# ===================================================================
# save
# ===================================================================


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Show backup destinations without writing files.")
@click.pass_context
def save(ctx: click.Context, files: tuple[str, ...], dry_run: bool) -> None:
    """Back up FILES as if each one were about to be saved."""
    from savebackup.component import SaveBackupComponent
    from savebackup.events import SaveEvent

    quiet: bool = ctx.obj["quiet"]

    events = []
    for name in files:
        path = Path(name).resolve()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"Error: cannot read {name}: {e}", err=True)
            sys.exit(EXIT_CONFIG_ERROR)
        events.append(SaveEvent(source_path=str(path), text=text))

    component = SaveBackupComponent(
        home=ctx.obj["home"],
        settings_path=ctx.obj["settings_path"],
        quiet=quiet,
        dry_run=dry_run,
    )
    component.init_component()
    try:
        results = component.notifier.fire_all(events)
    finally:
        component.dispose_component()

    if not quiet:
        from savebackup.utils.output import print_backup_summary

        print_backup_summary(results, dry_run=dry_run)

    sys.exit(EXIT_OK if all(r.success for r in results) else EXIT_RUNTIME_ERROR)
