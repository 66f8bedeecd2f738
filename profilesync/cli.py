"""CLI interface for profilesync."""

import logging
import sys
from datetime import datetime
from pathlib import Path

import click

from profilesync.app import ProfileSyncApp
from profilesync.config import Config
from profilesync.results import OperationResult
from profilesync.scanner import group_by_mtime


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for caches, associations and backups",
)
@click.option(
    "--settings-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Settings root to use for this run (not saved)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Path | None,
    settings_dir: Path | None,
    verbose: bool,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    config = Config(settings_dir=settings_dir)
    if data_dir is not None:
        config.data_dir = data_dir
    ctx.obj["config"] = config


def _get_app(ctx: click.Context) -> ProfileSyncApp:
    if "app" not in ctx.obj:
        ctx.obj["app"] = ProfileSyncApp(ctx.obj["config"])
    return ctx.obj["app"]


def _finish(result: OperationResult) -> None:
    warnings = getattr(result.data, "warnings", None) or []
    for warning in warnings:
        click.echo(f"Warning: {warning}", err=True)

    if result.success:
        click.echo(result.message)
        return
    click.echo(f"Error: {result.message}", err=True)
    sys.exit(1)


def _format_mtime(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%b %d %H:%M")


@cli.command("list")
@click.pass_context
def list_profiles(ctx: click.Context) -> None:
    """List settings_* profiles with their account and character files."""
    app = _get_app(ctx)
    result = app.load_settings()
    if not result.success:
        _finish(result)
        return

    listing = result.data
    suffix = " (default)" if listing.is_default else ""
    click.echo(f"Settings directory: {listing.settings_dir}{suffix}")
    for profile in listing.profiles:
        click.echo()
        click.echo(f"[{profile.display_name}]")
        selected = app.selections.get(profile.name) or {}
        for account in profile.account_files:
            marker = "*" if selected.get("userId") == account.account_id else " "
            click.echo(
                f" {marker} user {account.account_id:<12} "
                f"{_format_mtime(account.last_modified)}"
            )
        for character in profile.character_files:
            marker = "*" if selected.get("charId") == character.character_id else " "
            click.echo(
                f" {marker} char {character.character_id:<12} "
                f"{_format_mtime(character.last_modified)}  {character.display_name}"
            )
    click.echo()
    _finish(result)


@cli.command()
@click.pass_context
def mappings(ctx: click.Context) -> None:
    """Show accounts with their associated characters and unassigned characters."""
    app = _get_app(ctx)
    result = app.load_mappings()
    if not result.success:
        _finish(result)
        return

    listing = result.data
    groups = group_by_mtime(
        [*listing.accounts, *listing.available_characters],
        app.config.scanner.group_threshold_seconds,
    )
    group_of = {item.path: index + 1 for index, group in enumerate(groups) for item in group}

    click.echo("Accounts:")
    for account in listing.accounts:
        click.echo(
            f"  [g{group_of[account.path]}] {account.account_id:<12} "
            f"Last Updated: {_format_mtime(account.last_modified)}"
        )
        for association in app.associations.for_account(account.account_id):
            click.echo(f"      - {association.character_name} ({association.character_id})")

    click.echo("Available characters:")
    for character in listing.available_characters:
        click.echo(
            f"  [g{group_of[character.path]}] {character.display_name:<24} "
            f"Last Updated: {_format_mtime(character.last_modified)}"
        )
    _finish(result)


@cli.command()
@click.argument("account_id")
@click.argument("character_id")
@click.pass_context
def associate(ctx: click.Context, account_id: str, character_id: str) -> None:
    """Associate CHARACTER_ID with ACCOUNT_ID (at most 3 per account)."""
    _finish(_get_app(ctx).associate(account_id, character_id))


@cli.command()
@click.argument("account_id")
@click.argument("character_id")
@click.pass_context
def unassociate(ctx: click.Context, account_id: str, character_id: str) -> None:
    """Remove the association between ACCOUNT_ID and CHARACTER_ID."""
    _finish(_get_app(ctx).unassociate(account_id, character_id))


@cli.command()
@click.argument("profile")
@click.argument("account_id")
@click.argument("character_id")
@click.option(
    "--all",
    "sync_all",
    is_flag=True,
    help="Overwrite the files of every other profile instead of siblings in PROFILE",
)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def sync(
    ctx: click.Context,
    profile: str,
    account_id: str,
    character_id: str,
    sync_all: bool,
    yes: bool,
) -> None:
    """Copy core_user_ACCOUNT_ID.dat and core_char_CHARACTER_ID.dat from PROFILE."""
    if sync_all:
        prompt = (
            f"Use character {character_id} on account {account_id} from profile "
            f'"{profile}" to overwrite the files of all other profiles?'
        )
    else:
        prompt = (
            f"Use character {character_id} on account {account_id} to overwrite "
            f'all files in profile "{profile}"?'
        )
    if not yes:
        click.confirm(prompt, abort=True)

    app = _get_app(ctx)
    if sync_all:
        result = app.sync_global(profile, account_id, character_id)
    else:
        result = app.sync_local(profile, account_id, character_id)
    _finish(result)


@cli.command()
@click.argument("profile")
@click.argument("account_id")
@click.argument("character_id")
@click.pass_context
def select(ctx: click.Context, profile: str, account_id: str, character_id: str) -> None:
    """Remember ACCOUNT_ID and CHARACTER_ID as the selection for PROFILE."""
    _finish(_get_app(ctx).select(profile, account_id, character_id))


@cli.command()
@click.argument(
    "target",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=False,
)
@click.pass_context
def backup(ctx: click.Context, target: Path | None) -> None:
    """Archive TARGET (default: the settings directory) to a .bak.tar.gz file."""
    _finish(_get_app(ctx).backup(target))


@cli.command()
@click.pass_context
def backups(ctx: click.Context) -> None:
    """List existing backup archives."""
    app = _get_app(ctx)
    archives = app.backups.list_backups()
    if not archives:
        click.echo("No backups found.")
        return
    for archive in archives:
        click.echo(str(archive))


@cli.command("delete-backups")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_backups(ctx: click.Context, yes: bool) -> None:
    """Delete every backup archive in the data directory."""
    if not yes:
        click.confirm("Delete all backups?", abort=True)
    _finish(_get_app(ctx).delete_backups())


@cli.command("set-dir")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def set_dir(ctx: click.Context, path: Path) -> None:
    """Choose and save the settings directory."""
    _finish(_get_app(ctx).choose_settings_dir(path))


@cli.command("reset-dir")
@click.pass_context
def reset_dir(ctx: click.Context) -> None:
    """Reset the settings directory to the platform default."""
    _finish(_get_app(ctx).reset_to_default_directory())


def main() -> None:
    """Entry point for the CLI."""
    cli(standalone_mode=True)  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
