import re
from pathlib import Path

import click

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]+:")


def _to_uri(value: str):
    """Interpret a CLI argument as a URI (``scheme:...``) or a local path."""
    from multiroot.workspaces.base.uri import Uri, UriError

    if not _SCHEME.match(value):
        return Uri.file(str(Path(value).resolve()))
    try:
        return Uri.parse(value)
    except UriError as exc:
        raise click.BadParameter(str(exc)) from exc


def _store():
    from multiroot.workspaces.settings import get_settings
    from multiroot.workspaces.store.local import LocalRecentsStore

    settings = get_settings()
    return LocalRecentsStore(settings.data_root, settings.data_prefix, settings.max_recent_entries)


@click.group()
def main() -> None:
    """multiroot - multi-root workspace files and recently opened history."""
    from multiroot.workspaces.log import setup_logging
    from multiroot.workspaces.settings import get_settings

    setup_logging(get_settings().log_level)


# ---------------------------------------------------------------------------
# Workspace files
# ---------------------------------------------------------------------------


@main.command()
@click.argument("workspace_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def folders(workspace_file: Path) -> None:
    """List the folders of a workspace file, resolved to absolute locations."""
    from multiroot.workspaces.base.uri import Uri
    from multiroot.workspaces.execution.codec import WorkspaceParseError, parse_stored_workspace, to_workspace_folders

    config = Uri.file(str(workspace_file.resolve()))
    try:
        stored = parse_stored_workspace(workspace_file.read_text(encoding="utf-8"), config)
    except WorkspaceParseError as exc:
        raise click.ClickException(str(exc)) from exc

    for folder in to_workspace_folders(stored.folders, config):
        click.echo(f"{folder.index}\t{folder.name}\t{folder.uri.to_string(skip_encoding=True)}")


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--untitled/--no-untitled",
    default=None,
    help="Treat SOURCE as an untitled workspace (default: detect from its location).",
)
@click.option("--dry-run", is_flag=True, default=False, help="Print the rewritten file instead of writing TARGET.")
def rewrite(source: Path, target: Path, untitled: bool | None, dry_run: bool) -> None:
    """Save the workspace file SOURCE as TARGET, rewriting its folder paths."""
    from multiroot.workspaces.base.uri import Uri
    from multiroot.workspaces.execution.codec import WorkspaceParseError
    from multiroot.workspaces.execution.rewriter import rewrite_workspace_file_for_new_location
    from multiroot.workspaces.models.workspace import is_untitled_workspace
    from multiroot.workspaces.settings import get_settings

    settings = get_settings()
    source_uri = Uri.file(str(source.resolve()))
    target_uri = Uri.file(str(target.resolve()))
    if untitled is None:
        untitled = is_untitled_workspace(source_uri, settings.untitled_workspaces_home_uri())

    try:
        content = rewrite_workspace_file_for_new_location(
            source.read_text(encoding="utf-8"),
            source_uri,
            untitled,
            target_uri,
            formatting=settings.formatting_options(),
        )
    except WorkspaceParseError as exc:
        raise click.ClickException(str(exc)) from exc

    if dry_run:
        click.echo(content, nl=False)
        return

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    click.echo(f"Workspace saved to {target}.")


# ---------------------------------------------------------------------------
# Recently opened
# ---------------------------------------------------------------------------


@main.group()
def recent() -> None:
    """Recently opened workspaces, folders and files."""


@recent.command("list")
def list_recent() -> None:
    """Show the recently opened list, most recent first."""
    import asyncio

    from multiroot.workspaces.models.recent import RecentFolder

    recents = asyncio.run(_store().read())
    for entry in recents.workspaces:
        if isinstance(entry, RecentFolder):
            line = f"folder\t{entry.folder_uri}"
        else:
            line = f"workspace\t{entry.workspace.config_path}"
        click.echo(f"{line}\t{entry.label}" if entry.label else line)
    for entry in recents.files:
        line = f"file\t{entry.file_uri}"
        click.echo(f"{line}\t{entry.label}" if entry.label else line)


@recent.command("add")
@click.argument("location")
@click.option(
    "--kind",
    type=click.Choice(["workspace", "folder", "file"]),
    default=None,
    help="Kind of entry (default: workspace for .code-workspace files, else folder).",
)
@click.option("--label", default=None, help="Label shown instead of the location.")
@click.option("--remote-authority", default=None, help="Remote authority the entry belongs to.")
def add_recent(location: str, kind: str | None, label: str | None, remote_authority: str | None) -> None:
    """Add LOCATION (a path or URI) to the front of the recently opened list."""
    import asyncio

    from multiroot.workspaces.models.identifiers import get_workspace_identifier
    from multiroot.workspaces.models.recent import RecentFile, RecentFolder, RecentWorkspace
    from multiroot.workspaces.models.workspace import has_workspace_file_extension

    uri = _to_uri(location)
    if kind is None:
        kind = "workspace" if has_workspace_file_extension(uri) else "folder"

    if kind == "workspace":
        entry = RecentWorkspace(
            workspace=get_workspace_identifier(uri),
            label=label,
            remote_authority=remote_authority,
        )
    elif kind == "folder":
        entry = RecentFolder(folder_uri=uri, label=label, remote_authority=remote_authority)
    else:
        entry = RecentFile(file_uri=uri, label=label, remote_authority=remote_authority)

    asyncio.run(_store().add([entry]))
    click.echo(f"Added {kind} {uri}.")


@recent.command("remove")
@click.argument("locations", nargs=-1, required=True)
def remove_recent(locations: tuple[str, ...]) -> None:
    """Remove LOCATIONS (paths or URIs) from the recently opened list."""
    import asyncio

    asyncio.run(_store().remove([_to_uri(location) for location in locations]))
    click.echo(f"Removed {len(locations)} location(s).")


@recent.command("clear")
def clear_recent() -> None:
    """Forget all recently opened entries."""
    import asyncio

    asyncio.run(_store().clear())
    click.echo("Recently opened list cleared.")
