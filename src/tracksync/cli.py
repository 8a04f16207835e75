"""Command line entry point for tracksync.

Runs a one-shot sync of open YouTrack sprint issues into a project, or serves
the REST API that triggers the same sync.
"""

from __future__ import annotations

import functools
import sys

import click

from tracksync.config import ConfigError, Settings
from tracksync.logging import setup_logging
from tracksync.sync import (
    DEFAULT_OPEN_VALUE,
    DEFAULT_STATE_FIELD,
    SyncDone,
    SyncRequest,
    SyncRun,
    SyncService,
)
from tracksync.task_store import TaskStore, TaskStoreError
from tracksync.youtrack import YouTrackClient


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="tracksync")
def main() -> None:
    """tracksync - sync open YouTrack sprint issues into a local task list."""
    pass


@main.command()
@click.option(
    "--project-id", envvar="TRACKSYNC_PROJECT_ID", required=True, help="Project to create tasks in"
)
@click.option(
    "--board-url",
    envvar="YOUTRACK_BOARD_URL",
    default=None,
    help="Board URL like https://host/youtrack/agiles/{agileId}/{sprintId}",
)
@click.option(
    "--youtrack-base-url",
    envvar="YOUTRACK_BASE_URL",
    default=None,
    help="YouTrack base URL (instead of --board-url)",
)
@click.option(
    "--agile-id", envvar="YOUTRACK_AGILE_ID", default=None, help="Agile board id, e.g. 65-52"
)
@click.option(
    "--sprint-id", envvar="YOUTRACK_SPRINT_ID", default=None, help="Sprint id, e.g. 66-155467"
)
@click.option("--token", envvar="YOUTRACK_TOKEN", default="", help="YouTrack permanent token")
@click.option(
    "--state-field",
    envvar="YOUTRACK_STATE_FIELD",
    default=DEFAULT_STATE_FIELD,
    show_default=True,
    help="Custom field holding the issue state",
)
@click.option(
    "--open-value",
    envvar="YOUTRACK_OPEN_VALUE",
    default=DEFAULT_OPEN_VALUE,
    show_default=True,
    help="State value considered open",
)
@click.option("--dry-run", is_flag=True, help="Only report what would be created")
@click.option("--db-path", envvar="TRACKSYNC_DB_PATH", default=None, help="SQLite database file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def sync(
    project_id: str,
    board_url: str | None,
    youtrack_base_url: str | None,
    agile_id: str | None,
    sprint_id: str | None,
    token: str,
    state_field: str,
    open_value: str,
    dry_run: bool,
    db_path: str | None,
    verbose: bool,
) -> None:
    """Create Todo tasks for the open issues of a YouTrack sprint."""
    settings = _load_settings()
    setup_logging(level="DEBUG" if verbose else None, console=verbose)

    store = TaskStore(db_path or settings.db_path)
    try:
        service = SyncService(
            store=store,
            client_factory=functools.partial(YouTrackClient, timeout=settings.http_timeout),
        )
        request = SyncRequest(
            project_id=project_id,
            token=token,
            board_url=board_url,
            youtrack_base_url=youtrack_base_url,
            agile_id=agile_id,
            sprint_id=sprint_id,
            state_field=state_field,
            open_value=open_value,
            dry_run=dry_run,
        )
        outcome = SyncRun(service, request).execute()
    finally:
        store.close()

    if not isinstance(outcome, SyncDone):
        click.echo(f"Error: {outcome.message}", err=True)
        sys.exit(1)

    result = outcome.result
    verb = "Would create" if result.dry_run else "Created"
    click.echo(f"Open issues: {result.open_issues_total}")
    click.echo(f"{verb}: {result.created}")
    click.echo(f"Skipped (already synced): {result.skipped_existing}")
    for title in result.created_titles:
        click.echo(f"  - {title}")
    if result.created > len(result.created_titles):
        click.echo(f"  ... and {result.created - len(result.created_titles)} more")


@main.command("create-project")
@click.argument("name")
@click.option("--db-path", envvar="TRACKSYNC_DB_PATH", default=None, help="SQLite database file")
def create_project(name: str, db_path: str | None) -> None:
    """Create a project and print its ID."""
    settings = _load_settings()
    store = TaskStore(db_path or settings.db_path)
    try:
        project = store.create_project(name=name)
    except TaskStoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        store.close()
    click.echo(project.id)


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--db-path", envvar="TRACKSYNC_DB_PATH", default=None, help="SQLite database file")
def serve(host: str, port: int, db_path: str | None) -> None:
    """Serve the REST API."""
    import uvicorn  # noqa: PLC0415

    from tracksync.api import create_app  # noqa: PLC0415

    settings = _load_settings()
    setup_logging()
    uvicorn.run(create_app(db_path=db_path, settings=settings), host=host, port=port)


if __name__ == "__main__":
    main()
