from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional

import typer

from user_records.config import get_settings
from user_records.exceptions import QueryFailed, StoreUnavailable
from user_records.infrastructure.db_factory import resolve_db_path
from user_records.reporter import render_records
from user_records.store.sqlite import SQLiteRecordStore
from user_records.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(help="Manage stored users (name, age, email).")

MIN_AGE = 0
MAX_AGE = 100


def _db_path(ctx: typer.Context) -> Path:
    override = ctx.obj.get("db_path") if ctx.obj else None
    return Path(override) if override else resolve_db_path()


def _run(
    ctx: typer.Context,
    action: Optional[Callable[[SQLiteRecordStore], Optional[int]]],
    highlight_id: Optional[int] = None,
) -> None:
    """
    Open the store, apply `action`, then re-fetch and render the full list.

    `action` receives the open store and may return the id to highlight.
    """
    try:
        with SQLiteRecordStore(_db_path(ctx)) as store:
            result = action(store) if action is not None else None
            if highlight_id is None and isinstance(result, int):
                highlight_id = result
            records = store.fetch_all()
    except StoreUnavailable as exc:
        typer.echo(f"Database unavailable: {exc}", err=True)
        raise typer.Exit(code=1)
    except QueryFailed as exc:
        typer.echo(f"Query failed: {exc}", err=True)
        raise typer.Exit(code=1)
    render_records(records, highlight_id=highlight_id)


@app.callback()
def cli(
    ctx: typer.Context,
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        help="Path to the SQLite file (default: per-user data directory).",
    ),
) -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    ctx.obj = {"db_path": db}


@app.command()
def info(ctx: typer.Context) -> None:
    """
    Show the database location and effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={_db_path(ctx)} | env={settings.app_env} "
        f"log_level={settings.log_level} json_logs={settings.json_logs}"
    )


@app.command("list")
def list_records(ctx: typer.Context) -> None:
    """
    List every stored user.
    """
    _run(ctx, None)


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="User name."),
    age: int = typer.Option(0, "--age", "-a", min=MIN_AGE, max=MAX_AGE, help="Age in years."),
    email: str = typer.Option("", "--email", "-e", help="Email address."),
) -> None:
    """
    Add a new user and show the refreshed list.
    """
    _run(ctx, lambda store: store.insert(name, age, email))


@app.command()
def edit(
    ctx: typer.Context,
    record_id: int = typer.Argument(..., help="Id of the user to edit."),
    name: str = typer.Argument(..., help="New name."),
    age: Optional[int] = typer.Option(
        None, "--age", "-a", min=MIN_AGE, max=MAX_AGE, help="Age in years (default: keep)."
    ),
    email: Optional[str] = typer.Option(
        None, "--email", "-e", help="Email address (default: keep)."
    ),
) -> None:
    """
    Replace a user's name, age and email. Omitted options keep their stored
    values. Unknown ids leave the store unchanged.
    """

    def apply(store: SQLiteRecordStore) -> None:
        current = next((r for r in store.fetch_all() if r.id == record_id), None)
        new_age = age if age is not None else (current.age if current else MIN_AGE)
        new_email = email if email is not None else (current.email if current else "")
        store.update(record_id, name, new_age, new_email)

    _run(ctx, apply, highlight_id=record_id)


@app.command()
def delete(
    ctx: typer.Context,
    record_id: int = typer.Argument(..., help="Id of the user to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """
    Delete a user after confirmation and show the refreshed list.
    """
    if not yes and not typer.confirm("Do you really want to delete this user?"):
        typer.echo("Cancelled.")
        raise typer.Exit()
    _run(ctx, lambda store: store.delete(record_id))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
