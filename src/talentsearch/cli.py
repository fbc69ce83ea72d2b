"""Typer CLI entrypoint for candidate search and saved searches."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import SearchContainer, create_container
from .logging import configure_logging
from .pipeline import QueryLoader, SavedSearchNotFoundError
from .schemas.config import load_config
from .validation import QueryValidationError, validate_query, validate_saved_search_name

DEFAULT_DATA_DIR = Path.home() / ".talentsearch"

app = typer.Typer(help="Advanced candidate search CLI.")
saved_app = typer.Typer(help="Manage saved searches.")
history_app = typer.Typer(help="Inspect recent searches.")
app.add_typer(saved_app, name="saved")
app.add_typer(history_app, name="history")


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_name="config")
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    data_dir: Optional[Path] = typer.Option(
        None,
        envvar="TALENTSEARCH_DATA_DIR",
        file_okay=False,
        help="Directory holding saved_searches.json and search_history.json.",
    ),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Search candidates and manage saved searches."""
    settings = _load_settings(config)
    configure_logging(settings.get("log_level") or log_level)
    storage_path = settings.get("storage", {}).get("path")
    ctx.obj = create_container(
        settings=settings,
        data_dir=data_dir or storage_path or DEFAULT_DATA_DIR,
    )


def _container(ctx: typer.Context) -> SearchContainer:
    return ctx.obj


def _dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _load_query(path: Path):
    try:
        query = QueryLoader().load(path)
        validate_query(query)
    except QueryValidationError as exc:
        raise typer.BadParameter("; ".join(exc.errors), param_name="query") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="query") from exc
    return query


@app.command()
def search(
    ctx: typer.Context,
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidates JSONL path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    query: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Query JSON path."),
    saved_search: Optional[str] = typer.Option(None, help="Saved search id to apply."),
    text: str = typer.Option("", help="Search text recorded in history."),
) -> None:
    """Filter candidates with a query file or a saved search."""
    if bool(query) == bool(saved_search):
        raise typer.BadParameter("Provide exactly one of --query or --saved-search")

    parsed = _load_query(query) if query else None
    pipeline = _container(ctx).pipeline()
    try:
        results = pipeline.run(
            candidates_path=candidates,
            output_path=output,
            query=parsed,
            saved_search_id=saved_search,
            search_text=text,
        )
    except SavedSearchNotFoundError as exc:
        raise typer.BadParameter(str(exc), param_name="saved_search") from exc
    typer.echo(f"Matched {len(results)} candidates. Results saved to {output}.")


@saved_app.command("list")
def saved_list(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print full JSON documents."),
) -> None:
    """List saved searches."""
    searches = _container(ctx).saved_search_store().list()
    if as_json:
        typer.echo(_dump([s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in searches]))
        return
    for search in searches:
        last_used = search.last_used.isoformat() if search.last_used else "-"
        typer.echo(f"{search.id}\t{search.name}\t{search.use_count}\t{last_used}")


@saved_app.command("show")
def saved_show(ctx: typer.Context, search_id: str = typer.Argument(..., help="Saved search id.")) -> None:
    """Print one saved search as JSON."""
    search = _container(ctx).saved_search_store().get(search_id)
    if search is None:
        typer.echo(f"No saved search with id {search_id}", err=True)
        raise typer.Exit(code=1)
    typer.echo(_dump(search.model_dump(mode="json", by_alias=True, exclude_none=True)))


@saved_app.command("create")
def saved_create(
    ctx: typer.Context,
    name: str = typer.Option(..., help="Display name."),
    query: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Query JSON path."),
    description: Optional[str] = typer.Option(None, help="Optional description."),
) -> None:
    """Save a query under a name."""
    try:
        clean_name = validate_saved_search_name(name)
    except QueryValidationError as exc:
        raise typer.BadParameter("; ".join(exc.errors), param_name="name") from exc
    parsed = _load_query(query)
    search = _container(ctx).saved_search_store().create(
        clean_name,
        parsed.groups,
        parsed.global_operator,
        description,
    )
    typer.echo(search.id)


@saved_app.command("update")
def saved_update(
    ctx: typer.Context,
    search_id: str = typer.Argument(..., help="Saved search id."),
    name: Optional[str] = typer.Option(None, help="New display name."),
    description: Optional[str] = typer.Option(None, help="New description."),
    query: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Replacement query JSON."),
) -> None:
    """Change the name, description or query of a saved search."""
    fields: dict[str, Any] = {}
    if name is not None:
        try:
            fields["name"] = validate_saved_search_name(name)
        except QueryValidationError as exc:
            raise typer.BadParameter("; ".join(exc.errors), param_name="name") from exc
    if description is not None:
        fields["description"] = description
    if query is not None:
        parsed = _load_query(query)
        fields["groups"] = parsed.groups
        fields["global_operator"] = parsed.global_operator

    updated = _container(ctx).saved_search_store().update(search_id, fields)
    if updated is None:
        typer.echo(f"No saved search with id {search_id}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Updated {updated.id}.")


@saved_app.command("delete")
def saved_delete(ctx: typer.Context, search_id: str = typer.Argument(..., help="Saved search id.")) -> None:
    """Delete a saved search; unknown ids are reported but not an error."""
    if _container(ctx).saved_search_store().delete(search_id):
        typer.echo(f"Deleted {search_id}.")
    else:
        typer.echo(f"No saved search with id {search_id}; nothing deleted.")


@saved_app.command("top")
def saved_top(
    ctx: typer.Context,
    limit: int = typer.Option(5, min=1, help="Number of searches to show."),
) -> None:
    """Show the most used saved searches."""
    for search in _container(ctx).saved_search_store().most_used(limit):
        typer.echo(f"{search.id}\t{search.name}\t{search.use_count}")


@history_app.command("list")
def history_list(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, min=1, help="Number of entries (defaults to the display limit)."),
    as_json: bool = typer.Option(False, "--json", help="Print full JSON documents."),
) -> None:
    """Show recent searches, newest first."""
    entries = _container(ctx).history_store().list(limit)
    if as_json:
        typer.echo(_dump([entry.model_dump(mode="json", by_alias=True) for entry in entries]))
        return
    for entry in entries:
        typer.echo(
            f"{entry.timestamp.isoformat()}\t{entry.search_query or '-'}\t{entry.result_count}"
        )


@history_app.command("clear")
def history_clear(ctx: typer.Context) -> None:
    """Remove every history entry."""
    _container(ctx).history_store().clear()
    typer.echo("Search history cleared.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
