"""lexitrack CLI — inspect scheduling decisions on progress records stored in files."""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

import pydantic
import typer
import yaml

from lexitrack.application.config import config_path, resolve_config
from lexitrack.application.validation import coerce_dictionary_score
from lexitrack.domain.clock import parse_timestamp
from lexitrack.domain.errors import LexitrackError
from lexitrack.domain.models import PersonalCounters, QueueItem, SchedulingState

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexitrack: spaced-repetition scheduling with personal difficulty.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage lexitrack configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = [logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def humanize_error(exc: Exception) -> str:
    """Turn known failures into a one-line message for the terminal."""
    if isinstance(exc, pydantic.ValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return f"Invalid configuration: {problems}"
    if isinstance(exc, FileNotFoundError):
        return f"File not found: {exc.filename}"
    if isinstance(exc, yaml.YAMLError):
        return f"Could not parse input file: {exc}"
    if isinstance(exc, LexitrackError):
        return f"Invalid input: {exc}"
    return str(exc)


def _load_document(path: Path) -> Any:
    # YAML is a superset of JSON, so both formats load here.
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _parse_now(now: str | None) -> datetime | None:
    try:
        return parse_timestamp(now)
    except ValueError:
        typer.secho(f"Invalid --now timestamp: {now}", fg="red", err=True)
        raise typer.Exit(2)


def _queue_items(rows: Any) -> list[QueueItem]:
    if not isinstance(rows, list):
        raise LexitrackError("Expected a list of items")
    items = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise LexitrackError(f"Item #{i} is not a mapping")
        score = row.get("dictionary_score", row.get("difficulty_score"))
        items.append(
            QueueItem(
                item_id=str(row.get("id", row.get("word_id", i))),
                state=SchedulingState.from_record(row),
                dictionary_score=coerce_dictionary_score(score),
                payload=row,
            )
        )
    return items


_INPUT_ERRORS = (
    OSError,
    ValueError,
    TypeError,
    yaml.YAMLError,
    pydantic.ValidationError,
    LexitrackError,
)


def _fail(exc: Exception) -> None:
    typer.secho(humanize_error(exc), fg="red", err=True)
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for lexitrack."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = _LOG_LEVELS[min(verbose + 1, len(_LOG_LEVELS) - 1)]
    logging.getLogger("lexitrack").setLevel(level)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def review(
    path: Annotated[Path, typer.Argument(help="YAML/JSON file with the current progress record.")],
    grade: Annotated[str, typer.Option("--grade", "-g", help="forgot, hard, good or easy.")],
    score: Annotated[
        int | None, typer.Option("--score", help="Dictionary difficulty (0-100).")
    ] = None,
    now: Annotated[str | None, typer.Option(help="Override the clock (ISO-8601).")] = None,
    strict: Annotated[
        bool | None, typer.Option("--strict/--lenient", help="Reject malformed input.")
    ] = None,
):
    """Apply one [bold green]review[/bold green] and print the updated progress record.

    The file holds the stored progress row (ease_factor, interval_days,
    repetitions, next_review, last_result, correct_count, wrong_count).
    Optional keys: dictionary_score, history (list of booleans, newest first).
    """
    from lexitrack.application.progress import apply_review, apply_review_strict

    when = _parse_now(now)

    try:
        config = resolve_config({"strict": strict})
        record = _load_document(path) or {}
        if not isinstance(record, dict):
            raise LexitrackError("Expected a mapping with the progress record")

        dictionary_score = score if score is not None else record.get("dictionary_score", 50)
        apply = apply_review_strict if config.strict else apply_review
        progress = apply(
            SchedulingState.from_record(record) if record else None,
            PersonalCounters.from_record(record) if record else None,
            grade,
            dictionary_score,
            record.get("history") or [],
            now=when,
        )
    except _INPUT_ERRORS as e:
        _fail(e)

    typer.echo(json.dumps(progress.to_record(), indent=2))


@app.command()
def queue(
    path: Annotated[Path, typer.Argument(help="YAML/JSON list of items with progress fields.")],
    now: Annotated[str | None, typer.Option(help="Override the clock (ISO-8601).")] = None,
    limit: Annotated[int | None, typer.Option(help="Maximum queue length.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Print the due items in practice order."""
    from lexitrack.application.progress import build_practice_queue

    when = _parse_now(now)

    try:
        config = resolve_config({"queue_limit": limit})
        items = _queue_items(_load_document(path))
    except _INPUT_ERRORS as e:
        _fail(e)

    ordered = build_practice_queue(items, now=when, limit=config.queue_limit)

    if json_output:
        typer.echo(json.dumps([item.item_id for item in ordered], indent=2))
        return

    typer.echo(f"Items: {len(items)}  Due: {len(ordered)}")
    for item in ordered:
        last = item.state.last_grade
        tag = last.value if hasattr(last, "value") else "new"
        typer.echo(f"  {item.item_id}  ({tag})")


@app.command()
def plan(
    path: Annotated[Path, typer.Argument(help="YAML/JSON list of items with progress fields.")],
    size: Annotated[int | None, typer.Option(help="Daily plan size.")] = None,
    now: Annotated[str | None, typer.Option(help="Override the clock (ISO-8601).")] = None,
):
    """Build today's plan: most overdue first, then easiest new words."""
    from lexitrack.application.daily_plan import build_daily_plan

    when = _parse_now(now)

    try:
        config = resolve_config({"daily_plan_size": size})
        items = _queue_items(_load_document(path))
    except _INPUT_ERRORS as e:
        _fail(e)

    result = build_daily_plan(items, config.daily_plan_size, now=when)
    typer.echo(
        json.dumps(
            {
                "target": config.daily_plan_size,
                "due": result.due_count,
                "new": result.new_count,
                "not_yet_due": result.skipped_future,
                "items": result.item_ids,
            },
            indent=2,
        )
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    try:
        config = resolve_config()
    except pydantic.ValidationError as e:
        _fail(e)
    typer.echo(json.dumps(config.model_dump(), indent=2))


@config_app.command("path")
def config_path_cmd():
    """Print where the config file is read from."""
    typer.echo(str(config_path()))


def main():
    app()


if __name__ == "__main__":
    main()
