"""CLI interface for the coachgen program synthesis engine."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import NoReturn

import click
import psycopg
from pydantic import ValidationError

from coachgen.catalog import sample_catalog
from coachgen.categorizer import BUCKETS, categorize
from coachgen.config import Config
from coachgen.contracts import load_assessment, load_catalog
from coachgen.engine import ProgramSynthesisEngine
from coachgen.errors import SynthesisError
from coachgen.logging import setup_logging
from coachgen.models import AssessmentResult, CatalogExercise, GeneratedProgram
from coachgen.output import publish_program, write_json
from coachgen.stores import (
    InMemoryAssessmentStore,
    InMemoryCatalogStore,
    PostgresAssessmentStore,
    PostgresCatalogStore,
    PostgresWorkoutStore,
)
from coachgen.templates import PROGRAM_DAYS, PROGRAM_TEMPLATES


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_catalog_file(path: Path) -> list[CatalogExercise]:
    with path.open(encoding="utf-8") as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        raise click.BadParameter("catalog file must hold a JSON list", param_hint="--catalog-file")
    return load_catalog(rows)


def _load_assessment_file(path: Path) -> AssessmentResult | None:
    with path.open(encoding="utf-8") as f:
        return load_assessment(json.load(f))


async def _generate_from_database(
    engine: ProgramSynthesisEngine,
    database_url: str,
    user_id: str,
    program_type: str,
    day: int,
    save: bool,
) -> tuple[GeneratedProgram, str | None]:
    async with await psycopg.AsyncConnection.connect(database_url, autocommit=True) as conn:
        program = await engine.generate(
            user_id, program_type, day,
            PostgresCatalogStore(conn), PostgresAssessmentStore(conn),
        )
        workout_id = await PostgresWorkoutStore(conn).save_program(program) if save else None
    return program, workout_id


def _echo_program(program: GeneratedProgram) -> None:
    click.echo(f"{program.title} ({program.date.isoformat()}, {program.duration} min)")
    click.echo(f"  {program.description}")
    for section in program.sections:
        click.echo(f"  {section.name}:")
        for ex in section.exercises:
            line = f"    - {ex.name} [{ex.exercise_id}] {ex.sets} x {ex.reps}, rest {ex.rest_seconds}s"
            if ex.weight is not None:
                line += f", {ex.weight:g} kg"
            click.echo(line)
            if ex.instruction:
                click.echo(f"      {ex.instruction}")
    click.echo(program.notes)


@click.group()
@click.pass_context
def main(ctx: click.Context):
    """Workout program synthesis engine."""
    try:
        config = Config.from_env()
    except RuntimeError as e:
        _fail(str(e))
    setup_logging(config.log_format, config.log_level)
    ctx.obj = config


@main.command()
@click.option(
    "--program-type", "-t",
    type=click.Choice(list(PROGRAM_DAYS.keys())),
    required=True,
    help="Program type.",
)
@click.option("--day", "-d", type=int, required=True, help="Day within the program (1-based).")
@click.option("--user-id", default="local-user", show_default=True, help="User the program is for.")
@click.option(
    "--catalog-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON list of catalog exercises (defaults to the bundled sample catalog).",
)
@click.option(
    "--assessment-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON object with the user's latest movement screen.",
)
@click.option(
    "--database-url",
    type=str,
    help="Read catalog and assessment from PostgreSQL (overrides DATABASE_URL).",
)
@click.option("--from-database", is_flag=True, help="Use DATABASE_URL as catalog and assessment source.")
@click.option("--save", is_flag=True, help="Store the program in the workouts table (database mode).")
@click.option("--seed", type=int, help="Random seed for reproducible programs.")
@click.option("--no-weights", is_flag=True, help="Skip the default-load annotation.")
@click.option("--no-assessment", is_flag=True, help="Ignore the assessment; no corrective exercises.")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the program to a JSON file.")
@click.option("--api", type=str, help="API base URL to publish to (e.g. http://localhost:3000).")
@click.option("--api-key", type=str, help="API key for authentication.")
@click.pass_obj
def generate(
    config: Config,
    program_type: str,
    day: int,
    user_id: str,
    catalog_file: Path | None,
    assessment_file: Path | None,
    database_url: str | None,
    from_database: bool,
    save: bool,
    seed: int | None,
    no_weights: bool,
    no_assessment: bool,
    output: Path | None,
    api: str | None,
    api_key: str | None,
):
    """Generate one training day."""
    if api and not api_key:
        _fail("--api-key is required when using --api.")

    use_database = bool(database_url) or from_database
    if use_database and (catalog_file or assessment_file):
        _fail("Specify either a database source or --catalog-file/--assessment-file, not both.")
    if save and not use_database:
        _fail("--save needs a database source (--database-url or --from-database).")

    engine = ProgramSynthesisEngine(
        seed=seed if seed is not None else config.seed,
        include_weights=not no_weights,
        adjust_for_assessment=not no_assessment,
        default_load_kg=config.default_load_kg,
        placeholder_only_programs=config.placeholder_only_programs,
    )

    workout_id = None
    try:
        if use_database:
            url = database_url or config.require_database_url()
            program, workout_id = asyncio.run(
                _generate_from_database(engine, url, user_id, program_type, day, save)
            )
        else:
            exercises = _load_catalog_file(catalog_file) if catalog_file else sample_catalog()
            assessments = InMemoryAssessmentStore()
            if assessment_file:
                assessment = _load_assessment_file(assessment_file)
                if assessment is not None:
                    assessments.add(user_id, assessment)
            program = asyncio.run(
                engine.generate(
                    user_id, program_type, day,
                    InMemoryCatalogStore(exercises), assessments,
                )
            )
    except SynthesisError as e:
        message = f"{e} [{e.code}]"
        if e.docs_hint:
            message += f"\n  {e.docs_hint}"
        _fail(message)
    except (RuntimeError, ValidationError, json.JSONDecodeError, psycopg.Error) as e:
        _fail(str(e))

    _echo_program(program)
    if program.degraded:
        click.echo(f"Warning: {program.placeholder_count} placeholder slot(s).", err=True)

    if workout_id is not None:
        click.echo(f"Saved workout {workout_id}")

    if output:
        path = write_json(program, output)
        click.echo(f"Wrote program to {path}")

    if api:
        click.echo(f"Publishing to {api}...")
        result = publish_program(program, api, api_key)
        if result["stored_as"] is None:
            click.echo(f"Errors ({len(result['errors'])}):", err=True)
            for err in result["errors"]:
                click.echo(f"  {err}", err=True)
            sys.exit(1)
        click.echo(f"Published as {result['stored_as']} (HTTP {result['status']}).")


@main.command("list-templates")
def list_templates():
    """List every program type, day and section layout."""
    for (program_type, day), template in PROGRAM_TEMPLATES.items():
        click.echo(f"{program_type} day {day}: {template.title}")
        for section in template.sections:
            click.echo(f"  {section.name}: {len(section.slots)} slot(s)")
        click.echo()


@main.command("categorize")
@click.option(
    "--catalog-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON list of catalog exercises (defaults to the bundled sample catalog).",
)
@click.option("--show-empty", is_flag=True, help="Also list buckets with no exercises.")
def categorize_catalog(catalog_file: Path | None, show_empty: bool):
    """Show how a catalog partitions into movement buckets."""
    try:
        exercises = _load_catalog_file(catalog_file) if catalog_file else sample_catalog()
    except (ValidationError, json.JSONDecodeError) as e:
        _fail(str(e))

    pools = categorize(ex for ex in exercises if ex.is_active)
    placed = 0
    for bucket in BUCKETS:
        members = pools[bucket]
        placed += len(members)
        if not members and not show_empty:
            continue
        click.echo(f"{bucket}: {len(members)}")
        for ex in members:
            click.echo(f"  {ex.id}  {ex.name}")
    click.echo(f"{placed} of {len(exercises)} exercise(s) categorized.")


