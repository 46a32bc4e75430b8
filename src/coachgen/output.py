"""Output handlers: JSON-ready records, JSON file and API publishing.

A program record carries ``sections`` as a list of section dicts. Some
workout backends only accept ``sections`` as a JSON string, so the
publisher falls back to that form when the structured payload is rejected,
and load_sections() reads either form back.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

import httpx

from coachgen.models import GeneratedProgram, ResolvedExercise, Section

logger = logging.getLogger(__name__)

REJECTED_PAYLOAD_STATUSES = (400, 422)
MAX_ATTEMPTS = 5


def exercise_to_dict(exercise: ResolvedExercise) -> dict[str, Any]:
    return {
        "exercise_id": exercise.exercise_id,
        "name": exercise.name,
        "sets": exercise.sets,
        "reps": exercise.reps,
        "rest_seconds": exercise.rest_seconds,
        "instruction": exercise.instruction,
        "weight": exercise.weight,
        "source": exercise.source,
    }


def section_to_dict(section: Section) -> dict[str, Any]:
    return {
        "name": section.name,
        "exercises": [exercise_to_dict(ex) for ex in section.exercises],
    }


def program_to_record(program: GeneratedProgram) -> dict[str, Any]:
    """Convert a generated program to the workout-store record format."""
    return {
        "user_id": program.user_id,
        "title": program.title,
        "description": program.description,
        "date": program.date.isoformat(),
        "duration": program.duration,
        "sections": [section_to_dict(section) for section in program.sections],
        "notes": program.notes,
        "program_type": program.program_type,
        "day": program.day,
        "corrections": list(program.corrections),
        "placeholder_count": program.placeholder_count,
    }


def load_sections(value: str | list[dict[str, Any]] | None) -> list[Section]:
    """Read stored sections back, whether stored as a document or as JSON text."""
    if value is None:
        return []
    raw = json.loads(value) if isinstance(value, str) else value
    if not isinstance(raw, list):
        raise ValueError(f"sections must be a list, got {type(raw).__name__}")

    sections: list[Section] = []
    for item in raw:
        exercises = [
            ResolvedExercise(
                exercise_id=str(ex["exercise_id"]),
                name=ex["name"],
                sets=int(ex["sets"]),
                reps=str(ex["reps"]),
                rest_seconds=int(ex["rest_seconds"]),
                instruction=ex.get("instruction"),
                weight=ex.get("weight"),
                source=ex.get("source", "catalog"),
            )
            for ex in item.get("exercises", [])
        ]
        sections.append(Section(name=item["name"], exercises=exercises))
    return sections


def write_json(program: GeneratedProgram, output_path: str | Path) -> Path:
    """Write the program record to a JSON file and return the path."""
    path = Path(output_path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(program_to_record(program), f, indent=2, ensure_ascii=False)
    return path


def _as_text_sections(record: dict[str, Any]) -> dict[str, Any]:
    return {**record, "sections": json.dumps(record["sections"], ensure_ascii=False)}


def publish_program(
    program: GeneratedProgram,
    base_url: str,
    api_key: str,
    *,
    transport: httpx.BaseTransport | None = None,
    backoff_seconds: float = 1.0,
) -> dict[str, Any]:
    """POST the program to /v1/workouts.

    Returns summary: {"status": int | None, "stored_as": "json" | "text" | None,
    "workout_id": str | None, "errors": [...]}
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    record = program_to_record(program)
    payloads = [("json", record), ("text", _as_text_sections(record))]

    status: int | None = None
    errors: list[str] = []

    with httpx.Client(base_url=base_url, timeout=30.0, transport=transport) as client:
        for stored_as, payload in payloads:
            for attempt in range(MAX_ATTEMPTS):
                try:
                    resp = client.post("/v1/workouts", json=payload, headers=headers)
                except httpx.HTTPError as e:
                    if attempt == MAX_ATTEMPTS - 1:
                        errors.append(f"{stored_as}: {e}")
                        return _summary(None, None, None, errors)
                    time.sleep(backoff_seconds)
                    continue

                status = resp.status_code
                if status == 429:
                    time.sleep(backoff_seconds * (attempt + 1))
                    continue
                if status in (200, 201):
                    return _summary(status, stored_as, _workout_id(resp), errors)
                if status in REJECTED_PAYLOAD_STATUSES and stored_as == "json":
                    logger.warning(
                        "Structured sections rejected (HTTP %d), retrying as JSON text",
                        status,
                        extra={"coachgen_user_id": program.user_id},
                    )
                    errors.append(f"json: HTTP {status} {resp.text[:200]}")
                    break
                errors.append(f"{stored_as}: HTTP {status} {resp.text[:200]}")
                return _summary(status, None, None, errors)
            else:
                errors.append(f"{stored_as}: gave up after {MAX_ATTEMPTS} attempts (HTTP {status})")
                return _summary(status, None, None, errors)

    return _summary(status, None, None, errors)


def _workout_id(resp: httpx.Response) -> str | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("id") is not None:
        return str(body["id"])
    return None


def _summary(
    status: int | None, stored_as: str | None, workout_id: str | None, errors: list[str],
) -> dict[str, Any]:
    return {
        "status": status,
        "stored_as": stored_as,
        "workout_id": workout_id,
        "errors": errors,
    }
