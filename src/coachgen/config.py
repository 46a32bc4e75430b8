import os
from dataclasses import dataclass, field

from coachgen.logging import LOG_FORMATS
from coachgen.templates import PROGRAM_DAYS
from coachgen.weights import DEFAULT_LOAD_KG

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_program_types(raw: str) -> frozenset[str]:
    program_types = frozenset(part.strip() for part in raw.split(",") if part.strip())
    unknown = sorted(program_types - PROGRAM_DAYS.keys())
    if unknown:
        raise RuntimeError(
            "COACHGEN_PLACEHOLDER_ONLY_PROGRAMS has unknown program types: "
            + ", ".join(unknown)
        )
    return program_types


@dataclass(frozen=True)
class Config:
    database_url: str | None = None
    log_format: str = "json"
    log_level: str = "INFO"
    default_load_kg: float = DEFAULT_LOAD_KG
    seed: int | None = None
    placeholder_only_programs: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("COACHGEN_LOG_FORMAT", "json").strip().lower()
        if log_format not in LOG_FORMATS:
            raise RuntimeError(f"COACHGEN_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}")

        log_level = os.environ.get("COACHGEN_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise RuntimeError(f"COACHGEN_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        raw_load = os.environ.get("COACHGEN_DEFAULT_LOAD_KG", str(DEFAULT_LOAD_KG))
        try:
            default_load_kg = float(raw_load)
        except ValueError as exc:
            raise RuntimeError(f"COACHGEN_DEFAULT_LOAD_KG must be a number, got {raw_load!r}") from exc
        if default_load_kg <= 0:
            raise RuntimeError("COACHGEN_DEFAULT_LOAD_KG must be positive")

        raw_seed = os.environ.get("COACHGEN_SEED", "").strip()
        try:
            seed = int(raw_seed) if raw_seed else None
        except ValueError as exc:
            raise RuntimeError(f"COACHGEN_SEED must be an integer, got {raw_seed!r}") from exc

        return cls(
            database_url=os.environ.get("DATABASE_URL") or None,
            log_format=log_format,
            log_level=log_level,
            default_load_kg=default_load_kg,
            seed=seed,
            placeholder_only_programs=_parse_program_types(
                os.environ.get("COACHGEN_PLACEHOLDER_ONLY_PROGRAMS", "")
            ),
        )

    def require_database_url(self) -> str:
        if not self.database_url:
            raise RuntimeError("DATABASE_URL must be set")
        return self.database_url
