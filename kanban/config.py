from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DATA_FILE_ENV = "KANBAN_DATA_FILE"
DEFAULT_DATA_FILE = Path(".") / "tasks.json"

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _env_files(env_name: str) -> Iterator[tuple[Path, bool]]:
    """Yield (path, override) for the first base .env and the first .env.<env_name>."""
    search_dirs = [Path.cwd(), PROJECT_ROOT]
    for filename, override in ((".env", False), (f".env.{env_name}", True)):
        found = next((d / filename for d in search_dirs if (d / filename).is_file()), None)
        if found is not None:
            yield found, override


def load_env() -> None:
    # The process environment wins over .env; the per-environment file wins over .env.
    for path, override in _env_files(os.getenv("APP_ENV", "development")):
        load_dotenv(path, override=override)


@dataclass(frozen=True)
class Settings:
    data_file: Path
    data_file_from_env: bool = False
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_dir: str = "logs"


def load_settings() -> Settings:
    data_file = os.getenv(DATA_FILE_ENV, "").strip()
    port = os.getenv("KANBAN_PORT", "8080").strip()
    if not port.isdigit():
        raise RuntimeError(f"KANBAN_PORT must be an integer, got {port!r}.")

    return Settings(
        data_file=Path(data_file) if data_file else DEFAULT_DATA_FILE,
        data_file_from_env=bool(data_file),
        host=os.getenv("KANBAN_HOST", "0.0.0.0"),
        port=int(port),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("LOG_DIR", "logs"),
    )


load_env()

SETTINGS = load_settings()
