import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_env(env_path: Optional[Path] = None) -> None:
    """Load .env from the working directory if present.

    Variables already set in the environment win over the file.
    """
    env_path = env_path or Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def _optional_int(environ: Mapping[str, str], key: str, minimum: int) -> Optional[int]:
    raw = environ.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")
    if value < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {value}")
    return value


def _optional_float(environ: Mapping[str, str], key: str) -> Optional[float]:
    raw = environ.get(key, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


class LookupSettings:
    """
    Runtime knobs for lookups.

    Attributes:
        log_level: Console log level
        log_dir: Directory for dated log files; file logging is off when None
        workers: Threads used to score rows (1 = sequential scan)
        max_candidates: Stop after this many non-empty keys (None = all rows)
        deadline_seconds: Abort a scan that runs longer than this (None = no limit)
    """

    def __init__(
        self,
        log_level: str = "WARNING",
        log_dir: Optional[str] = None,
        workers: int = 1,
        max_candidates: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
    ):
        self.log_level = log_level
        self.log_dir = log_dir
        self.workers = workers
        self.max_candidates = max_candidates
        self.deadline_seconds = deadline_seconds

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LookupSettings":
        environ = os.environ if environ is None else environ

        level = environ.get("FUZZYLOOKUP_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
        if level not in LOG_LEVELS:
            raise ValueError(f"FUZZYLOOKUP_LOG_LEVEL must be one of {sorted(LOG_LEVELS)}, got {level!r}")

        return cls(
            log_level=level,
            log_dir=environ.get("FUZZYLOOKUP_LOG_DIR", "").strip() or None,
            workers=_optional_int(environ, "FUZZYLOOKUP_WORKERS", 1) or 1,
            max_candidates=_optional_int(environ, "FUZZYLOOKUP_MAX_CANDIDATES", 1),
            deadline_seconds=_optional_float(environ, "FUZZYLOOKUP_DEADLINE_SECONDS"),
        )

    def __repr__(self) -> str:
        return (
            f"LookupSettings(log_level={self.log_level!r}, log_dir={self.log_dir!r}, "
            f"workers={self.workers}, max_candidates={self.max_candidates}, "
            f"deadline_seconds={self.deadline_seconds})"
        )
