"""Runtime settings resolved from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from affidavit.core.utils import load_env_file

DEFAULT_ENV_FILE = Path("secrets/affidavit.env")
DEFAULT_TEMPLATE_LOCATION = "templates/NAPPS-Affidavit form filled.pdf"
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_FETCH_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    """Locations and limits used by a generation run."""

    template_location: str = DEFAULT_TEMPLATE_LOCATION
    output_dir: Path = DEFAULT_OUTPUT_DIR
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT


def load_settings() -> Settings:
    """Build settings from environment variables, seeding them from the env file first."""

    env_path = Path(os.getenv("AFFIDAVIT_ENV_FILE", DEFAULT_ENV_FILE))
    load_env_file(env_path)

    timeout_raw = os.getenv("AFFIDAVIT_FETCH_TIMEOUT", "")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_FETCH_TIMEOUT
    except ValueError:
        raise ValueError(f"AFFIDAVIT_FETCH_TIMEOUT must be a number, got {timeout_raw!r}") from None

    return Settings(
        template_location=os.getenv("AFFIDAVIT_TEMPLATE", DEFAULT_TEMPLATE_LOCATION),
        output_dir=Path(os.getenv("AFFIDAVIT_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))),
        fetch_timeout=timeout,
    )
