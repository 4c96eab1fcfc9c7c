from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

REMOVAL_MODES = ("truncate", "exact")


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


@dataclass(frozen=True)
class Settings:
    # File used when a store is constructed without a path
    default_path: str

    # How Document.delete_one/delete_many remove a match:
    #   "truncate" drops the match and every record before it
    #   "exact" drops only the match
    removal_mode: str


def get_settings(env_file: str | None = None) -> Settings:
    if env_file is not None:
        load_dotenv(env_file, override=False)

    default_path = os.getenv("INSTANT_STORE_PATH", "").strip() or "database.json"
    removal_mode = _env_choice("INSTANT_STORE_REMOVAL", REMOVAL_MODES, "truncate")

    return Settings(
        default_path=default_path,
        removal_mode=removal_mode,
    )
