"""Application configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from broadside.game.ai.difficulty import DIFFICULTIES, Difficulty
from broadside.game.core.models import BOARD_SIZE

DEFAULT_ENV_FILES: tuple[str, ...] = (".env.app", ".env.app.local")


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Runtime settings resolved from the environment."""

    board_size: int = BOARD_SIZE
    difficulty: Difficulty = Difficulty.EASY
    seed: int | None = None


def parse_env_text(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines; later keys win.

    Blank lines, ``#`` comments and lines without ``=`` are skipped. An
    ``export`` prefix is accepted and one pair of matching quotes is stripped.
    """
    values: dict[str, str] = {}
    for line in (raw.strip() for raw in text.splitlines()):
        if line.startswith("export "):
            line = line.removeprefix("export ").lstrip()
        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key or key.startswith("#"):
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Copy the values of an env file into ``os.environ``; a missing file is skipped."""
    env_path = Path(path)
    if not env_path.is_file():
        return
    for key, value in parse_env_text(env_path.read_text(encoding="utf-8")).items():
        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files in order; later files win."""
    for path in tuple(paths) if paths is not None else DEFAULT_ENV_FILES:
        load_env_file(path, override_existing=override_existing)


def load_game_config(environ: Mapping[str, str] | None = None) -> GameConfig:
    """Resolve ``GameConfig`` from ``BROADSIDE_*`` variables."""
    env = os.environ if environ is None else environ
    return GameConfig(
        board_size=_int_setting(env, "BROADSIDE_BOARD_SIZE", BOARD_SIZE, minimum=1),
        difficulty=_difficulty_setting(env, "BROADSIDE_DIFFICULTY"),
        seed=_optional_int_setting(env, "BROADSIDE_SEED"),
    )


def _int_setting(env: Mapping[str, str], name: str, default: int, *, minimum: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}.")
    return value


def _optional_int_setting(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc


def _difficulty_setting(env: Mapping[str, str], name: str) -> Difficulty:
    raw = env.get(name, "").strip().lower()
    if not raw:
        return Difficulty.EASY
    if raw not in {item.value for item in DIFFICULTIES}:
        raise ValueError(f"{name} must be one of {', '.join(DIFFICULTIES)}, got {raw!r}.")
    return Difficulty(raw)
