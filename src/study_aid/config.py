"""Configuration loader shared by the study-aid commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from study_aid.core import config as core_config
from study_aid.core import workspace as workspace_mod

CONFIG_FILENAME = "study_aid.toml"
CONFIG_ENV = "STUDY_AID_CONFIG"
ENV_PREFIX = "STUDY_AID_"

MIN_QUESTIONS = 1
MAX_QUESTIONS = 20

CONFIG_TEMPLATE = """\
# study-aid configuration

[ai]
# OpenAI chat model used for summaries and quizzes
model = "gpt-4o-mini"
temperature = 0.2
max_tokens = 1500

[quiz]
# Default number of questions per generated quiz (1-20)
num_questions = 5

[documents]
# Extracted document text is truncated to this many characters
max_chars = 5000

[logging]
level = "INFO"
"""


class StudyAidConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class AIConfig:
    model: str
    temperature: float
    max_tokens: int


@dataclass(frozen=True)
class StudyAidConfig:
    """Fully resolved configuration for a command run."""

    ai: AIConfig
    num_questions: int
    max_chars: int
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of env and file options."""

    model: Optional[str] = None
    num_questions: Optional[int] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: StudyAidConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML > defaults.

    A missing default config file is fine; a missing file that was asked for
    explicitly (``--config`` or ``STUDY_AID_CONFIG``) is an error.
    """

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(
            env=env_map, path=workspace_path
        )
    except workspace_mod.WorkspaceError as exc:
        raise StudyAidConfigError(str(exc)) from exc

    explicit = config_path is not None or bool(
        (env_map.get(CONFIG_ENV) or "").strip()
    )
    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )

    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested_path.exists():
        try:
            parsed = core_config.load_toml(requested_path)
            core_config.merge_defaults(table, parsed)
        except core_config.TomlConfigError as exc:
            raise StudyAidConfigError(str(exc)) from exc
        loaded_path = requested_path
    elif explicit:
        raise StudyAidConfigError(f"Config file not found: {requested_path}")

    model = _require_str(
        _pick_first(
            overrides.model,
            _env_string(env_map, "MODEL"),
            table["ai"]["model"],
        ),
        "ai.model",
    )
    temperature = table["ai"]["temperature"]
    if isinstance(temperature, bool) or not isinstance(
        temperature, (int, float)
    ):
        raise StudyAidConfigError("ai.temperature must be a number.")
    max_tokens = _require_positive_int(
        table["ai"]["max_tokens"], "ai.max_tokens"
    )

    num_questions = _require_positive_int(
        _pick_first(
            overrides.num_questions,
            _env_int(env_map, "NUM_QUESTIONS"),
            table["quiz"]["num_questions"],
        ),
        "quiz.num_questions",
    )
    if num_questions > MAX_QUESTIONS:
        raise StudyAidConfigError(
            f"quiz.num_questions must be between {MIN_QUESTIONS} and "
            f"{MAX_QUESTIONS}."
        )

    max_chars = _require_positive_int(
        _pick_first(
            _env_int(env_map, "MAX_CHARS"), table["documents"]["max_chars"]
        ),
        "documents.max_chars",
    )

    log_level = _require_str(
        _pick_first(
            overrides.log_level,
            _env_string(env_map, "LOG_LEVEL"),
            table["logging"]["level"],
        ),
        "logging.level",
    ).upper()

    config = StudyAidConfig(
        ai=AIConfig(
            model=model,
            temperature=float(temperature),
            max_tokens=max_tokens,
        ),
        num_questions=num_questions,
        max_chars=max_chars,
        log_level=log_level,
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, Any]]:
    return {
        "ai": {"model": "gpt-4o-mini", "temperature": 0.2, "max_tokens": 1500},
        "quiz": {"num_questions": 5},
        "documents": {"max_chars": 5000},
        "logging": {"level": "INFO"},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = (env_map.get(CONFIG_ENV) or "").strip()
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _env_int(env_map: Mapping[str, str], key: str) -> Optional[int]:
    raw = _env_string(env_map, key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise StudyAidConfigError(
            f"{ENV_PREFIX}{key} must be an integer, got '{raw}'."
        ) from exc


def _require_str(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise StudyAidConfigError(f"{name} must be a non-empty string.")
    return value.strip()


def _require_positive_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise StudyAidConfigError(f"{name} must be a positive integer.")
    return value


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
