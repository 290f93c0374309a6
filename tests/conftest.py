from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

ROOT = TESTS_DIR.parent
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from fixtures import FakeChatClient, WorkspaceBuilder  # noqa: E402

from study_aid.quiz import QuizQuestion  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Point the workspace at a per-test directory and drop env overrides."""

    for key in (
        "STUDY_AID_CONFIG",
        "STUDY_AID_MODEL",
        "STUDY_AID_NUM_QUESTIONS",
        "STUDY_AID_MAX_CHARS",
        "STUDY_AID_LOG_LEVEL",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)
    home = tmp_path / "study-aid-home"
    monkeypatch.setenv("STUDY_AID_HOME", str(home))
    yield home


@pytest.fixture(autouse=True)
def _release_log_handlers() -> Iterator[None]:
    yield
    for name in list(logging.Logger.manager.loggerDict):
        if not name.startswith("study_aid"):
            continue
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


@pytest.fixture
def chat_client() -> FakeChatClient:
    """A fresh fake OpenAI client with no queued responses."""

    return FakeChatClient()


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    return WorkspaceBuilder(tmp_path)


@pytest.fixture
def three_questions() -> list[QuizQuestion]:
    return [
        QuizQuestion("What is 2+2?", ("3", "4", "5"), 1),
        QuizQuestion("Capital of France?", ("Paris", "Rome"), 0),
        QuizQuestion("Largest planet?", ("Mars", "Venus", "Jupiter"), 2),
    ]
