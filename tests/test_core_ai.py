from __future__ import annotations

import pytest

from study_aid.core import ai
from study_aid.core.ai import (
    AIRequestError,
    chat_completion_content,
    extract_json_payload,
    load_client,
)


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ai, "load_dotenv", lambda: False)


def test_load_client_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(RuntimeError) as exc:
        load_client()

    assert "OPENAI_API_KEY" in str(exc.value)


def test_load_client_passes_key(monkeypatch: pytest.MonkeyPatch) -> None:
    created = {}

    def fake_openai(**kwargs):
        created.update(kwargs)
        return "client"

    monkeypatch.setattr(ai, "OpenAI", fake_openai)
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")

    assert load_client() == "client"
    assert created == {"api_key": "test-key"}


def test_chat_completion_sends_system_and_user_messages(chat_client) -> None:
    chat_client.queue_response("  answer text \n")

    content = chat_completion_content(
        chat_client,
        model="m",
        system_prompt="sys",
        user_prompt="usr",
        temperature=0.3,
        max_tokens=10,
    )

    assert content == "answer text"
    assert chat_client.calls == [
        {
            "model": "m",
            "messages": [
                {"role": "system", "content": "sys"},
                {"role": "user", "content": "usr"},
            ],
            "temperature": 0.3,
            "max_tokens": 10,
        }
    ]


@pytest.mark.parametrize("reply", [None, "", "   "])
def test_chat_completion_rejects_empty_reply(chat_client, reply) -> None:
    chat_client.queue_response(reply)

    with pytest.raises(AIRequestError, match="empty"):
        chat_completion_content(
            chat_client,
            model="m",
            system_prompt="s",
            user_prompt="u",
            temperature=0,
            max_tokens=1,
        )


def test_chat_completion_wraps_client_errors(chat_client) -> None:
    def boom(_kwargs):
        raise ValueError("rate limited")

    chat_client.side_effect = boom

    with pytest.raises(AIRequestError, match="rate limited"):
        chat_completion_content(
            chat_client,
            model="m",
            system_prompt="s",
            user_prompt="u",
            temperature=0,
            max_tokens=1,
        )


@pytest.mark.parametrize(
    "content, expected",
    [
        ('{"a": 1}', {"a": 1}),
        ('```json\n{"a": 2}\n```', {"a": 2}),
        ('Here you go:\n```\n[1, 2]\n```\nEnjoy.', [1, 2]),
        ("not json", None),
        ("", None),
    ],
)
def test_extract_json_payload(content, expected) -> None:
    assert extract_json_payload(content) == expected
