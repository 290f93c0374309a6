from __future__ import annotations

import json

import pytest

from study_aid.flashcards.parser import FlashcardPair
from study_aid.summarize import (
    Summary,
    SummarizationError,
    read_summary,
    summarize_document,
    write_summary,
)


PAYLOAD = {
    "summary": "- Cells are the unit of life.\n- DNA stores genes.",
    "flashcards": "Q: What stores genes? A: DNA\nQ: Unit of life? A: The cell",
}


def test_summarize_document_parses_json_reply(chat_client) -> None:
    chat_client.queue_json(PAYLOAD, fenced=True)

    summary = summarize_document(
        "Biology chapter one.",
        client=chat_client,
        model="test-model",
        temperature=0.1,
        max_tokens=800,
    )

    assert summary.points() == [
        "Cells are the unit of life.",
        "DNA stores genes.",
    ]
    assert summary.cards() == [
        FlashcardPair("What stores genes?", "DNA"),
        FlashcardPair("Unit of life?", "The cell"),
    ]
    call = chat_client.calls[0]
    assert call["model"] == "test-model"
    assert call["temperature"] == 0.1
    assert call["max_tokens"] == 800
    assert "Biology chapter one." in chat_client.last_user_prompt


def test_flashcard_lists_are_joined(chat_client) -> None:
    chat_client.queue_json(
        {"summary": "- Point", "flashcards": ["Q: One? A: 1", "Q: Two? A: 2"]}
    )

    summary = summarize_document("Text", client=chat_client)

    assert [card.answer for card in summary.cards()] == ["1", "2"]


def test_flashcard_objects_become_question_answer_lines(chat_client) -> None:
    chat_client.queue_json(
        {
            "summary": "- Point",
            "flashcards": [
                {"question": "Unit of life?", "answer": "The cell"},
                {"question": "Gene store?", "answer": "DNA"},
            ],
        }
    )

    summary = summarize_document("Text", client=chat_client)

    assert summary.flashcards == (
        "Q: Unit of life? A: The cell\nQ: Gene store? A: DNA"
    )
    assert summary.cards() == [
        FlashcardPair("Unit of life?", "The cell"),
        FlashcardPair("Gene store?", "DNA"),
    ]


def test_empty_text_is_rejected_without_request(chat_client) -> None:
    with pytest.raises(SummarizationError):
        summarize_document("  ", client=chat_client)

    assert chat_client.calls == []


@pytest.mark.parametrize(
    "response",
    ["plain prose", "[1, 2, 3]", '{"flashcards": "Q: a A: b"}'],
)
def test_unusable_reply_raises(chat_client, response) -> None:
    chat_client.queue_response(response)

    with pytest.raises(SummarizationError):
        summarize_document("Text", client=chat_client)


def test_client_error_is_wrapped(chat_client) -> None:
    def boom(_kwargs):
        raise TimeoutError("request timed out")

    chat_client.side_effect = boom

    with pytest.raises(SummarizationError, match="timed out"):
        summarize_document("Text", client=chat_client)


def test_missing_api_key_is_reported(monkeypatch) -> None:
    monkeypatch.setattr("study_aid.core.ai.load_dotenv", lambda: False)

    with pytest.raises(SummarizationError, match="OPENAI_API_KEY"):
        summarize_document("Text")


def test_write_and_read_summary(tmp_path) -> None:
    summary = Summary.from_dict(PAYLOAD)

    saved = write_summary(tmp_path / "out" / "bio.json", summary)

    assert json.loads(saved.read_text(encoding="utf-8")) == PAYLOAD
    assert read_summary(saved) == summary


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"summary": ""}), json.dumps(["list"])],
)
def test_read_summary_rejects_bad_files(workspace, content) -> None:
    path = workspace.write("summary.json", content)

    with pytest.raises(SummarizationError):
        read_summary(path)


def test_read_summary_missing_file(tmp_path) -> None:
    with pytest.raises(SummarizationError, match="Could not load summary"):
        read_summary(tmp_path / "missing.json")
