from __future__ import annotations

import pytest

from study_aid.flashcards.parser import (
    FlashcardPair,
    parse_flashcards,
    summary_points,
)


def test_parses_inline_pairs_on_consecutive_lines() -> None:
    raw = "Q: What is 2+2? A: 4\nQ: Capital of France? A: Paris"

    assert parse_flashcards(raw) == [
        FlashcardPair("What is 2+2?", "4"),
        FlashcardPair("Capital of France?", "Paris"),
    ]


def test_answer_spans_lines_until_next_question() -> None:
    raw = (
        "Q: Name the stages of mitosis.\n"
        "A: Prophase, metaphase,\n"
        "anaphase and telophase.\n"
        "Q: Where is DNA stored?\n"
        "A: In the nucleus.\n"
    )

    cards = parse_flashcards(raw)

    assert [card.question for card in cards] == [
        "Name the stages of mitosis.",
        "Where is DNA stored?",
    ]
    assert cards[0].answer == "Prophase, metaphase,\nanaphase and telophase."
    assert cards[1].answer == "In the nucleus."


def test_question_on_its_own_line_is_trimmed() -> None:
    cards = parse_flashcards("Q:   What is H2O?   \nA:   Water   ")

    assert cards == [FlashcardPair("What is H2O?", "Water")]


def test_handles_windows_line_endings() -> None:
    raw = "Q: One? A: 1\r\nQ: Two? A: 2\r\n"

    assert parse_flashcards(raw) == [
        FlashcardPair("One?", "1"),
        FlashcardPair("Two?", "2"),
    ]


def test_falls_back_to_blank_line_blocks_with_lowercase_markers() -> None:
    raw = "q: What is H2O?\na: Water\n\nq: Largest planet?\na: Jupiter"

    assert parse_flashcards(raw) == [
        FlashcardPair("What is H2O?", "Water"),
        FlashcardPair("Largest planet?", "Jupiter"),
    ]


def test_fallback_skips_blocks_missing_a_side() -> None:
    raw = (
        "Intro text without markers\n\n"
        "q: Kept?\na: yes\n\n\n"
        "q: No answer here\n\n"
        "q:\na: question is empty\n\n"
        "a: answer before q: nothing after"
    )

    assert parse_flashcards(raw) == [FlashcardPair("Kept?", "yes")]


def test_fallback_accepts_whitespace_only_separator_lines() -> None:
    raw = "q: First?\na: one\n   \nq: Second?\na: two"

    assert parse_flashcards(raw) == [
        FlashcardPair("First?", "one"),
        FlashcardPair("Second?", "two"),
    ]


def test_fallback_not_used_without_blank_lines() -> None:
    assert parse_flashcards("q: lonely?\na: single block") == []


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "Just a paragraph of notes.", "one\n\ntwo\n\nthree", None, 42],
)
def test_unrecognized_input_returns_empty_list(raw) -> None:
    assert parse_flashcards(raw) == []


def test_summary_points_strip_bullets_and_blank_lines() -> None:
    summary = "- First point\n\n* Second point\n   Third point  \n-\n"

    assert summary_points(summary) == [
        "First point",
        "Second point",
        "Third point",
        "-",
    ]


def test_summary_points_non_string() -> None:
    assert summary_points(None) == []  # type: ignore[arg-type]
