"""Flashcard parsing and display."""

from __future__ import annotations

from .parser import FlashcardPair, parse_flashcards, summary_points
from .view import render_flashcards, render_summary_points

__all__ = [
    "FlashcardPair",
    "parse_flashcards",
    "summary_points",
    "render_flashcards",
    "render_summary_points",
]
