"""Summaries, flashcards and quizzes generated from study documents."""
