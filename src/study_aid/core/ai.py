"""OpenAI client helpers shared by the summarizer and quiz generator."""

from __future__ import annotations

import json
import os
import re
from typing import Any

from dotenv import load_dotenv
from openai import OpenAI

__all__ = [
    "AIRequestError",
    "chat_completion_content",
    "extract_json_payload",
    "load_client",
]

_FENCED_RE = re.compile(r"```(?:json)?\s*(.+?)```", re.DOTALL)


class AIRequestError(RuntimeError):
    """Raised when the chat completion call fails or returns nothing."""


def load_client() -> Any:
    """Initialize an OpenAI client using environment-derived credentials."""
    load_dotenv()
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise RuntimeError(
            "OPENAI_API_KEY not found in environment. Set it or add to .env"
        )
    return OpenAI(api_key=api_key)


def chat_completion_content(
    client: Any,
    *,
    model: str,
    system_prompt: str,
    user_prompt: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """Run a single chat completion and return the stripped message text."""

    try:
        resp = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        raw_content = resp.choices[0].message.content
    except Exception as exc:
        raise AIRequestError(f"Chat completion failed: {exc}") from exc
    content = (raw_content or "").strip()
    if not content:
        raise AIRequestError("Chat completion returned an empty response.")
    return content


def extract_json_payload(content: str) -> Any:
    """Decode JSON from model output, unwrapping a Markdown code fence.

    Returns ``None`` when the payload is not valid JSON.
    """
    if not content:
        return None
    fenced = _FENCED_RE.search(content)
    payload = fenced.group(1) if fenced else content
    try:
        return json.loads(payload)
    except ValueError:
        return None
