"""Plain-text extraction for the documents fed to the summarizer.

PDF conversion is delegated to ``markitdown``; text and Markdown files are
read as-is. The ``converter`` seam lets callers and tests swap the PDF
backend without touching the filesystem logic.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

__all__ = [
    "DocumentError",
    "SUPPORTED_EXTENSIONS",
    "extract_text",
    "markitdown_converter",
]

PdfConverter = Callable[[Path], str]

_TEXT_EXTENSIONS: frozenset[str] = frozenset({"txt", "md", "markdown"})
SUPPORTED_EXTENSIONS: frozenset[str] = _TEXT_EXTENSIONS | {"pdf"}
DEFAULT_MAX_CHARS = 5000


class DocumentError(RuntimeError):
    """Raised when a document cannot be turned into text."""


def markitdown_converter() -> PdfConverter:
    """Return a PDF converter backed by ``markitdown.MarkItDown``."""

    from markitdown import MarkItDown

    engine = MarkItDown()

    def convert(source: Path) -> str:
        text = _coerce_text_result(engine.convert(str(source)))
        if text is None:
            raise DocumentError(
                "markitdown returned an unsupported response; expected text."
            )
        return text

    return convert


def _coerce_text_result(result: object) -> Optional[str]:
    if isinstance(result, str):
        return result
    # Newer markitdown releases expose ``markdown``; older ones only
    # ``text_content``.
    for attribute in ("markdown", "text_content"):
        value = getattr(result, attribute, None)
        if isinstance(value, str):
            return value
    return None


def extract_text(
    path: Path,
    *,
    max_chars: int = DEFAULT_MAX_CHARS,
    converter: Optional[PdfConverter] = None,
) -> str:
    """Return the text of ``path`` truncated to ``max_chars`` characters."""

    source = Path(path).expanduser()
    if not source.is_file():
        raise DocumentError(f"File not found: {source}")
    extension = source.suffix.lower().lstrip(".")
    if extension not in SUPPORTED_EXTENSIONS:
        expected = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise DocumentError(
            f"Unsupported file type '.{extension}'. Expected one of: "
            f"{expected}."
        )

    if extension in _TEXT_EXTENSIONS:
        try:
            text = source.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise DocumentError(f"Could not read {source}: {exc}") from exc
    else:
        convert = converter or markitdown_converter()
        try:
            text = convert(source)
        except DocumentError:
            raise
        except Exception as exc:
            raise DocumentError(
                f"Could not read text from {source.name}: {exc}"
            ) from exc

    text = text.strip()
    if not text:
        raise DocumentError(f"No text could be extracted from {source.name}.")
    return text[:max_chars]
