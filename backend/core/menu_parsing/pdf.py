"""PDF text extraction using pdfplumber."""

import io
from pathlib import Path

import pdfplumber


def extract_text_from_pdf(source: Path | str | bytes) -> str:
    """
    Extract text from a PDF, one page after another.

    Args:
        source: Path to a PDF file, or the raw PDF bytes of an upload

    Returns:
        Page texts joined by newlines
    """
    if isinstance(source, bytes):
        handle = io.BytesIO(source)
    else:
        handle = Path(source)
        if not handle.exists():
            raise FileNotFoundError(f"PDF not found: {handle}")

    text_parts = []
    with pdfplumber.open(handle) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                text_parts.append(text)

    return "\n".join(text_parts)
