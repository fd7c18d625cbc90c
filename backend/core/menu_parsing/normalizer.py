"""Text normalization for OCR and PDF extracted menu text."""

import re
import unicodedata

# Applied in order; "\r\n" must precede "\r".
REPLACEMENTS = [
    ("\r\n", "\n"),
    ("\r", "\n"),
    ("\u2028", "\n"),  # line separator
    ("\u2029", "\n"),  # paragraph separator
    ("\u0085", "\n"),  # next line
    ("\u2018", "'"),
    ("\u2019", "'"),
    ("\u201a", "'"),
    ("\u201b", "'"),
    ("\u2032", "'"),
    ("\u201c", '"'),
    ("\u201d", '"'),
    ("\u201e", '"'),
    ("\u201f", '"'),
    ("\u2033", '"'),
    ("\u2012", "-"),  # figure dash
    ("\u2013", "-"),  # en dash
    ("\u2014", "-"),  # em dash
    ("\u2015", "-"),  # horizontal bar
    ("\u2212", "-"),  # minus sign
    ("\u2026", "..."),
]

# No-break space, ogham space, the U+2000 block (spaces, zero-width and
# direction marks), narrow no-break, math space, ideographic space, BOM.
EXOTIC_SPACES = re.compile("[\u00a0\u1680\u2000-\u200f\u202f\u205f\u3000\ufeff]")


def normalize_text(text: str) -> str:
    """
    Canonicalize punctuation, whitespace and Unicode variants.

    Total over strings: any input, including an empty one, yields a string.
    """
    if not text:
        return ""
    text = unicodedata.normalize("NFC", text)
    for old, new in REPLACEMENTS:
        text = text.replace(old, new)
    text = EXOTIC_SPACES.sub(" ", text)
    return text.strip()
