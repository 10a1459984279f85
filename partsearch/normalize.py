from __future__ import annotations

"""
Text normalisation helpers shared by the catalog loader and the search core.

Queries and designations must go through the same view of text, otherwise
"Amortisseur AV." and "amortisseur av" would not meet.

Public helpers:

* basic_clean(text) -> str
    Light clean used on catalog fields (keeps case and accents for display).

* normalize(text) -> str
    Matching form: lowercase, accents stripped, punctuation blanked.

* tokenize(text) -> List[str]
    normalize() then split on whitespace.
"""

from typing import List
import re
import unicodedata

from .config import MAX_INPUT_CHARS

_NON_MATCHABLE_RE = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RE = re.compile(r"\s+")


def _as_text(text) -> str:
    if text is None:
        return ""
    if not isinstance(text, str):
        # pandas hands us NaN for empty cells
        if isinstance(text, float) and text != text:
            return ""
        text = str(text)
    return text


def strip_accents(text: str) -> str:
    """Decompose (NFD) and drop combining marks: 'arrière' -> 'arriere'."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def clamp_text_length(text: str, limit: int = MAX_INPUT_CHARS) -> str:
    if len(text) > limit:
        return text[:limit]
    return text


def basic_clean(text) -> str:
    """Light-weight clean for catalog fields.

    * collapses whitespace / newlines
    * trims
    """
    text = _as_text(text)
    text = text.replace("\r", " ").replace("\n", " ").replace("\t", " ")
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize(text) -> str:
    """Normalise text for matching. Never raises; None -> ''."""
    text = _as_text(text)
    if not text:
        return ""
    text = strip_accents(text.lower())
    text = _NON_MATCHABLE_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def tokenize(text) -> List[str]:
    norm = normalize(text)
    if not norm:
        return []
    return norm.split(" ")


def normalize_query(text) -> str:
    """Query-side alias of normalize() with the input size cap applied."""
    return normalize(clamp_text_length(_as_text(text)))
