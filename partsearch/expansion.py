from __future__ import annotations

"""
Query expansion: raw tokens -> synonym closure, with typo recovery.

A token that is itself a concept key pulls in all its surface forms. Any
token of FUZZY_MIN_TOKEN_LEN characters or more that sits within
FUZZY_MAX_DISTANCE edits of a surface form pulls in that concept too, so
"raditeur" still finds the radiator family while "an" never fuzzes into a
dozen short stems.
"""

from typing import Iterable, Mapping, Sequence, Set

from rapidfuzz.distance import Levenshtein

from .config import FUZZY_MAX_DISTANCE, FUZZY_MIN_TOKEN_LEN
from .constants import SYNONYMS


def levenshtein(a: str, b: str) -> int:
    """Insert/delete/substitute edit distance."""
    return Levenshtein.distance(a, b)


def fuzzy_concepts(
    token: str,
    synonyms: Mapping[str, Sequence[str]] = SYNONYMS,
    max_distance: int = FUZZY_MAX_DISTANCE,
) -> Set[str]:
    """Concept keys with at least one surface form close enough to ``token``."""
    if len(token) < FUZZY_MIN_TOKEN_LEN:
        return set()
    return {
        key
        for key, forms in synonyms.items()
        if any(
            Levenshtein.distance(token, form, score_cutoff=max_distance) <= max_distance
            for form in forms
        )
    }


def expand_tokens(
    raw_tokens: Iterable[str],
    synonyms: Mapping[str, Sequence[str]] = SYNONYMS,
) -> Set[str]:
    """
    Expand raw query tokens. The result always contains every raw token.

    Only raw tokens are expanded; forms added along the way are not expanded
    again (one hop, no transitive closure).
    """
    expanded: Set[str] = set()
    for token in dict.fromkeys(raw_tokens):
        expanded.add(token)
        if token in synonyms:
            expanded.update(synonyms[token])
        for key in fuzzy_concepts(token, synonyms):
            expanded.add(key)
            expanded.update(synonyms[key])
    return expanded
