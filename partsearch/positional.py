from __future__ import annotations

"""
Positional qualifiers: front/rear, left/right, upper/lower, interior/exterior.

Catalog designations are not order-consistent ("AMORTISSEUR AV G",
"amortisseur gauche avant", "FEU AR-D"), so the front/rear and left/right
poles also match a qualifier glued to one of the other axis' qualifiers, in
either order. Upper/lower/interior/exterior only ever appear as plain words.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

from .normalize import normalize, tokenize

_FRONT_REAR_WORDS: Tuple[str, ...] = ("avant", "av", "arriere", "ar")
_LEFT_RIGHT_WORDS: Tuple[str, ...] = ("droite", "gauche", "d", "g")


def _adjacency_pattern(own: Sequence[str], partners: Sequence[str]) -> Pattern[str]:
    """``<partner> <own>`` or ``<own> <partner>``, space or dash separated."""
    own_alt = "|".join(own)
    partner_alt = "|".join(partners)
    return re.compile(
        rf"\b(?:{partner_alt})[\s-]+(?:{own_alt})\b"
        rf"|\b(?:{own_alt})[\s-]+(?:{partner_alt})\b"
    )


@dataclass(frozen=True)
class PoleDetector:
    """
    One side of an axis, e.g. "front".

    ``query_terms``: tokens that express the wish in an expanded query.
    ``exact``: short forms that only count as a whole designation token.
    ``stems``: forms that count when contained in a designation token.
    ``adjacency``: optional both-order pattern against the other axis.
    """

    name: str
    query_terms: Tuple[str, ...]
    exact: Tuple[str, ...] = ()
    stems: Tuple[str, ...] = ()
    adjacency: Optional[Pattern[str]] = field(default=None, compare=False)

    def adjacent_in(self, text: str) -> bool:
        return bool(self.adjacency is not None and self.adjacency.search(text))

    def wanted_by(self, raw_tokens: Sequence[str], expanded_tokens: Iterable[str]) -> bool:
        expanded = set(expanded_tokens)
        if any(term in expanded for term in self.query_terms):
            return True
        return self.adjacent_in(" ".join(raw_tokens))

    def present_in(self, designation_tokens: Sequence[str], designation_norm: str) -> bool:
        for tok in designation_tokens:
            if tok in self.exact:
                return True
            if any(stem in tok for stem in self.stems):
                return True
        return self.adjacent_in(designation_norm)


FRONT = PoleDetector(
    name="front",
    query_terms=("avant", "av"),
    exact=("av",),
    stems=("avant",),
    adjacency=_adjacency_pattern(("avant", "av"), _LEFT_RIGHT_WORDS),
)
REAR = PoleDetector(
    name="rear",
    query_terms=("arriere", "arrière", "ar"),
    exact=("ar",),
    stems=("arriere",),
    adjacency=_adjacency_pattern(("arriere", "ar"), _LEFT_RIGHT_WORDS),
)
LEFT = PoleDetector(
    name="left",
    query_terms=("gauche", "g", "conducteur"),
    exact=("g",),
    stems=("gauche", "conducteur"),
    adjacency=_adjacency_pattern(("gauche", "g"), _FRONT_REAR_WORDS),
)
RIGHT = PoleDetector(
    name="right",
    query_terms=("droite", "d", "passager"),
    exact=("d",),
    stems=("droite", "droit", "passager"),
    adjacency=_adjacency_pattern(("droite", "d"), _FRONT_REAR_WORDS),
)
UPPER = PoleDetector(name="upper", query_terms=("superieur", "supérieur"), stems=("superieur",))
LOWER = PoleDetector(name="lower", query_terms=("inferieur", "inférieur"), stems=("inferieur",))
INTERIOR = PoleDetector(name="interior", query_terms=("interieur", "intérieur"), stems=("interieur",))
EXTERIOR = PoleDetector(name="exterior", query_terms=("exterieur", "extérieur"), stems=("exterieur",))

POLES: Tuple[PoleDetector, ...] = (FRONT, REAR, LEFT, RIGHT, UPPER, LOWER, INTERIOR, EXTERIOR)

# (pole, opposite pole) per axis
AXES: Tuple[Tuple[PoleDetector, PoleDetector], ...] = (
    (FRONT, REAR),
    (LEFT, RIGHT),
    (UPPER, LOWER),
    (INTERIOR, EXTERIOR),
)


@dataclass(frozen=True)
class Positions:
    """Eight flags, one per pole."""

    front: bool = False
    rear: bool = False
    left: bool = False
    right: bool = False
    upper: bool = False
    lower: bool = False
    interior: bool = False
    exterior: bool = False

    def flag(self, pole: str) -> bool:
        return bool(getattr(self, pole))

    def active(self) -> List[str]:
        return [p.name for p in POLES if self.flag(p.name)]


def query_positions(raw_tokens: Sequence[str], expanded_tokens: Iterable[str]) -> Positions:
    """What the query asks for (``wants_*``)."""
    expanded = set(expanded_tokens)
    return Positions(**{p.name: p.wanted_by(raw_tokens, expanded) for p in POLES})


def designation_positions(designation: str) -> Positions:
    """What a catalog designation states (``has_*``)."""
    norm = normalize(designation)
    tokens = tokenize(designation)
    return Positions(**{p.name: p.present_in(tokens, norm) for p in POLES})
