from __future__ import annotations

"""
Per-part relevance scoring.

The score is an ordering key, not a probability. Each signal adds to (or
takes from) one running total, in a fixed order:

  1. main part type penalty
  2. part type weights
  3. reference match
  4. all query tokens present / exact phrase
  5. positional agreement / opposition
  6. 3-char prefix and vehicle type code
  7. expanded synonym presence
  8. selected vehicle model
  9. stock availability
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from . import config
from .config import PartRecord, UNIVERSAL_MODEL
from .constants import TYPE_WEIGHTS
from .normalize import normalize, tokenize
from .positional import AXES, FRONT, LEFT, REAR, RIGHT, Positions, designation_positions, query_positions

TYPE_TAG_PREFIX = "Type courant: "
REFERENCE_EXACT_TAG = "Référence exacte"
REFERENCE_PARTIAL_TAG = "Référence partielle"
PHRASE_EXACT_TAG = "Correspondance exacte"

_REFERENCE_LIKE_RE = re.compile(r"[a-z0-9]{%d,}" % config.REFERENCE_LIKE_MIN_RUN)


def main_part_type(raw_tokens: Sequence[str]) -> Optional[str]:
    """First raw token that names a known part type (left-to-right wins)."""
    for token in raw_tokens:
        if token in TYPE_WEIGHTS:
            return token
    return None


@dataclass(frozen=True)
class QueryView:
    """Everything about the query the scorer needs, computed once per search."""

    raw_norm: str
    raw_tokens: Tuple[str, ...]
    expanded: frozenset
    main_type: Optional[str]
    wants: Positions

    @classmethod
    def build(cls, query: str, expanded_tokens: Iterable[str]) -> "QueryView":
        raw_tokens = tuple(tokenize(query))
        expanded = frozenset(expanded_tokens) | frozenset(raw_tokens)
        return cls(
            raw_norm=normalize(query),
            raw_tokens=raw_tokens,
            expanded=expanded,
            main_type=main_part_type(raw_tokens),
            wants=query_positions(raw_tokens, expanded),
        )


def _type_signals(view: QueryView, designation: str, tags: List[str]) -> float:
    score = 0.0
    if view.main_type and view.main_type not in designation:
        score -= config.MAIN_TYPE_MISMATCH_PENALTY

    for part_type, weight in TYPE_WEIGHTS.items():
        if part_type in designation:
            base = (
                config.MAIN_TYPE_BASE_SCORE
                if part_type == view.main_type
                else config.OTHER_TYPE_BASE_SCORE
            )
            score += base * weight
            tags.append(f"{TYPE_TAG_PREFIX}{part_type}")
    return score


def _reference_signals(view: QueryView, reference: str, tags: List[str], rich_tags: bool) -> float:
    score = 0.0
    if view.raw_norm and reference == view.raw_norm:
        score += config.REFERENCE_EXACT_BONUS
        if rich_tags:
            tags.append(REFERENCE_EXACT_TAG)
    if view.raw_norm and view.raw_norm in reference:
        score += config.REFERENCE_CONTAINS_BONUS
        if rich_tags:
            tags.append(REFERENCE_PARTIAL_TAG)
    if any(_REFERENCE_LIKE_RE.search(t) and t in reference for t in view.raw_tokens):
        score += config.REFERENCE_LIKE_BONUS
    return score


def _designation_signals(
    view: QueryView,
    designation_tokens: Sequence[str],
    tags: List[str],
    rich_tags: bool,
) -> float:
    if not view.raw_tokens:
        return 0.0
    all_present = all(
        any(q in dt for dt in designation_tokens) for q in view.raw_tokens
    )
    if not all_present:
        return 0.0
    score = config.ALL_TOKENS_BONUS
    if " ".join(view.raw_tokens) in " ".join(designation_tokens):
        score += config.PHRASE_BONUS
        if rich_tags:
            tags.append(PHRASE_EXACT_TAG)
    return score


def positional_score(wants: Positions, has: Positions) -> float:
    """Bonuses for agreement, pair bonus, penalties for the opposite side."""
    score = 0.0
    for pole, opposite in AXES:
        for side in (pole, opposite):
            if wants.flag(side.name) and has.flag(side.name):
                score += config.POSITION_BONUS[side.name]

    for fr in (FRONT, REAR):
        for lr in (LEFT, RIGHT):
            if (wants.flag(fr.name) and wants.flag(lr.name)
                    and has.flag(fr.name) and has.flag(lr.name)):
                score += config.POSITION_PAIR_BONUS

    if wants.front and has.rear:
        score -= config.FRONT_REAR_MISMATCH_PENALTY
    if wants.rear and has.front:
        score -= config.FRONT_REAR_MISMATCH_PENALTY
    if wants.left and has.right:
        score -= config.LEFT_RIGHT_MISMATCH_PENALTY
    if wants.right and has.left:
        score -= config.LEFT_RIGHT_MISMATCH_PENALTY
    return score


def _prefix_signals(view: QueryView, designation_tokens: Sequence[str], vehicle_type: str) -> float:
    score = 0.0
    for q in view.raw_tokens:
        prefix = q[: config.PREFIX_LEN]
        if prefix and any(dt.startswith(prefix) for dt in designation_tokens):
            score += config.PREFIX_BONUS
        if vehicle_type and q in vehicle_type:
            score += config.VEHICLE_TYPE_BONUS
    return score


def _model_signal(part_model: str, selected_model: Optional[str]) -> float:
    if not selected_model:
        return 0.0
    if part_model == selected_model:
        return config.MODEL_MATCH_BONUS
    if part_model != UNIVERSAL_MODEL:
        return -config.MODEL_MISMATCH_PENALTY
    return 0.0


def score_part(
    view: QueryView,
    part: PartRecord,
    selected_model: Optional[str] = None,
    rich_tags: bool = False,
) -> Tuple[float, List[str]]:
    """Score one part against a prepared query view."""
    reference = normalize(part.reference)
    vehicle_type = normalize(part.vehicle_type)
    designation = normalize(part.designation)
    designation_tokens = tokenize(part.designation)

    tags: List[str] = []
    score = _type_signals(view, designation, tags)
    score += _reference_signals(view, reference, tags, rich_tags)
    score += _designation_signals(view, designation_tokens, tags, rich_tags)
    score += positional_score(view.wants, designation_positions(part.designation))
    score += _prefix_signals(view, designation_tokens, vehicle_type)

    for token in view.expanded:
        if token and token in designation:
            score += config.EXPANDED_TOKEN_BONUS

    score += _model_signal(part.model, selected_model)

    if part.stock > 0:
        score += config.IN_STOCK_BONUS

    return score, tags


def score_candidate(
    query: str,
    part: PartRecord,
    expanded_tokens: Iterable[str],
    selected_model: Optional[str] = None,
    rich_tags: Optional[bool] = None,
) -> Tuple[float, List[str]]:
    """
    Score ``part`` for a raw ``query`` and its expanded token set.

    Convenience wrapper over :func:`score_part`; callers scoring a whole
    catalog should build the :class:`QueryView` once instead.
    """
    if rich_tags is None:
        rich_tags = config.RICH_MATCH_TAGS
    view = QueryView.build(query, expanded_tokens)
    return score_part(view, part, selected_model=selected_model, rich_tags=rich_tags)

