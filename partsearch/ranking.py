from __future__ import annotations

"""
Final gate, quality multipliers, ordering and result sizing.

After scoring, the search call needs to turn a list of scored parts into a
short answer: drop what cannot be right, reward well-explained matches, sort,
and return fewer results when the query is positionally specific (a user who
typed "avant gauche" wants one part, not a catalogue page).
"""

from typing import Iterable, List, Optional

from . import config
from .constants import SPECIFICITY_TOKENS
from .normalize import normalize
from .pipeline_types import ScoredCandidate


def passes_gate(candidate: ScoredCandidate, main_type: Optional[str]) -> bool:
    """Positive score and, when the query names a part type, that type in the designation."""
    if candidate.score <= 0:
        return False
    if main_type and main_type not in normalize(candidate.part.designation):
        return False
    return True


def apply_quality_multipliers(candidate: ScoredCandidate) -> ScoredCandidate:
    """Multiply the score by match-quality factors read from de-duplicated tags."""
    unique_tags = list(dict.fromkeys(candidate.tags))
    score = candidate.score
    if any("Référence" in t for t in unique_tags):
        score *= config.REFERENCE_TAG_MULTIPLIER
    if any("exact" in t for t in unique_tags):
        score *= config.EXACT_TAG_MULTIPLIER
    if len(unique_tags) >= config.MANY_TAGS_THRESHOLD:
        score *= config.MANY_TAGS_MULTIPLIER
    return ScoredCandidate(part=candidate.part, score=score, tags=unique_tags)


def specificity(expanded_tokens: Iterable[str]) -> int:
    """How many positional tokens the expanded query carries."""
    expanded = set(expanded_tokens)
    return sum(1 for t in SPECIFICITY_TOKENS if t in expanded)


def result_count(expanded_tokens: Iterable[str]) -> int:
    """3 results for positionally specific queries, 5 otherwise (never below 2)."""
    if specificity(expanded_tokens) >= config.SPECIFICITY_THRESHOLD:
        target = config.RESULT_SPECIFIC
    else:
        target = config.RESULT_MAX
    return max(config.RESULT_MIN, target)


def rank_candidates(
    candidates: List[ScoredCandidate],
    main_type: Optional[str],
    expanded_tokens: Iterable[str],
) -> List[ScoredCandidate]:
    """
    Gate -> multipliers -> sort (score desc, stock desc) -> truncate.

    Sorting is stable, so remaining ties keep catalog order.
    """
    kept = [apply_quality_multipliers(c) for c in candidates if passes_gate(c, main_type)]
    kept.sort(key=lambda c: (-c.score, -c.part.stock))
    return kept[: result_count(expanded_tokens)]
