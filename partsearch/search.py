from __future__ import annotations

"""
Parts search entry point.

    tokenize -> expand -> score every part -> gate / rank -> PartRecord list

Pure and synchronous: the only shared state is the read-only synonym and
weight tables, and the cached bundled catalog when the caller does not pass
one.
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from loguru import logger

from . import config
from .catalog_build import load_catalog
from .config import FAMILIES, UNIVERSAL_MODEL, PartRecord
from .expansion import expand_tokens
from .normalize import normalize_query, tokenize
from .pipeline_types import ScoredCandidate
from .ranking import rank_candidates
from .scoring import QueryView, score_part

CatalogLike = Sequence[Union[PartRecord, Mapping[str, Any]]]


def _coerce_records(catalog: Iterable[Union[PartRecord, Mapping[str, Any]]]) -> List[PartRecord]:
    records: List[PartRecord] = []
    for entry in catalog:
        if isinstance(entry, PartRecord):
            records.append(entry)
        else:
            records.append(PartRecord.model_validate(dict(entry)))
    return records


def prepare_query(query: str) -> QueryView:
    """Tokenize and expand once; the view is shared by every part scored."""
    return QueryView.build(query, expand_tokens(tokenize(query)))


def _score_all(
    view: QueryView,
    catalog: Sequence[PartRecord],
    model: Optional[str],
    rich_tags: Optional[bool],
) -> List[ScoredCandidate]:
    if rich_tags is None:
        rich_tags = config.RICH_MATCH_TAGS
    out: List[ScoredCandidate] = []
    for part in catalog:
        score, tags = score_part(view, part, selected_model=model, rich_tags=rich_tags)
        out.append(ScoredCandidate(part=part, score=score, tags=tags))
    return out


def score_catalog(
    query: str,
    catalog: CatalogLike,
    model: Optional[str] = None,
    rich_tags: Optional[bool] = None,
) -> List[ScoredCandidate]:
    """Score every part (no gate, no sort). Useful for inspection and tests."""
    return _score_all(prepare_query(query), _coerce_records(catalog), model, rich_tags)


def search_parts(
    query: str,
    catalog: Optional[CatalogLike] = None,
    model: Optional[str] = None,
    rich_tags: Optional[bool] = None,
) -> List[PartRecord]:
    """
    Rank ``catalog`` for a free-text ``query`` and return the best parts.

    ``catalog=None`` searches the bundled catalog of ``model`` (or both
    families). ``model`` also boosts parts of that family and demotes parts
    tagged for the other one; ``both`` counts as no selector. An unknown
    ``model`` with no ``catalog`` searches every bundled family.

    Returns 0..5 parts; an empty or punctuation-only query returns [].
    """
    query = normalize_query(query)
    if not query:
        return []

    if model == UNIVERSAL_MODEL:
        model = None

    if catalog is None:
        if model and model not in FAMILIES:
            logger.warning("Unknown vehicle family {!r}; searching every bundled catalog", model)
            records = load_catalog()
        else:
            records = load_catalog(model)
    else:
        records = _coerce_records(catalog)

    view = prepare_query(query)
    scored = _score_all(view, records, model, rich_tags)
    ranked = rank_candidates(scored, view.main_type, view.expanded)

    logger.debug(
        "search '{}' (model={}): {} parts scored, {} returned",
        query, model, len(scored), len(ranked),
    )
    return [c.part for c in ranked]
