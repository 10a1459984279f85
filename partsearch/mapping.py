from __future__ import annotations
"""
Mapping utilities to convert internal part records into API responses.

Centralises the mapping from PartRecord into the Pydantic schemas
(PartItem / SearchResponse) and applies the result-size cap consistently.
"""

from typing import Iterable, List

from loguru import logger

from .config import RESULT_MAX, PartItem, PartRecord, SearchResponse


def to_api_item(part: PartRecord) -> PartItem:
    """
    Map a single catalog part to the strict PartItem schema.

    ``available`` is derived from stock; a missing vehicle type becomes "".
    """
    return PartItem(
        reference=part.reference,
        designation=part.designation,
        vehicle_type=part.vehicle_type or "",
        price_ht=round(float(part.price_ht), 3),
        stock=int(part.stock),
        available=part.stock > 0,
        model=part.model,
    )


def map_parts_to_response(parts: Iterable[PartRecord]) -> SearchResponse:
    """
    Build a SearchResponse from ranked parts, keeping their order.
    """
    items: List[PartItem] = [to_api_item(p) for p in parts]
    if len(items) > RESULT_MAX:
        logger.warning("Got {} parts, truncating to RESULT_MAX={}", len(items), RESULT_MAX)
        items = items[:RESULT_MAX]
    return SearchResponse(parts=items)
