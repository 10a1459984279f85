from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------
# Paths
# ---------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.getenv("PARTSEARCH_DATA_DIR", str(PACKAGE_DIR / "data")))

CATALOG_PATHS: Dict[str, Path] = {
    "spresso": DATA_DIR / "spresso_parts.csv",
    "celerio": DATA_DIR / "celerio_parts.csv",
}


# ---------------------------
# Vehicle families
# ---------------------------

# Order matters: the union catalog is spresso first, then celerio.
FAMILIES: List[str] = ["spresso", "celerio"]
UNIVERSAL_MODEL = "both"


# ---------------------------
# Scoring constants (empirically tuned, keep exact)
# ---------------------------

MAIN_TYPE_MISMATCH_PENALTY = 500.0
MAIN_TYPE_BASE_SCORE = 150.0
OTHER_TYPE_BASE_SCORE = 15.0

REFERENCE_EXACT_BONUS = 1000.0
REFERENCE_CONTAINS_BONUS = 450.0
REFERENCE_LIKE_BONUS = 120.0
REFERENCE_LIKE_MIN_RUN = 5

ALL_TOKENS_BONUS = 220.0
PHRASE_BONUS = 90.0

POSITION_BONUS: Dict[str, float] = {
    "front": 150.0,
    "rear": 150.0,
    "left": 130.0,
    "right": 130.0,
    "upper": 80.0,
    "lower": 80.0,
    "interior": 60.0,
    "exterior": 60.0,
}
POSITION_PAIR_BONUS = 220.0
FRONT_REAR_MISMATCH_PENALTY = 120.0
LEFT_RIGHT_MISMATCH_PENALTY = 90.0

PREFIX_LEN = 3
PREFIX_BONUS = 25.0
VEHICLE_TYPE_BONUS = 60.0
EXPANDED_TOKEN_BONUS = 18.0

MODEL_MATCH_BONUS = 80.0
MODEL_MISMATCH_PENALTY = 50.0
IN_STOCK_BONUS = 8.0

# Fuzzy expansion
FUZZY_MAX_DISTANCE = 2
FUZZY_MIN_TOKEN_LEN = 4


# ---------------------------
# Ranking policy
# ---------------------------

REFERENCE_TAG_MULTIPLIER = 1.3
EXACT_TAG_MULTIPLIER = 1.2
MANY_TAGS_MULTIPLIER = 1.15
MANY_TAGS_THRESHOLD = 3

RESULT_MIN = 2
RESULT_MAX = 5
RESULT_SPECIFIC = 3          # when the query is positionally specific
SPECIFICITY_THRESHOLD = 2


# ---------------------------
# Env toggles
# ---------------------------

# Emit reference/exact match tags so the ranking multipliers can fire.
# Off by default: the historical scorer only tags part types.
RICH_MATCH_TAGS = os.getenv("PARTSEARCH_RICH_MATCH_TAGS", "0") == "1"

DEFAULT_CONTEXT_PART_LIMIT = 200
CONTEXT_PART_LIMIT = int(
    os.getenv("PARTSEARCH_CONTEXT_LIMIT", str(DEFAULT_CONTEXT_PART_LIMIT))
)

MAX_INPUT_CHARS = 2_000  # query size cap


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class PartRecord(BaseModel):
    """
    One catalog entry as supplied by the catalog loader.

    Accepts both the snake_case field names and the camelCase names used by
    the upstream catalog export (``vehicleType``, ``priceHT``).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    reference: str
    designation: str = ""
    vehicle_type: Optional[str] = Field(default=None, alias="vehicleType")
    price_ht: float = Field(default=0.0, ge=0, alias="priceHT")
    stock: int = Field(default=0, ge=0)
    model: str = UNIVERSAL_MODEL


class PartItem(BaseModel):
    """
    Public shape of a part in API responses.
    """

    reference: str
    designation: str
    vehicle_type: str
    price_ht: float
    stock: int
    available: bool
    model: str


class SearchRequest(BaseModel):
    query: str
    model: Optional[str] = None


class SearchResponse(BaseModel):
    """
    Response body for POST /search.
    """

    parts: List[PartItem]


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
    catalog_size: int = 0
