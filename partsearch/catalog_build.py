from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from loguru import logger

from .config import CATALOG_PATHS, FAMILIES, UNIVERSAL_MODEL, PartRecord
from .normalize import basic_clean


# ---------------------------
# Column detection / standardization
# ---------------------------

# Exports from the parts desk are not consistent, so we accept the usual variants.
COLUMN_CANDIDATES: Dict[str, List[str]] = {
    "reference": [
        "reference",
        "Reference",
        "Référence",
        "ref",
        "Ref",
        "Code article",
    ],
    "designation": [
        "designation",
        "Designation",
        "Désignation",
        "Libellé",
        "libelle",
        "description",
    ],
    "vehicle_type": [
        "vehicle_type",
        "vehicleType",
        "Type véhicule",
        "type",
        "Type",
    ],
    "price_ht": [
        "price_ht",
        "priceHT",
        "Prix HT",
        "prix_ht",
        "PU HT",
        "price",
    ],
    "stock": [
        "stock",
        "Stock",
        "Qte",
        "Quantité",
        "qty",
    ],
    "model": [
        "model",
        "Model",
        "modele",
        "Modèle",
    ],
}

CANONICAL_COLUMNS = ["reference", "designation", "vehicle_type", "price_ht", "stock", "model"]


def _standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename columns from a raw export to the canonical internal schema.
    """
    col_map: Dict[str, str] = {}
    lower_to_original = {str(c).lower(): c for c in df.columns}

    for canon, candidates in COLUMN_CANDIDATES.items():
        for candidate in candidates:
            if candidate in df.columns:
                col_map[candidate] = canon
                break
            cand_lower = candidate.lower()
            if cand_lower in lower_to_original:
                col_map[lower_to_original[cand_lower]] = canon
                break

    logger.debug("Standardizing catalog columns with map: {}", col_map)

    df_std = df.rename(columns=col_map)

    if "reference" not in df_std.columns:
        logger.warning("Raw catalog has no reference column; columns seen: {}", list(df.columns))

    return df_std


# ---------------------------
# Field parsing helpers
# ---------------------------

def parse_price(value) -> float:
    """
    Parse a tax-excluded price into a non-negative float.

    Accepts numbers, "12,500", "12.5 TND", "1 250,000". Unparseable -> 0.0.
    """
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return 0.0

    if isinstance(value, (int, float)):
        return max(0.0, float(value))

    text = str(value).strip().replace(" ", "").replace("\u00a0", "")
    match = re.search(r"\d+(?:[.,]\d+)?", text)
    if not match:
        return 0.0
    return max(0.0, float(match.group(0).replace(",", ".")))


def parse_stock(value) -> int:
    """
    Parse a stock quantity into an int >= 0. Blanks and negatives -> 0.
    """
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return 0

    if isinstance(value, (int, float)):
        return max(0, int(value))

    nums = re.findall(r"-?\d+", str(value))
    if not nums:
        return 0
    return max(0, int(nums[0]))


def _canonicalize_model(value, default_model: str) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return default_model
    tag = str(value).strip().lower().replace("-", "").replace(" ", "")
    return tag or default_model


# ---------------------------
# Catalog normalization
# ---------------------------

def normalize_catalog_df(df_raw: pd.DataFrame, default_model: str = UNIVERSAL_MODEL) -> pd.DataFrame:
    """
    Turn a raw export into the canonical schema:

    - reference (str, unique, non-empty)
    - designation (str)
    - vehicle_type (str, may be empty)
    - price_ht (float >= 0)
    - stock (int >= 0)
    - model (str family tag; ``default_model`` when missing)
    """
    logger.info("Normalizing catalog dataframe with {} raw rows", len(df_raw))

    df = _standardize_columns(df_raw.copy())

    if "reference" not in df.columns:
        return pd.DataFrame(columns=CANONICAL_COLUMNS)

    df["reference"] = df["reference"].apply(basic_clean)
    df = df[df["reference"] != ""]

    before = len(df)
    df = df.drop_duplicates(subset=["reference"], keep="first").reset_index(drop=True)
    if len(df) < before:
        logger.warning("Dropped {} duplicate references", before - len(df))

    df["designation"] = df["designation"].apply(basic_clean) if "designation" in df.columns else ""
    df["vehicle_type"] = df["vehicle_type"].apply(basic_clean) if "vehicle_type" in df.columns else ""
    df["price_ht"] = df["price_ht"].apply(parse_price) if "price_ht" in df.columns else 0.0
    df["stock"] = df["stock"].apply(parse_stock) if "stock" in df.columns else 0

    if "model" in df.columns:
        df["model"] = df["model"].apply(lambda v: _canonicalize_model(v, default_model))
    else:
        df["model"] = default_model

    logger.info("Catalog normalization complete. Final rows: {}", len(df))
    return df[CANONICAL_COLUMNS]


def records_from_df(df: pd.DataFrame) -> List[PartRecord]:
    """Canonical DataFrame -> PartRecord list (row order preserved)."""
    records: List[PartRecord] = []
    for row in df.to_dict(orient="records"):
        records.append(
            PartRecord(
                reference=str(row["reference"]),
                designation=str(row["designation"]),
                vehicle_type=str(row["vehicle_type"]) or None,
                price_ht=float(row["price_ht"]),
                stock=int(row["stock"]),
                model=str(row["model"]),
            )
        )
    return records


# ---------------------------
# IO helpers
# ---------------------------

def load_raw_catalog(path: Path) -> pd.DataFrame:
    """
    Load a raw catalog export (CSV, or Excel by extension).
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    logger.info("Loading raw catalog from {}", path)
    if path.suffix.lower() in {".xlsx", ".xls"}:
        df = pd.read_excel(path, dtype=str)
    else:
        df = pd.read_csv(path, dtype=str, encoding="utf-8")
    logger.info("Loaded {} rows from raw catalog", len(df))
    return df


@lru_cache(maxsize=None)
def load_family_catalog(family: str) -> tuple:
    """
    Bundled catalog of one vehicle family, cached for the process lifetime.

    Returned as a tuple so the cached value cannot be mutated by callers.
    """
    if family not in CATALOG_PATHS:
        raise ValueError(f"Unknown vehicle family '{family}'; expected one of {FAMILIES}")
    df = normalize_catalog_df(load_raw_catalog(CATALOG_PATHS[family]), default_model=family)
    return tuple(records_from_df(df))


def load_catalog(model: Optional[str] = None) -> List[PartRecord]:
    """
    Catalog selector: one family's parts, or every family concatenated
    (spresso first) when ``model`` is None or ``both``.
    """
    if model and model != UNIVERSAL_MODEL:
        return list(load_family_catalog(model))

    parts: List[PartRecord] = []
    for family in FAMILIES:
        parts.extend(load_family_catalog(family))
    return parts
