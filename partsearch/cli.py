# partsearch/cli.py
"""
Batch runner for the parts search.
Runs queries against the bundled catalogs without starting FastAPI.

- One query: prints the ranked parts
- A CSV/Excel of queries: writes one row per (query, part) with its rank
- De-duplicates identical queries (runs once, fans out)
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from loguru import logger

from partsearch.catalog_build import load_catalog
from partsearch.config import FAMILIES, UNIVERSAL_MODEL, PartRecord
from partsearch.normalize import basic_clean
from partsearch.search import search_parts

OUTPUT_COLUMNS = ["Query", "Rank", "Reference", "Designation", "Price_HT", "Stock"]


def load_queries(path: Path) -> List[str]:
    ext = path.suffix.lower()
    df = pd.read_excel(path) if ext in {".xlsx", ".xls"} else pd.read_csv(path)
    cols = {c.lower(): c for c in df.columns}
    qcol = cols.get("query")
    if not qcol:
        raise ValueError(f"Expected column 'Query' in {path}. Found: {list(df.columns)}")
    return df[qcol].astype(str).apply(basic_clean).tolist()


def _dedup_preserve_order(seq: List[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for s in seq:
        if s not in seen:
            seen.add(s)
            out.append(s)
    return out


def results_frame(preds: Dict[str, List[PartRecord]], queries: List[str]) -> pd.DataFrame:
    """One row per (query, part), in the original query order."""
    rows = []
    for q in queries:
        for rank, part in enumerate(preds.get(q, []), 1):
            rows.append((q, rank, part.reference, part.designation, part.price_ht, part.stock))
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS)


def run_batch(queries: List[str], model: Optional[str] = None) -> pd.DataFrame:
    unique_queries = _dedup_preserve_order(queries)
    logger.info("Unique queries to run: {}", len(unique_queries))

    catalog = load_catalog(model)
    unique_preds: Dict[str, List[PartRecord]] = {}
    for i, uq in enumerate(unique_queries, 1):
        unique_preds[uq] = search_parts(uq, catalog=catalog, model=model)
        if i % 50 == 0 or i == len(unique_queries):
            logger.info("Processed {}/{} unique queries", i, len(unique_queries))

    return results_frame(unique_preds, queries)


def _print_parts(query: str, parts: List[PartRecord]) -> None:
    if not parts:
        print(f"No part found for '{query}'")
        return
    for rank, part in enumerate(parts, 1):
        status = f"stock {part.stock}" if part.stock > 0 else "rupture"
        print(f"{rank}. {part.designation} (Réf: {part.reference}) Prix HT: {part.price_ht:.3f} TND, {status}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="partsearch", description="Search the bundled parts catalogs.")
    ap.add_argument("--query", type=str, default=None, help="single free-text query")
    ap.add_argument("--in", dest="inp", type=str, default=None, help="CSV/Excel file with a 'Query' column")
    ap.add_argument("--out", dest="out", type=str, default="artifacts/search_results.csv",
                    help="output CSV for --in (default artifacts/search_results.csv)")
    ap.add_argument("--model", choices=FAMILIES + [UNIVERSAL_MODEL], default=None,
                    help="restrict to one vehicle family")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if not args.query and not args.inp:
        ap.error("one of --query or --in is required")

    if args.query:
        _print_parts(args.query, search_parts(args.query, model=args.model))
        return 0

    inp = Path(args.inp)
    queries = load_queries(inp)
    print(f"Loaded {len(queries)} queries from {inp}")

    df = run_batch(queries, model=args.model)
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    print(f"Wrote {len(df)} rows to {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
