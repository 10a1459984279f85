from __future__ import annotations

"""
Catalog context handed to the conversational assistant.

The assistant answers in natural language but must only quote parts that
exist. For each user message we serialize a prefiltered slice of the
catalog, plus a few status lines (stock situation, whether several
variants of the same part compete) that drive how it phrases the answer.
"""

import json
import re
from typing import List, Optional, Sequence

from . import config
from .config import PartRecord
from .constants import SMALL_TALK_TERMS
from .normalize import normalize
from .vehicle import VehicleInfo

STATUS_AVAILABLE = "AVAILABLE"
STATUS_ALL_OUT = "ALL_OUT"
STATUS_NONE = "NONE"

MIN_WORD_LEN = 3
SMALL_TALK_MAX_WORDS = 2

_SMALL_TALK_RE = re.compile(
    r"^(%s)(\s|$)" % "|".join(re.escape(t) for t in SMALL_TALK_TERMS),
    re.IGNORECASE,
)


def is_small_talk(message: str) -> bool:
    """Thanks-only messages ("merci", "merci beaucoup") that need no search."""
    text = (message or "").strip()
    if not _SMALL_TALK_RE.match(text):
        return False
    return len(text.split()) <= SMALL_TALK_MAX_WORDS


def _first_word(text: str) -> str:
    words = text.split(" ")
    return words[0] if words else ""


def prefilter_parts(query: str, parts: Sequence[PartRecord]) -> List[PartRecord]:
    """
    Parts sharing at least one 3+ char query word with their designation or
    reference, or whose first designation word is a prefix of a query word
    (or the other way round). Falls back to every part when nothing matches.
    """
    words = [w for w in normalize(query).split(" ") if len(w) >= MIN_WORD_LEN]
    if not words:
        return list(parts)

    kept: List[PartRecord] = []
    for part in parts:
        designation = normalize(part.designation)
        reference = normalize(part.reference)
        head = _first_word(designation)
        for word in words:
            if (
                word in designation
                or word in reference
                or (head and word.startswith(head))
                or (head and head.startswith(word))
            ):
                kept.append(part)
                break
    return kept or list(parts)


def stock_status(parts: Sequence[PartRecord]) -> str:
    if not parts:
        return STATUS_NONE
    if any(p.stock > 0 for p in parts):
        return STATUS_AVAILABLE
    return STATUS_ALL_OUT


def has_multiple_variants(parts: Sequence[PartRecord]) -> bool:
    """Two or more parts share their first designation word but differ otherwise."""
    by_head = {}
    for part in parts:
        designation = normalize(part.designation)
        by_head.setdefault(_first_word(designation), set()).add(designation)
    return any(len(designations) >= 2 for head, designations in by_head.items() if head)


def _part_payload(part: PartRecord) -> dict:
    return {
        "reference": part.reference,
        "designation": part.designation,
        "price": part.price_ht,
        "stock": part.stock,
        "type": part.vehicle_type or "",
        "model": part.model,
    }


def build_catalog_context(
    message: str,
    catalog: Sequence[PartRecord],
    selected_model: Optional[str] = None,
    vehicle: Optional[VehicleInfo] = None,
    limit: Optional[int] = None,
) -> str:
    """Text block describing the vehicle, the search status and the candidate parts."""
    if limit is None:
        limit = config.CONTEXT_PART_LIMIT

    relevant = prefilter_parts(message, catalog)
    included = relevant[:limit]

    lines: List[str] = []
    if vehicle is not None:
        lines.append("Véhicule sélectionné:")
        lines.append(f"- {vehicle.brand} {vehicle.model} ({vehicle.plate or 'immatriculation inconnue'})")
        lines.append("")
        lines.append("RÉPONDS UNIQUEMENT POUR CE MODÈLE.")
        lines.append("")

    lines.append(f"STATUT_STOCK: {stock_status(included)}")
    lines.append(f"VARIANTES_MULTIPLES: {'OUI' if has_multiple_variants(included) else 'NON'}")
    lines.append("")
    lines.append(
        f"BASE DE DONNÉES DES PIÈCES ({selected_model or 'tous modèles'}) - "
        f"{len(catalog)} pièces disponibles:"
    )
    lines.append(json.dumps([_part_payload(p) for p in included], ensure_ascii=False, indent=2))
    lines.append("")
    lines.append("INSTRUCTIONS POUR LA RECHERCHE:")
    lines.append(f'- L\'utilisateur cherche: "{message}"')
    lines.append("- Cherche dans la base de données ci-dessus les pièces correspondantes")
    lines.append("- Tolère les fautes de frappe, la darija et les descriptions imprécises")
    lines.append("- Si plusieurs variantes existent, pose une question de clarification")
    lines.append("- Affiche UNIQUEMENT les meilleures correspondances (max 3)")
    lines.append("- Si aucune pièce trouvée, indique \"Non disponible dans la base\"")
    return "\n".join(lines)
