from __future__ import annotations

"""
Post-processing of the registration-card reader's answer.

The reader (an external vision model) is asked for a strict JSON object
with ``marque``, ``modele``, ``immatriculation``, ``typeMoteur`` and
``annee``. Its answers are not always strict: JSON comes wrapped in
markdown fences, the VIN ends up in the plate field, the year is a
free-form string. Everything here is pure and works on the raw text.
"""

import json
import re
from datetime import date
from typing import Any, Dict, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidModelError, ServiceUnavailableError

SUPPORTED_BRAND = "SUZUKI"
CELERIO = "Celerio"
SPRESSO = "S-Presso"

MIN_YEAR = 2000
PLATE_MIN_LEN = 3
PLATE_MAX_LEN = 12

VIN_WARNING = (
    "La valeur extraite ressemble à un VIN (17 caractères). "
    "Veuillez corriger l'immatriculation."
)
DOUBTFUL_PLATE_WARNING = "Immatriculation douteuse. Veuillez vérifier manuellement."

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_VIN_RE = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$", re.IGNORECASE)
_PLATE_FORMATS = (
    re.compile(r"\b\d{1,3}\s*TUN?\s*\d{1,4}\b", re.IGNORECASE),           # 123 TU 4567
    re.compile(r"\b[A-Z]{2}[\s-]?\d{3}[\s-]?[A-Z]{2}\b", re.IGNORECASE),  # AB-123-CD
)
_PLATE_CHARS_RE = re.compile(r"[^A-Z0-9\- ]")
_YEAR_RE = re.compile(r"(20\d{2}|19\d{2})")


class VehicleInfo(BaseModel):
    """
    Vehicle identity read from a registration card.

    Field aliases are the French keys the reader answers with.
    """

    model_config = ConfigDict(populate_by_name=True)

    plate: Optional[str] = Field(default=None, alias="immatriculation")
    plate_raw: str = Field(default="", alias="immatriculationRaw")
    plate_warning: Optional[str] = Field(default=None, alias="immatriculationWarning")
    brand: str = Field(default=SUPPORTED_BRAND, alias="marque")
    model: str = Field(alias="modele")
    engine_type: Optional[str] = Field(default=None, alias="typeMoteur")
    year: Optional[int] = Field(default=None, alias="annee")


def parse_vehicle_response(text: str) -> Dict[str, Any]:
    """
    Pull the JSON object out of the reader's raw text.

    Raises InvalidModelError when the reader itself rejected the vehicle and
    ServiceUnavailableError when no usable object can be found.
    """
    match = _JSON_OBJECT_RE.search(text or "")
    if not match:
        raise ServiceUnavailableError("No JSON object in vehicle reader response")

    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        logger.warning("Vehicle reader returned malformed JSON: {}", exc)
        raise ServiceUnavailableError("Malformed JSON in vehicle reader response") from exc

    if not isinstance(payload, dict):
        raise ServiceUnavailableError("Vehicle reader response is not a JSON object")

    error = payload.get("error")
    if error == "invalid_model":
        raise InvalidModelError("Vehicle reader rejected the vehicle model")
    if error:
        raise ServiceUnavailableError(f"Vehicle reader error: {error}")
    return payload


def canonical_model(value: Any) -> Optional[str]:
    """Map free-form model names onto ``Celerio`` / ``S-Presso``."""
    compact = str(value or "").upper().replace(".", "")
    compact = re.sub(r"\s+", "", compact)
    if "CELERIO" in compact:
        return CELERIO
    if "SPRESSO" in compact or "S-PRESSO" in compact:
        return SPRESSO
    return None


def looks_like_vin(value: str) -> bool:
    return bool(_VIN_RE.match(value or ""))


def plate_from_text(text: str) -> str:
    """First Tunisian or French registration plate found in ``text``, compacted."""
    for pattern in _PLATE_FORMATS:
        for match in pattern.finditer(text or ""):
            candidate = re.sub(r"[^A-Z0-9]", "", match.group(0).upper())
            if 4 <= len(candidate) <= 10 and not looks_like_vin(candidate):
                return candidate
    return ""


def _clean_plate(raw_plate: str, raw_text: str):
    """Returns (plate or None, warning or None)."""
    cleaned = _PLATE_CHARS_RE.sub("", raw_plate.upper())
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    compact = re.sub(r"[\s-]", "", cleaned)

    if looks_like_vin(re.sub(r"\s+", "", cleaned)):
        alt = plate_from_text(raw_text)
        if alt:
            return alt, None
        logger.info("VIN found in plate field and no plate in reader text")
        return None, VIN_WARNING

    if not cleaned:
        return plate_from_text(raw_text) or None, None

    if len(compact) < PLATE_MIN_LEN or len(compact) > PLATE_MAX_LEN:
        alt = plate_from_text(raw_text)
        if alt:
            return alt, None
        return None, DOUBTFUL_PLATE_WARNING

    return cleaned, None


def _clean_year(value: Any, current_year: int) -> Optional[int]:
    match = _YEAR_RE.search(str(value or ""))
    if not match:
        return None
    year = int(match.group(1))
    if MIN_YEAR <= year <= current_year + 1:
        return year
    return None


def normalize_vehicle_payload(
    payload: Dict[str, Any],
    raw_text: str = "",
    current_year: Optional[int] = None,
) -> VehicleInfo:
    """
    Validate and clean one reader payload.

    Raises InvalidModelError unless the brand is Suzuki and the model is a
    Celerio or an S-Presso.
    """
    brand = str(payload.get("marque") or "").upper().strip()
    if SUPPORTED_BRAND not in brand:
        raise InvalidModelError(f"Unsupported brand: {brand or 'unknown'}")

    model = canonical_model(payload.get("modele"))
    if model is None:
        raise InvalidModelError(f"Unsupported model: {payload.get('modele')}")

    if current_year is None:
        current_year = date.today().year

    raw_plate = str(payload.get("immatriculation") or "")
    plate, warning = _clean_plate(raw_plate, raw_text)

    engine_type = payload.get("typeMoteur")
    engine_type = str(engine_type).strip() if engine_type else None

    return VehicleInfo(
        plate=plate,
        plate_raw=raw_plate,
        plate_warning=warning,
        brand=SUPPORTED_BRAND,
        model=model,
        engine_type=engine_type or None,
        year=_clean_year(payload.get("annee"), current_year),
    )


def extract_vehicle_info(text: str, current_year: Optional[int] = None) -> VehicleInfo:
    """Raw reader text -> cleaned VehicleInfo."""
    payload = parse_vehicle_response(text)
    vehicle = normalize_vehicle_payload(payload, raw_text=text, current_year=current_year)
    logger.info("Vehicle identified: {} {} ({})", vehicle.brand, vehicle.model, vehicle.plate)
    return vehicle


def family_for_vehicle(vehicle: Optional[VehicleInfo]) -> Optional[str]:
    """Catalog family of a vehicle: ``celerio``, ``spresso`` or None."""
    if vehicle is None:
        return None
    model = re.sub(r"\s+", "", vehicle.model.lower())
    if "celerio" in model:
        return "celerio"
    if "spresso" in model or "s-presso" in model:
        return "spresso"
    return None
