import json

import pytest

from partsearch.errors import InvalidModelError, ServiceUnavailableError
from partsearch.vehicle import (
    DOUBTFUL_PLATE_WARNING,
    VIN_WARNING,
    VehicleInfo,
    canonical_model,
    extract_vehicle_info,
    family_for_vehicle,
    looks_like_vin,
    normalize_vehicle_payload,
    parse_vehicle_response,
    plate_from_text,
)


def _payload(**overrides):
    base = {
        "marque": "Suzuki",
        "modele": "Celerio",
        "immatriculation": "123 TU 4567",
        "typeMoteur": " K10B ",
        "annee": "2019",
    }
    base.update(overrides)
    return base


def test_parse_response_strips_markdown_fence():
    text = "```json\n" + json.dumps(_payload()) + "\n```"
    assert parse_vehicle_response(text)["modele"] == "Celerio"


def test_parse_response_invalid_model_marker():
    with pytest.raises(InvalidModelError) as exc:
        parse_vehicle_response('{"error": "invalid_model"}')
    assert exc.value.reason == "invalid_model"


@pytest.mark.parametrize("text", ["", "pas de json ici", "{not json}", "[1, 2]"])
def test_parse_response_unusable(text):
    with pytest.raises(ServiceUnavailableError) as exc:
        parse_vehicle_response(text)
    assert exc.value.reason == "service_unavailable"


def test_canonical_model_variants():
    assert canonical_model("CELERIO") == "Celerio"
    assert canonical_model("s presso") == "S-Presso"
    assert canonical_model("SPRESSO") == "S-Presso"
    assert canonical_model("S-Presso") == "S-Presso"
    assert canonical_model("Swift") is None


def test_normalize_payload_happy_path():
    vehicle = normalize_vehicle_payload(_payload(), current_year=2024)
    assert vehicle.brand == "SUZUKI"
    assert vehicle.model == "Celerio"
    assert vehicle.plate == "123 TU 4567"
    assert vehicle.plate_warning is None
    assert vehicle.engine_type == "K10B"
    assert vehicle.year == 2019


def test_normalize_payload_rejects_other_brand_or_model():
    with pytest.raises(InvalidModelError):
        normalize_vehicle_payload(_payload(marque="Renault"))
    with pytest.raises(InvalidModelError):
        normalize_vehicle_payload(_payload(modele="Swift"))


def test_vin_in_plate_field_is_cleared_with_warning():
    vin = "MA3FB32S00A123456"
    assert looks_like_vin(vin)
    vehicle = normalize_vehicle_payload(_payload(immatriculation=vin), raw_text="")
    assert vehicle.plate is None
    assert vehicle.plate_warning == VIN_WARNING
    assert vehicle.plate_raw == vin


def test_vin_replaced_by_plate_found_in_text():
    vin = "MA3FB32S00A123456"
    raw_text = f"VIN {vin}, plaque 123 TU 4567"
    vehicle = normalize_vehicle_payload(_payload(immatriculation=vin), raw_text=raw_text)
    assert vehicle.plate == "123TU4567"
    assert vehicle.plate_warning is None


def test_implausible_plate_length():
    vehicle = normalize_vehicle_payload(_payload(immatriculation="A1"), raw_text="")
    assert vehicle.plate is None
    assert vehicle.plate_warning == DOUBTFUL_PLATE_WARNING


def test_plate_is_cleaned():
    vehicle = normalize_vehicle_payload(_payload(immatriculation=" 123 tu 4567 ¤"))
    assert vehicle.plate == "123 TU 4567"


def test_plate_from_text_requires_letters_and_digits():
    assert plate_from_text("modele CELERIO annee 2019") == ""
    assert plate_from_text("immat: 210 TUN 9876") == "210TUN9876"


@pytest.mark.parametrize(
    "raw_year,expected",
    [("2019", 2019), ("mise en circulation 03/2021", 2021), ("1998", None), ("2031", None), ("", None)],
)
def test_year_window(raw_year, expected):
    vehicle = normalize_vehicle_payload(_payload(annee=raw_year), current_year=2025)
    assert vehicle.year == expected


def test_extract_vehicle_info_end_to_end():
    text = json.dumps(_payload(modele="S PRESSO"))
    vehicle = extract_vehicle_info(text, current_year=2024)
    assert vehicle.model == "S-Presso"
    assert family_for_vehicle(vehicle) == "spresso"


def test_family_for_vehicle():
    assert family_for_vehicle(None) is None
    assert family_for_vehicle(VehicleInfo(model="Celerio")) == "celerio"
    assert family_for_vehicle(VehicleInfo(modele="S-Presso")) == "spresso"
