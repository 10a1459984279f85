import pytest
from pydantic import ValidationError

from partsearch.config import HealthResponse, PartItem, PartRecord, SearchRequest, SearchResponse


def test_part_record_accepts_camel_case_aliases():
    part = PartRecord.model_validate(
        {"reference": "R1", "designation": "Phare", "vehicleType": "SP10", "priceHT": 265.0, "stock": 2, "model": "spresso"}
    )
    assert part.vehicle_type == "SP10"
    assert part.price_ht == 265.0


def test_part_record_defaults_and_bounds():
    part = PartRecord(reference="R2")
    assert part.designation == ""
    assert part.vehicle_type is None
    assert part.stock == 0
    assert part.model == "both"

    with pytest.raises(ValidationError):
        PartRecord(reference="R3", stock=-1)


def test_search_models_structure():
    item = PartItem(
        reference="R1",
        designation="Phare AV G",
        vehicle_type="SP10",
        price_ht=265.0,
        stock=0,
        available=False,
        model="spresso",
    )
    resp = SearchResponse(parts=[item])
    assert len(resp.parts) == 1
    assert SearchRequest(query="phare").model is None


def test_health_response():
    health = HealthResponse(status="healthy")
    assert health.status == "healthy"
    assert health.catalog_size == 0
