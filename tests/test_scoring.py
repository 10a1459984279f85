import pytest

from partsearch import config
from partsearch.config import PartRecord
from partsearch.expansion import expand_tokens
from partsearch.normalize import tokenize
from partsearch.positional import Positions
from partsearch.scoring import (
    PHRASE_EXACT_TAG,
    REFERENCE_EXACT_TAG,
    QueryView,
    main_part_type,
    positional_score,
    score_candidate,
    score_part,
)


def _score(query, part, model=None, rich_tags=False):
    return score_candidate(query, part, expand_tokens(tokenize(query)), selected_model=model, rich_tags=rich_tags)


def test_main_part_type_left_to_right():
    assert main_part_type(["plaquette", "frein"]) == "plaquette"
    assert main_part_type(["frein", "plaquette"]) == "frein"
    assert main_part_type(["retroviseur"]) is None


def test_type_mismatch_penalty_and_type_tag():
    matching = PartRecord(reference="P1", designation="Plaquette de frein avant")
    other = PartRecord(reference="P2", designation="Disque de frein avant")

    s_match, tags = _score("plaquette", matching)
    s_other, _ = _score("plaquette", other)

    assert "Type courant: plaquette" in tags
    assert s_match > 0
    assert s_other < 0


def test_reference_exact_dominates():
    exact = PartRecord(reference="REF-12345", designation="Joint")
    fuzzy = PartRecord(reference="B-1", designation="Joint ref-12345 spi")

    s_exact, _ = _score("REF-12345", exact)
    s_fuzzy, _ = _score("REF-12345", fuzzy)

    assert s_exact >= config.REFERENCE_EXACT_BONUS
    assert s_exact > s_fuzzy


def test_reference_like_token_bonus():
    coded = PartRecord(reference="16510M62S00", designation="Filtre a huile")
    other = PartRecord(reference="99999X", designation="Filtre a huile")
    s_coded, _ = _score("filtre 16510", coded)
    s_other, _ = _score("filtre 16510", other)
    # "16510" is a 5+ char alphanumeric run found inside the reference
    assert s_coded - s_other == pytest.approx(config.REFERENCE_LIKE_BONUS)


def test_all_tokens_and_phrase_bonus():
    part = PartRecord(reference="X", designation="Pompe a eau")
    s_phrase, tags = _score("pompe a eau", part, rich_tags=True)
    s_scattered, _ = _score("eau pompe", part, rich_tags=True)
    assert PHRASE_EXACT_TAG in tags
    assert s_phrase - s_scattered >= config.PHRASE_BONUS - 1


def test_rich_tags_off_by_default():
    part = PartRecord(reference="ABC12", designation="Joint")
    _, tags = _score("abc12", part)
    assert REFERENCE_EXACT_TAG not in tags

    _, rich = _score("abc12", part, rich_tags=True)
    assert REFERENCE_EXACT_TAG in rich


def test_positional_score_agreement_pair_and_mismatch():
    wants = Positions(front=True, left=True)
    agree = positional_score(wants, Positions(front=True, left=True))
    assert agree == pytest.approx(150 + 130 + 220)

    opposite = positional_score(wants, Positions(rear=True, right=True))
    assert opposite == pytest.approx(-120 - 90)

    assert positional_score(Positions(), Positions(front=True)) == 0

    rear_right = positional_score(Positions(rear=True, right=True), Positions(rear=True, right=True))
    assert rear_right == pytest.approx(150 + 130 + 220)


def test_positional_score_vertical_and_depth_axes():
    assert positional_score(Positions(upper=True), Positions(upper=True)) == pytest.approx(80)
    assert positional_score(Positions(lower=True), Positions(lower=True)) == pytest.approx(80)
    assert positional_score(Positions(interior=True), Positions(interior=True)) == pytest.approx(60)
    assert positional_score(Positions(exterior=True), Positions(exterior=True)) == pytest.approx(60)

    # these axes carry no opposite-side penalty
    assert positional_score(Positions(upper=True), Positions(lower=True)) == 0
    assert positional_score(Positions(lower=True), Positions(upper=True)) == 0
    assert positional_score(Positions(interior=True), Positions(exterior=True)) == 0
    assert positional_score(Positions(exterior=True), Positions(interior=True)) == 0


def test_opposite_position_ranks_lower():
    front = PartRecord(reference="A1", designation="Amortisseur avant")
    rear = PartRecord(reference="A2", designation="Amortisseur arriere")
    s_front, _ = _score("amortisseur avant", front)
    s_rear, _ = _score("amortisseur avant", rear)
    assert s_front > s_rear


def test_model_affinity():
    a = PartRecord(reference="M1", designation="Phare avant", model="variantA")
    b = PartRecord(reference="M2", designation="Phare avant", model="variantB")
    both = PartRecord(reference="M3", designation="Phare avant", model="both")

    s_a, _ = _score("phare", a, model="variantA")
    s_b, _ = _score("phare", b, model="variantA")
    s_both, _ = _score("phare", both, model="variantA")
    s_none, _ = _score("phare", b)

    assert s_a - s_both == pytest.approx(config.MODEL_MATCH_BONUS)
    assert s_none - s_b == pytest.approx(config.MODEL_MISMATCH_PENALTY)
    assert s_a > s_b


def test_stock_bonus_and_missing_vehicle_type():
    in_stock = PartRecord(reference="S1", designation="Batterie", stock=3)
    out_of_stock = PartRecord(reference="S2", designation="Batterie", stock=0)
    s_in, _ = _score("batterie", in_stock)
    s_out, _ = _score("batterie", out_of_stock)
    assert s_in - s_out == pytest.approx(config.IN_STOCK_BONUS)


def test_vehicle_type_code_bonus():
    coded = PartRecord(reference="V1", designation="Bougie", vehicleType="K10B")
    plain = PartRecord(reference="V2", designation="Bougie")
    s_coded, _ = _score("bougie k10b", coded)
    s_plain, _ = _score("bougie k10b", plain)
    assert s_coded - s_plain == pytest.approx(config.VEHICLE_TYPE_BONUS)


def test_query_view_reused_across_parts():
    view = QueryView.build("filtre", expand_tokens(["filtre"]))
    s1, _ = score_part(view, PartRecord(reference="F1", designation="Filtre a air"))
    s2, _ = score_part(view, PartRecord(reference="F2", designation="Filtre a air"))
    assert s1 == s2
