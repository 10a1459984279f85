from partsearch.expansion import expand_tokens
from partsearch.normalize import tokenize
from partsearch.positional import Positions, designation_positions, query_positions


def _wants(query: str) -> Positions:
    raw = tokenize(query)
    return query_positions(raw, expand_tokens(raw))


def test_designation_short_forms():
    has = designation_positions("AMORTISSEUR AV G")
    assert has.front and has.left
    assert not has.rear and not has.right


def test_designation_both_word_orders():
    a = designation_positions("Feu gauche arriere")
    b = designation_positions("Feu arriere gauche")
    assert a == b
    assert a.rear and a.left


def test_designation_compact_dash_form():
    has = designation_positions("FEU AR-D")
    assert has.rear and has.right
    assert not has.front and not has.left


def test_single_letters_inside_words_do_not_count():
    has = designation_positions("DISQUE DE FREIN")
    # "de" and "disque" contain a "d" but are not the right-hand qualifier
    assert not has.right
    assert not has.left


def test_upper_lower_interior_exterior_by_containment():
    has = designation_positions("Rétroviseur extérieur / bras inférieur")
    assert has.exterior and has.lower
    assert not has.interior and not has.upper


def test_query_wants_through_expansion():
    wants = _wants("amortisseur avant gauche")
    assert wants.front and wants.left
    assert not wants.rear and not wants.right
    assert wants.active() == ["front", "left"]


def test_query_wants_role_words():
    wants = _wants("retroviseur passager")
    assert wants.right and not wants.left


def test_query_without_qualifier():
    assert _wants("radiateur").active() == []


def test_masculine_right_side():
    for designation in ("PHARE AVANT DROIT", "AMORTISSEUR AVANT DROIT"):
        has = designation_positions(designation)
        assert has.front and has.right
        assert not has.left
    assert designation_positions("FEU ARRIERE DROIT").active() == ["rear", "right"]
