from partsearch.constants import SYNONYMS
from partsearch.expansion import expand_tokens, fuzzy_concepts, levenshtein


def test_levenshtein_classic_cases():
    assert levenshtein("", "") == 0
    assert levenshtein("abc", "") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("raditeur", "radiateur") == 1
    assert levenshtein("frein", "frein") == 0


def test_expand_keeps_raw_tokens():
    raw = ["xyzzy", "amortisseur", "qq"]
    expanded = expand_tokens(raw)
    assert set(raw) <= expanded


def test_expand_key_pulls_all_forms():
    expanded = expand_tokens(["amortisseur"])
    assert set(SYNONYMS["amortisseur"]) <= expanded


def test_fuzzy_recovers_misspelled_concept():
    expanded = expand_tokens(["raditeur"])
    assert "radiateur" in expanded
    assert "refroidissement" in expanded


def test_short_tokens_are_never_fuzzy_matched():
    assert fuzzy_concepts("an") == set()
    assert fuzzy_concepts("rad") == set()
    assert expand_tokens(["an"]) == {"an"}


def test_expansion_is_one_hop():
    table = {
        "alpha": ("alpha", "beta"),
        "beta": ("beta", "gamma"),
    }
    expanded = expand_tokens(["alpha"], synonyms=table)
    assert "beta" in expanded
    assert "gamma" not in expanded


def test_position_keys_expand_to_short_forms():
    expanded = expand_tokens(["avant", "gauche"])
    assert {"av", "g", "conducteur"} <= expanded


def test_repeated_tokens_expand_like_one():
    assert expand_tokens(["plaquettes"] * 200) == expand_tokens(["plaquettes"])


def test_fuzzy_respects_max_distance():
    assert "radiateur" in fuzzy_concepts("radiatr")
    assert "radiateur" not in fuzzy_concepts("radiatr", max_distance=1)
