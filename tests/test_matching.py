import pytest

from pantry_app.services.matching import can_make, is_satisfied, percent, score


def test_exact_name_matches_case_insensitively():
    assert is_satisfied("Leite", ["leite"])


def test_containment_works_in_both_directions():
    assert is_satisfied("Leite", ["Leite Condensado"])
    assert is_satisfied("Limão Siciliano", ["limão"])


def test_loose_matching_is_kept():
    # "sal" is inside "salsão"; accepted over-match
    assert is_satisfied("Sal", ["Salsão"])


def test_no_available_names_never_matches():
    assert not is_satisfied("Arroz", [])


def test_blank_names_are_ignored():
    assert not is_satisfied("Arroz", ["", "   "])
    assert not is_satisfied("  ", ["arroz"])


def test_partial_pantry_match():
    result = score(["Arroz", "Feijão", "Sal"], ["arroz", "sal", "pimenta"])
    assert result.match_percentage == 67
    assert result.available_ingredients == ["Arroz", "Sal"]
    assert result.missing_ingredients == ["Feijão"]


def test_partition_keeps_order_and_covers_all_ingredients():
    ingredients = ["Ovo", "Farinha", "Leite", "Açúcar", "Chocolate"]
    result = score(ingredients, ["leite", "ovo"])
    assert len(result.available_ingredients) + len(result.missing_ingredients) == len(ingredients)
    assert not set(result.available_ingredients) & set(result.missing_ingredients)
    assert result.available_ingredients == ["Ovo", "Leite"]
    assert result.missing_ingredients == ["Farinha", "Açúcar", "Chocolate"]


def test_empty_ingredient_list_scores_zero():
    result = score([], ["arroz"])
    assert result.match_percentage == 0
    assert result.available_ingredients == []
    assert result.missing_ingredients == []


def test_empty_pantry_scores_zero_and_cannot_make():
    ingredients = ["Arroz", "Feijão"]
    assert score(ingredients, []).match_percentage == 0
    for threshold in (1, 50, 80, 100):
        assert not can_make(ingredients, [], threshold)


def test_rounding_is_half_up():
    assert percent(1, 8) == 13
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(1, 2) == 50
    assert percent(0, 0) == 0


@pytest.mark.parametrize("threshold", [0, 25, 50, 67, 68, 80, 100])
def test_can_make_agrees_with_score(threshold):
    ingredients = ["Arroz", "Feijão", "Sal"]
    available = ["arroz", "sal"]
    expected = score(ingredients, available).match_percentage >= threshold
    assert can_make(ingredients, available, threshold) is expected


def test_can_make_default_threshold_is_80():
    ingredients = ["a1", "b2", "c3", "d4", "e5"]
    assert can_make(ingredients, ["a1", "b2", "c3", "d4"])
    assert not can_make(ingredients, ["a1", "b2", "c3"])
