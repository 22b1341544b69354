from pantry_app.services.stats import (
    calorie_band,
    format_prep_time,
    most_common_ingredients,
    recipe_statistics,
    time_band,
)
from pantry_app.services.types import RecipeData


def test_format_prep_time():
    assert format_prep_time(25) == "25 min"
    assert format_prep_time(59) == "59 min"
    assert format_prep_time(60) == "1h"
    assert format_prep_time(120) == "2h"
    assert format_prep_time(95) == "1h 35min"


def test_bands():
    assert [time_band(m) for m in (30, 31, 60, 61)] == ["quick", "medium", "medium", "slow"]
    assert [calorie_band(c) for c in (None, 300, 301, 500, 501)] == [None, "low", "medium", "medium", "high"]


def test_recipe_statistics():
    recipes = [
        RecipeData(id=1, title="A", ingredients=["x"], tags=["doce", "rápida"], prep_time_minutes=20, calories=200, difficulty="easy", meal_type="snack"),
        RecipeData(id=2, title="B", ingredients=["x"], tags=["doce"], prep_time_minutes=45, calories=None, difficulty="medium", meal_type="dessert"),
        RecipeData(id=3, title="C", ingredients=["x"], tags=None, prep_time_minutes=90, calories=501, difficulty="easy", meal_type="dessert"),
    ]
    result = recipe_statistics(recipes, favorite_ids={2, 99})

    assert result.total == 3
    assert result.favorites == 1
    assert (result.quick, result.medium, result.slow) == (1, 1, 1)
    assert [(t.tag, t.count) for t in result.top_tags] == [("doce", 2), ("rápida", 1)]
    assert result.by_difficulty == {"easy": 2, "medium": 1}
    assert result.by_meal_type == {"snack": 1, "dessert": 2}
    assert result.average_prep_minutes == 52
    # absent calories are skipped, not counted as zero
    assert result.average_calories == 351


def test_statistics_of_empty_catalog():
    result = recipe_statistics([])
    assert result.total == 0
    assert result.average_prep_minutes == 0
    assert result.average_calories is None
    assert result.top_tags == []


def test_most_common_ingredients_are_normalized():
    recipes = [
        RecipeData(id=1, title="A", ingredients=["Ovo", "Leite "]),
        RecipeData(id=2, title="B", ingredients=[" ovo", "Farinha"]),
        RecipeData(id=3, title="C", ingredients=["OVO", "leite"]),
        RecipeData(id=4, title="D", ingredients=["Sal"]),
    ]
    result = most_common_ingredients(recipes, limit=2)
    assert [(f.ingredient, f.count, f.percentage) for f in result] == [("ovo", 3, 75), ("leite", 2, 50)]
