from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from pantry_app.errors import InvalidArgument
from pantry_app.services.matching import DEFAULT_CAN_MAKE_THRESHOLD, percent, score
from pantry_app.services.types import RankedRecipe, RecipeLike


DEFAULT_MAX_MISSING = 2
ALMOST_MATCH_PERCENT = 75
SHOPPING_MIN_MATCH_PERCENT = 50
MOST_MISSING_LIMIT = 10


@dataclass(frozen=True)
class MissingIngredientCount:
    ingredient: str
    count: int


@dataclass(frozen=True)
class PantryCoverage:
    total_recipes: int
    can_make_count: int
    almost_count: int
    coverage_percentage: int
    most_missing: list[MissingIngredientCount]


@dataclass(frozen=True)
class ShoppingSuggestion:
    ingredient: str
    unlocks: int
    priority: int


def _check_percent(value: int | None, name: str) -> None:
    if value is not None and not 0 <= value <= 100:
        raise InvalidArgument(f"{name} must be between 0 and 100")


def rank_recipe(recipe: RecipeLike, available: Sequence[str], can_make_threshold: int = DEFAULT_CAN_MAKE_THRESHOLD) -> RankedRecipe:
    result = score(recipe.ingredients or [], available)
    return RankedRecipe(
        recipe=recipe,
        match_percentage=result.match_percentage,
        available_ingredients=result.available_ingredients,
        missing_ingredients=result.missing_ingredients,
        can_make=result.match_percentage >= can_make_threshold,
    )


def rank_by_match(
    recipes: Iterable[RecipeLike],
    available: Sequence[str],
    *,
    min_match_percent: int | None = None,
    sort_by_match: bool = True,
    only_makeable: bool = False,
    can_make_threshold: int = DEFAULT_CAN_MAKE_THRESHOLD,
) -> list[RankedRecipe]:
    _check_percent(min_match_percent, "min_match_percent")
    _check_percent(can_make_threshold, "can_make_threshold")

    ranked = [rank_recipe(r, available, can_make_threshold) for r in recipes]

    if min_match_percent is not None:
        ranked = [r for r in ranked if r.match_percentage >= min_match_percent]
    if only_makeable:
        ranked = [r for r in ranked if r.can_make]
    if sort_by_match:
        # list.sort is stable: ties keep input order
        ranked.sort(key=lambda r: r.match_percentage, reverse=True)
    return ranked


def almost_makeable(
    recipes: Iterable[RecipeLike],
    available: Sequence[str],
    max_missing: int = DEFAULT_MAX_MISSING,
    can_make_threshold: int = DEFAULT_CAN_MAKE_THRESHOLD,
) -> list[RankedRecipe]:
    if max_missing < 0:
        raise InvalidArgument("max_missing must be >= 0")
    ranked = rank_by_match(recipes, available, can_make_threshold=can_make_threshold)
    return [r for r in ranked if 0 < len(r.missing_ingredients) <= max_missing]


def best_match(
    recipes: Iterable[RecipeLike],
    available: Sequence[str],
    can_make_threshold: int = DEFAULT_CAN_MAKE_THRESHOLD,
) -> RankedRecipe | None:
    ranked = rank_by_match(recipes, available, can_make_threshold=can_make_threshold)
    return ranked[0] if ranked else None


def _count_missing(ranked: Iterable[RankedRecipe]) -> list[MissingIngredientCount]:
    counts: dict[str, int] = {}
    display: dict[str, str] = {}
    for item in ranked:
        for ingredient in item.missing_ingredients:
            key = ingredient.strip().lower()
            display.setdefault(key, ingredient.strip())
            counts[key] = counts.get(key, 0) + 1
    rows = [MissingIngredientCount(ingredient=display[k], count=c) for k, c in counts.items()]
    rows.sort(key=lambda r: r.count, reverse=True)
    return rows


def pantry_coverage(ranked: Sequence[RankedRecipe]) -> PantryCoverage:
    total = len(ranked)
    can = sum(1 for r in ranked if r.can_make)
    almost = sum(1 for r in ranked if not r.can_make and r.match_percentage >= ALMOST_MATCH_PERCENT)
    return PantryCoverage(
        total_recipes=total,
        can_make_count=can,
        almost_count=almost,
        coverage_percentage=percent(can, total),
        most_missing=_count_missing(ranked)[:MOST_MISSING_LIMIT],
    )


def suggest_ingredients_to_buy(ranked: Sequence[RankedRecipe], limit: int = 10) -> list[ShoppingSuggestion]:
    """Missing ingredients of nearly-makeable recipes, by how many recipes each would unlock."""
    if limit < 1:
        raise InvalidArgument("limit must be >= 1")

    unlocks: dict[str, set[int]] = {}
    display: dict[str, str] = {}
    for item in ranked:
        if item.can_make or item.match_percentage < SHOPPING_MIN_MATCH_PERCENT:
            continue
        for ingredient in item.missing_ingredients:
            key = ingredient.strip().lower()
            display.setdefault(key, ingredient.strip())
            unlocks.setdefault(key, set()).add(item.id)

    suggestions = [
        ShoppingSuggestion(ingredient=display[k], unlocks=len(ids), priority=len(ids) * 10)
        for k, ids in unlocks.items()
    ]
    suggestions.sort(key=lambda s: s.priority, reverse=True)
    return suggestions[:limit]
