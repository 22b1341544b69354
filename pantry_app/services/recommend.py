from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from pantry_app.errors import InvalidArgument
from pantry_app.services.pantry import available_names
from pantry_app.services.ranking import rank_by_match
from pantry_app.services.sources import FavoriteSource, PantrySource, RecipeSource
from pantry_app.services.stats import format_prep_time
from pantry_app.services.types import RankedRecipe, RecipeLike, RecommendationStrategy, RecommendedRecipe


logger = logging.getLogger("pantry_recommend")

MIN_LIMIT = 1
MAX_LIMIT = 50
PANTRY_MIN_MATCH = 50

# share of `limit` each strategy may contribute, in percent
STRATEGY_SHARES = {
    RecommendationStrategy.PANTRY: 40,
    RecommendationStrategy.FAVORITES: 30,
    RecommendationStrategy.POPULAR: 20,
    RecommendationStrategy.QUICK: 10,
}


@dataclass
class StrategyResults:
    pantry_based: list[RecommendedRecipe] = field(default_factory=list)
    favorites_based: list[RecommendedRecipe] = field(default_factory=list)
    popular: list[RecommendedRecipe] = field(default_factory=list)
    quick: list[RecommendedRecipe] = field(default_factory=list)

    def in_priority_order(self) -> list[RecommendedRecipe]:
        return [*self.pantry_based, *self.favorites_based, *self.popular, *self.quick]


def validate_limit(limit: int, max_limit: int = MAX_LIMIT) -> None:
    if not MIN_LIMIT <= limit <= max_limit:
        raise InvalidArgument(f"limit must be between {MIN_LIMIT} and {max_limit}")


def allocate(limit: int) -> dict[RecommendationStrategy, int]:
    """Per-strategy candidate counts; each share is rounded up on its own."""
    return {strategy: -(-limit * share // 100) for strategy, share in STRATEGY_SHARES.items()}


def pantry_based(ranked: Sequence[RankedRecipe], limit: int, min_match: int = PANTRY_MIN_MATCH) -> list[RecommendedRecipe]:
    eligible = [r for r in ranked if r.match_percentage >= min_match]
    eligible.sort(key=lambda r: r.match_percentage, reverse=True)
    return [
        RecommendedRecipe(
            recipe=r.recipe,
            score=r.match_percentage,
            reason=f"You have {r.match_percentage}% of the ingredients",
            strategy=RecommendationStrategy.PANTRY,
        )
        for r in eligible[:limit]
    ]


def favorites_based(similar: Sequence[RecipeLike], limit: int) -> list[RecommendedRecipe]:
    return [
        RecommendedRecipe(
            recipe=recipe,
            score=100 - 5 * i,
            reason="Similar to your favorite recipes",
            strategy=RecommendationStrategy.FAVORITES,
        )
        for i, recipe in enumerate(similar[:limit])
    ]


def popular_based(popular: Sequence[RecipeLike], limit: int) -> list[RecommendedRecipe]:
    return [
        RecommendedRecipe(
            recipe=recipe,
            score=80 - 3 * i,
            reason="Popular with other users",
            strategy=RecommendationStrategy.POPULAR,
        )
        for i, recipe in enumerate(popular[:limit])
    ]


def quick_based(quick: Sequence[RecipeLike], limit: int) -> list[RecommendedRecipe]:
    return [
        RecommendedRecipe(
            recipe=recipe,
            score=70 - 2 * i,
            reason=f"Ready in just {format_prep_time(recipe.prep_time_minutes)}",
            strategy=RecommendationStrategy.QUICK,
        )
        for i, recipe in enumerate(quick[:limit])
    ]


def blend(results: StrategyResults, limit: int, max_limit: int = MAX_LIMIT) -> list[RecommendedRecipe]:
    validate_limit(limit, max_limit)

    seen: set[int] = set()
    unique: list[RecommendedRecipe] = []
    for item in results.in_priority_order():
        if item.recipe.id in seen:
            continue
        seen.add(item.recipe.id)
        unique.append(item)

    unique.sort(key=lambda r: r.score, reverse=True)
    return unique[:limit]


def _run_strategy(
    strategy: RecommendationStrategy,
    build: Callable[[], list[RecommendedRecipe]],
) -> list[RecommendedRecipe]:
    try:
        return build()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Strategy %s failed, continuing without it: %s", strategy.value, exc, exc_info=True)
        return []


def _require_user_id(user_id: int | str | None) -> None:
    if user_id is None or (isinstance(user_id, str) and not user_id.strip()):
        raise InvalidArgument("user id is required")


def recommend_for_user(
    user_id: int | str,
    limit: int,
    recipes: RecipeSource,
    pantry: PantrySource,
    favorites: FavoriteSource,
    *,
    pantry_min_match: int = PANTRY_MIN_MATCH,
    include_staples: bool = False,
    max_limit: int = MAX_LIMIT,
) -> list[RecommendedRecipe]:
    _require_user_id(user_id)
    validate_limit(limit, max_limit)
    counts = allocate(limit)

    def _pantry() -> list[RecommendedRecipe]:
        available = available_names(pantry.find_by_user_id(user_id), include_staples=include_staples)
        ranked = rank_by_match(recipes.find_all(), available, sort_by_match=False)
        return pantry_based(ranked, counts[RecommendationStrategy.PANTRY], pantry_min_match)

    def _favorites() -> list[RecommendedRecipe]:
        n = counts[RecommendationStrategy.FAVORITES]
        similar = []
        for recipe_id in favorites.find_similar_recipe_ids(user_id, n):
            recipe = recipes.find_by_id(recipe_id)
            if recipe is not None:
                similar.append(recipe)
        return favorites_based(similar, n)

    def _popular() -> list[RecommendedRecipe]:
        n = counts[RecommendationStrategy.POPULAR]
        return popular_based(recipes.find_popular(n), n)

    def _quick() -> list[RecommendedRecipe]:
        n = counts[RecommendationStrategy.QUICK]
        return quick_based(recipes.find_quick_recipes()[:n], n)

    results = StrategyResults(
        pantry_based=_run_strategy(RecommendationStrategy.PANTRY, _pantry),
        favorites_based=_run_strategy(RecommendationStrategy.FAVORITES, _favorites),
        popular=_run_strategy(RecommendationStrategy.POPULAR, _popular),
        quick=_run_strategy(RecommendationStrategy.QUICK, _quick),
    )
    blended = blend(results, limit, max_limit)
    logger.info(
        "Recommendations for user %s: %s blended (pantry=%s favorites=%s popular=%s quick=%s)",
        user_id,
        len(blended),
        len(results.pantry_based),
        len(results.favorites_based),
        len(results.popular),
        len(results.quick),
    )
    return blended
