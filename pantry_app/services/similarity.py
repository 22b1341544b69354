from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from pantry_app.services.types import RecipeLike


TAG_WEIGHT = 40
INGREDIENT_WEIGHT = 40
# prep time is not compared yet; it contributes a neutral half of its weight
PREP_TIME_WEIGHT = 20


@dataclass(frozen=True)
class SimilarRecipe:
    recipe: RecipeLike
    similarity_score: int
    matching_tags: list[str]
    matching_ingredients: list[str]
    reason: str

    @property
    def has_overlap(self) -> bool:
        return bool(self.matching_tags or self.matching_ingredients)


def _reason(tags: list[str], ingredients: list[str]) -> str:
    if tags and ingredients:
        return "Matches tags and ingredients from your favorites"
    if tags:
        return f"Shares tags: {', '.join(tags[:2])}"
    if ingredients:
        return "Uses ingredients you like"
    return "Popular with similar users"


def _ingredient_overlaps(ingredient: str, liked: set[str]) -> bool:
    name = ingredient.lower()
    return any(fav in name or name in fav for fav in liked)


def similarity(recipe: RecipeLike, liked_tags: set[str], liked_ingredients: set[str]) -> SimilarRecipe:
    tags = [t for t in recipe.tags or [] if t.lower() in liked_tags]
    ingredients = [i for i in recipe.ingredients or [] if _ingredient_overlaps(i, liked_ingredients)]

    points = PREP_TIME_WEIGHT / 2
    max_points = PREP_TIME_WEIGHT
    if recipe.tags:
        points += len(tags) / len(recipe.tags) * TAG_WEIGHT
        max_points += TAG_WEIGHT
    if recipe.ingredients:
        points += len(ingredients) / len(recipe.ingredients) * INGREDIENT_WEIGHT
        max_points += INGREDIENT_WEIGHT

    return SimilarRecipe(
        recipe=recipe,
        similarity_score=int(math.floor(points / max_points * 100 + 0.5)),
        matching_tags=tags,
        matching_ingredients=ingredients,
        reason=_reason(tags, ingredients),
    )


def similar_to_favorites(
    favorites: Sequence[RecipeLike],
    candidates: Sequence[RecipeLike],
    limit: int = 10,
) -> list[SimilarRecipe]:
    """Score non-favorite candidates against the tags and ingredients of the favorites."""
    if not favorites:
        return []

    liked_tags = {t.lower() for r in favorites for t in r.tags or []}
    liked_ingredients = {i.lower() for r in favorites for i in r.ingredients or [] if i.strip()}
    favorite_ids = {r.id for r in favorites}

    scored = [
        similarity(r, liked_tags, liked_ingredients)
        for r in candidates
        if r.id not in favorite_ids
    ]
    scored.sort(key=lambda s: s.similarity_score, reverse=True)
    return scored[:limit]
