from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from pantry_app.services.matching import percent
from pantry_app.services.types import RecipeLike


QUICK_MAX_MINUTES = 30
MEDIUM_MAX_MINUTES = 60
LOW_CALORIES_MAX = 300
MEDIUM_CALORIES_MAX = 500
TOP_TAGS_LIMIT = 10


def format_prep_time(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    if rest == 0:
        return f"{hours}h"
    return f"{hours}h {rest}min"


def time_band(minutes: int) -> str:
    if minutes <= QUICK_MAX_MINUTES:
        return "quick"
    if minutes <= MEDIUM_MAX_MINUTES:
        return "medium"
    return "slow"


def calorie_band(calories: int | None) -> str | None:
    if calories is None:
        return None
    if calories <= LOW_CALORIES_MAX:
        return "low"
    if calories <= MEDIUM_CALORIES_MAX:
        return "medium"
    return "high"


@dataclass(frozen=True)
class TagCount:
    tag: str
    count: int


@dataclass(frozen=True)
class IngredientFrequency:
    ingredient: str
    count: int
    percentage: int


@dataclass(frozen=True)
class RecipeStatistics:
    total: int
    favorites: int
    quick: int
    medium: int
    slow: int
    top_tags: list[TagCount]
    by_difficulty: dict[str, int]
    by_meal_type: dict[str, int]
    average_prep_minutes: int
    average_calories: int | None


def _mean(values: Sequence[int]) -> int | None:
    if not values:
        return None
    # round half up
    return (2 * sum(values) + len(values)) // (2 * len(values))


def recipe_statistics(recipes: Sequence[RecipeLike], favorite_ids: set[int] | None = None) -> RecipeStatistics:
    favorite_ids = favorite_ids or set()
    bands = Counter(time_band(r.prep_time_minutes) for r in recipes)

    tags: Counter[str] = Counter()
    for r in recipes:
        tags.update(r.tags or [])
    # Counter.most_common keeps first-seen order for equal counts
    top_tags = [TagCount(tag=t, count=c) for t, c in tags.most_common(TOP_TAGS_LIMIT)]

    calories = [r.calories for r in recipes if r.calories is not None]
    return RecipeStatistics(
        total=len(recipes),
        favorites=sum(1 for r in recipes if r.id in favorite_ids),
        quick=bands["quick"],
        medium=bands["medium"],
        slow=bands["slow"],
        top_tags=top_tags,
        by_difficulty=dict(Counter(r.difficulty for r in recipes)),
        by_meal_type=dict(Counter(r.meal_type for r in recipes)),
        average_prep_minutes=_mean([r.prep_time_minutes for r in recipes]) or 0,
        average_calories=_mean(calories),
    )


def most_common_ingredients(recipes: Sequence[RecipeLike], limit: int = 20) -> list[IngredientFrequency]:
    counts: Counter[str] = Counter()
    for r in recipes:
        counts.update(i.strip().lower() for i in r.ingredients or [] if i.strip())
    total = len(recipes)
    return [
        IngredientFrequency(ingredient=name, count=c, percentage=percent(c, total))
        for name, c in counts.most_common(limit)
    ]
