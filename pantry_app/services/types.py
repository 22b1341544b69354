from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, Sequence


class RecipeLike(Protocol):
    id: int
    title: str
    ingredients: Sequence[str]
    tags: Sequence[str] | None
    prep_time_minutes: int
    calories: int | None
    difficulty: str
    meal_type: str


@dataclass(frozen=True)
class RecipeData:
    """In-memory recipe, interchangeable with the ORM row for the engine."""

    id: int
    title: str
    ingredients: list[str]
    tags: list[str] | None = None
    prep_time_minutes: int = 30
    calories: int | None = None
    difficulty: str = "easy"
    meal_type: str = "lunch"
    steps: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MatchResult:
    match_percentage: int
    available_ingredients: list[str]
    missing_ingredients: list[str]


@dataclass(frozen=True)
class RankedRecipe:
    recipe: Any
    match_percentage: int
    available_ingredients: list[str]
    missing_ingredients: list[str]
    can_make: bool

    @property
    def id(self) -> int:
        return self.recipe.id


class RecommendationStrategy(str, Enum):
    PANTRY = "pantry-based"
    FAVORITES = "favorites-based"
    POPULAR = "popular"
    QUICK = "quick"
    SEASONAL = "seasonal"


@dataclass(frozen=True)
class RecommendedRecipe:
    recipe: Any
    score: float
    reason: str
    strategy: RecommendationStrategy


@dataclass(frozen=True)
class SearchResult:
    recipe: Any
    relevance_score: int
    matched_in: list[str]
