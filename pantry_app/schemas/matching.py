from __future__ import annotations

from pydantic import BaseModel

from pantry_app.schemas.recipes import RecipeOut


class RankedRecipeOut(BaseModel):
    recipe: RecipeOut
    match_percentage: int
    available_ingredients: list[str]
    missing_ingredients: list[str]
    can_make: bool


class MissingIngredientOut(BaseModel):
    ingredient: str
    count: int


class PantryCoverageOut(BaseModel):
    total_recipes: int
    can_make_count: int
    almost_count: int
    coverage_percentage: int
    most_missing: list[MissingIngredientOut]


class ShoppingSuggestionOut(BaseModel):
    ingredient: str
    unlocks: int
    priority: int


class RecommendedRecipeOut(BaseModel):
    recipe: RecipeOut
    score: float
    reason: str
    strategy: str


class SimilarRecipeOut(BaseModel):
    recipe: RecipeOut
    similarity_score: int
    matching_tags: list[str]
    matching_ingredients: list[str]
    reason: str
