from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from pantry_app.api.deps import get_current_user, get_pantry_source, get_recipe_source, require_api_key
from pantry_app.schemas.matching import (
    MissingIngredientOut,
    PantryCoverageOut,
    RankedRecipeOut,
    ShoppingSuggestionOut,
)
from pantry_app.schemas.recipes import recipe_out
from pantry_app.services import ranking
from pantry_app.services.pantry import available_names
from pantry_app.services.sources import DbPantrySource, DbRecipeSource
from pantry_app.services.types import RankedRecipe
from pantry_app.settings import settings

router = APIRouter(prefix="/match", tags=["match"], dependencies=[Depends(require_api_key)])


def _ranked_out(item: RankedRecipe) -> RankedRecipeOut:
    return RankedRecipeOut(
        recipe=recipe_out(item.recipe),
        match_percentage=item.match_percentage,
        available_ingredients=item.available_ingredients,
        missing_ingredients=item.missing_ingredients,
        can_make=item.can_make,
    )


def _available(pantry: DbPantrySource, user_id: int, include_staples: bool) -> list[str]:
    return available_names(pantry.find_by_user_id(user_id), include_staples=include_staples)


@router.get("", response_model=list[RankedRecipeOut])
def match_recipes(
    min_match: int | None = Query(default=None, ge=0, le=100),
    sort: bool = True,
    only_makeable: bool = False,
    threshold: int | None = Query(default=None, ge=0, le=100),
    staples: bool = False,
    recipes: DbRecipeSource = Depends(get_recipe_source),
    pantry: DbPantrySource = Depends(get_pantry_source),
    user=Depends(get_current_user),
):
    ranked = ranking.rank_by_match(
        recipes.find_all(),
        _available(pantry, user.id, staples),
        min_match_percent=min_match,
        sort_by_match=sort,
        only_makeable=only_makeable,
        can_make_threshold=settings.CAN_MAKE_THRESHOLD if threshold is None else threshold,
    )
    return [_ranked_out(r) for r in ranked]


@router.get("/can-make", response_model=list[RankedRecipeOut])
def can_make(
    min_match: int = Query(default=100, ge=0, le=100),
    staples: bool = False,
    recipes: DbRecipeSource = Depends(get_recipe_source),
    pantry: DbPantrySource = Depends(get_pantry_source),
    user=Depends(get_current_user),
):
    ranked = ranking.rank_by_match(
        recipes.find_all(),
        _available(pantry, user.id, staples),
        min_match_percent=min_match,
        can_make_threshold=settings.CAN_MAKE_THRESHOLD,
    )
    return [_ranked_out(r) for r in ranked]


@router.get("/almost", response_model=list[RankedRecipeOut])
def almost(
    max_missing: int | None = Query(default=None, ge=1, le=20),
    staples: bool = False,
    recipes: DbRecipeSource = Depends(get_recipe_source),
    pantry: DbPantrySource = Depends(get_pantry_source),
    user=Depends(get_current_user),
):
    ranked = ranking.almost_makeable(
        recipes.find_all(),
        _available(pantry, user.id, staples),
        max_missing=settings.ALMOST_MAX_MISSING if max_missing is None else max_missing,
        can_make_threshold=settings.CAN_MAKE_THRESHOLD,
    )
    return [_ranked_out(r) for r in ranked]


@router.get("/best", response_model=RankedRecipeOut | None)
def best(
    staples: bool = False,
    recipes: DbRecipeSource = Depends(get_recipe_source),
    pantry: DbPantrySource = Depends(get_pantry_source),
    user=Depends(get_current_user),
):
    top = ranking.best_match(
        recipes.find_all(),
        _available(pantry, user.id, staples),
        can_make_threshold=settings.CAN_MAKE_THRESHOLD,
    )
    return _ranked_out(top) if top else None


@router.get("/coverage", response_model=PantryCoverageOut)
def coverage(
    recipes: DbRecipeSource = Depends(get_recipe_source),
    pantry: DbPantrySource = Depends(get_pantry_source),
    user=Depends(get_current_user),
):
    ranked = ranking.rank_by_match(
        recipes.find_all(),
        _available(pantry, user.id, False),
        can_make_threshold=settings.CAN_MAKE_THRESHOLD,
    )
    result = ranking.pantry_coverage(ranked)
    return PantryCoverageOut(
        total_recipes=result.total_recipes,
        can_make_count=result.can_make_count,
        almost_count=result.almost_count,
        coverage_percentage=result.coverage_percentage,
        most_missing=[MissingIngredientOut(ingredient=m.ingredient, count=m.count) for m in result.most_missing],
    )


@router.get("/shopping", response_model=list[ShoppingSuggestionOut])
def shopping(
    limit: int = Query(default=10, ge=1, le=50),
    recipes: DbRecipeSource = Depends(get_recipe_source),
    pantry: DbPantrySource = Depends(get_pantry_source),
    user=Depends(get_current_user),
):
    ranked = ranking.rank_by_match(
        recipes.find_all(),
        _available(pantry, user.id, False),
        can_make_threshold=settings.CAN_MAKE_THRESHOLD,
    )
    return [
        ShoppingSuggestionOut(ingredient=s.ingredient, unlocks=s.unlocks, priority=s.priority)
        for s in ranking.suggest_ingredients_to_buy(ranked, limit)
    ]
