from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from pantry_app.api.deps import (
    get_current_user,
    get_favorite_source,
    get_pantry_source,
    get_recipe_source,
    require_api_key,
)
from pantry_app.schemas.matching import RecommendedRecipeOut
from pantry_app.schemas.recipes import recipe_out
from pantry_app.services.recommend import recommend_for_user
from pantry_app.services.sources import DbFavoriteSource, DbPantrySource, DbRecipeSource
from pantry_app.settings import settings

router = APIRouter(prefix="/recommendations", tags=["recommendations"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[RecommendedRecipeOut])
def get_recommendations(
    limit: int | None = Query(default=None, description="1..RECOMMEND_MAX_LIMIT"),
    staples: bool = False,
    recipes: DbRecipeSource = Depends(get_recipe_source),
    pantry: DbPantrySource = Depends(get_pantry_source),
    favorites: DbFavoriteSource = Depends(get_favorite_source),
    user=Depends(get_current_user),
):
    blended = recommend_for_user(
        user.id,
        settings.RECOMMEND_DEFAULT_LIMIT if limit is None else limit,
        recipes,
        pantry,
        favorites,
        pantry_min_match=settings.PANTRY_MIN_MATCH,
        include_staples=staples,
        max_limit=settings.RECOMMEND_MAX_LIMIT,
    )
    return [
        RecommendedRecipeOut(recipe=recipe_out(r.recipe), score=r.score, reason=r.reason, strategy=r.strategy.value)
        for r in blended
    ]
