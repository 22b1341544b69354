from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from sqlalchemy.orm import Session

from pantry_app import crud
from pantry_app.api.deps import get_current_user, get_recipe_source, require_api_key
from pantry_app.db import get_db
from pantry_app.schemas.recipes import (
    IngredientFrequencyOut,
    RecipeCreate,
    RecipeOut,
    RecipeStatisticsOut,
    RecipeUpdate,
    RecipeVariationsIn,
    SearchResultOut,
    SearchSuggestionsOut,
    TagCountOut,
    recipe_out,
)
from pantry_app.services import search, stats
from pantry_app.services.sources import DbRecipeSource
from pantry_app.settings import settings

router = APIRouter(prefix="/recipes", tags=["recipes"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[RecipeOut])
def list_recipes(
    tag: str | None = Query(default=None, max_length=60),
    source: DbRecipeSource = Depends(get_recipe_source),
    user=Depends(get_current_user),
):
    recipes = source.find_by_tag(tag) if tag else source.find_all()
    return [recipe_out(r) for r in recipes]


@router.post("", response_model=RecipeOut)
def create_recipe(payload: RecipeCreate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return recipe_out(crud.create_recipe(db, payload, author_id=user.id))


@router.get("/search", response_model=list[RecipeOut])
def search_recipes(
    q: str = Query(default=""),
    ingredients: bool = False,
    tags: bool = False,
    order_by: str | None = Query(default=None, description="relevance|title|time|calories"),
    source: DbRecipeSource = Depends(get_recipe_source),
    user=Depends(get_current_user),
):
    min_length = settings.SEARCH_MIN_QUERY_LENGTH
    if order_by is None and not ingredients and not tags:
        found = search.search_by_title(source.find_all(), q, min_length=min_length)
    else:
        found = search.search_advanced(
            source.find_all(),
            q,
            include_ingredients=ingredients,
            include_tags=tags,
            order_by=order_by or search.ORDER_RELEVANCE,
            min_length=min_length,
        )
    return [recipe_out(r) for r in found]


@router.get("/search/relevance", response_model=list[SearchResultOut])
def search_relevance(
    q: str = Query(default=""),
    ingredients: bool = True,
    tags: bool = True,
    source: DbRecipeSource = Depends(get_recipe_source),
    user=Depends(get_current_user),
):
    results = search.search_with_relevance(source.find_all(), q, include_ingredients=ingredients, include_tags=tags)
    return [
        SearchResultOut(recipe=recipe_out(r.recipe), relevance_score=r.relevance_score, matched_in=r.matched_in)
        for r in results
    ]


@router.get("/search/suggestions", response_model=SearchSuggestionsOut)
def search_suggestions(
    q: str = Query(default=""),
    source: DbRecipeSource = Depends(get_recipe_source),
    user=Depends(get_current_user),
):
    found = search.search_by_title(source.find_all(), q, min_length=settings.SEARCH_MIN_QUERY_LENGTH)
    return SearchSuggestionsOut(results=[recipe_out(r) for r in found], suggestions=search.title_suggestions(found))


@router.get("/stats", response_model=RecipeStatisticsOut)
def recipe_stats(db: Session = Depends(get_db), user=Depends(get_current_user)):
    result = stats.recipe_statistics(crud.list_recipes(db), crud.list_favorite_ids(db, user.id))
    return RecipeStatisticsOut(
        total=result.total,
        favorites=result.favorites,
        quick=result.quick,
        medium=result.medium,
        slow=result.slow,
        top_tags=[TagCountOut(tag=t.tag, count=t.count) for t in result.top_tags],
        by_difficulty=result.by_difficulty,
        by_meal_type=result.by_meal_type,
        average_prep_minutes=result.average_prep_minutes,
        average_calories=result.average_calories,
    )


@router.get("/ingredients/common", response_model=list[IngredientFrequencyOut])
def common_ingredients(
    limit: int = Query(default=20, ge=1, le=100),
    source: DbRecipeSource = Depends(get_recipe_source),
    user=Depends(get_current_user),
):
    return [
        IngredientFrequencyOut(ingredient=f.ingredient, count=f.count, percentage=f.percentage)
        for f in stats.most_common_ingredients(source.find_all(), limit)
    ]


@router.get("/{recipe_id}", response_model=RecipeOut)
def get_recipe(recipe_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    recipe = crud.get_recipe(db, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe_out(recipe)


def _require_editable(db: Session, recipe_id: int, user_id: int):
    recipe = crud.get_recipe(db, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    if recipe.author_id is not None and recipe.author_id != user_id:
        raise HTTPException(status_code=403, detail="Recipe belongs to another user")
    return recipe


@router.patch("/{recipe_id}", response_model=RecipeOut)
def patch_recipe(recipe_id: int, payload: RecipeUpdate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    _require_editable(db, recipe_id, user.id)
    return recipe_out(crud.update_recipe(db, recipe_id, payload))


@router.delete("/{recipe_id}")
def delete_recipe(recipe_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    _require_editable(db, recipe_id, user.id)
    crud.delete_recipe(db, recipe_id)
    return {"ok": True}


@router.post("/{recipe_id}/variations", response_model=list[RecipeOut])
def create_variations(
    recipe_id: int,
    payload: RecipeVariationsIn,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    # NotFound is mapped to 404 by the app-level handler
    created = crud.duplicate_with_variations(db, recipe_id, payload.variations, author_id=user.id)
    return [recipe_out(r) for r in created]
