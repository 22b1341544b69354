from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from sqlalchemy.orm import Session

from pantry_app import crud
from pantry_app.api.deps import get_current_user, require_api_key
from pantry_app.db import get_db
from pantry_app.schemas.matching import SimilarRecipeOut
from pantry_app.schemas.recipes import RecipeOut, recipe_out
from pantry_app.services.similarity import similar_to_favorites

router = APIRouter(prefix="/favorites", tags=["favorites"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[RecipeOut])
def list_favorites(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return [recipe_out(r) for r in crud.list_favorite_recipes(db, user.id)]


@router.get("/similar", response_model=list[SimilarRecipeOut])
def similar(
    limit: int = Query(default=10, ge=1, le=50),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    results = similar_to_favorites(crud.list_favorite_recipes(db, user.id), crud.list_recipes(db), limit)
    return [
        SimilarRecipeOut(
            recipe=recipe_out(s.recipe),
            similarity_score=s.similarity_score,
            matching_tags=s.matching_tags,
            matching_ingredients=s.matching_ingredients,
            reason=s.reason,
        )
        for s in results
    ]


@router.get("/{recipe_id}")
def check_favorite(recipe_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return {"recipe_id": recipe_id, "favorite": crud.is_favorite(db, user.id, recipe_id)}


@router.post("/{recipe_id}")
def add_favorite(recipe_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    if not crud.add_favorite(db, user.id, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"recipe_id": recipe_id, "favorite": True}


@router.delete("/{recipe_id}")
def remove_favorite(recipe_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    if not crud.remove_favorite(db, user.id, recipe_id):
        raise HTTPException(status_code=404, detail="Favorite not found")
    return {"recipe_id": recipe_id, "favorite": False}


@router.post("/{recipe_id}/toggle")
def toggle_favorite(recipe_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    if crud.remove_favorite(db, user.id, recipe_id):
        return {"recipe_id": recipe_id, "favorite": False}
    if not crud.add_favorite(db, user.id, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"recipe_id": recipe_id, "favorite": True}
