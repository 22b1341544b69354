from __future__ import annotations

import datetime as dt
from typing import Protocol, Sequence

from sqlalchemy.orm import Session

from pantry_app import crud
from pantry_app.services.pantry import PantrySnapshot, snapshot
from pantry_app.services.similarity import similar_to_favorites
from pantry_app.services.types import RecipeLike
from pantry_app.settings import settings


class RecipeSource(Protocol):
    def find_all(self) -> Sequence[RecipeLike]: ...

    def find_by_id(self, recipe_id: int) -> RecipeLike | None: ...

    def find_popular(self, limit: int) -> Sequence[RecipeLike]: ...

    def find_quick_recipes(self) -> Sequence[RecipeLike]: ...

    def find_by_tag(self, tag: str) -> Sequence[RecipeLike]: ...


class PantrySource(Protocol):
    def find_by_user_id(self, user_id) -> Sequence[PantrySnapshot]: ...


class FavoriteSource(Protocol):
    def find_similar_recipe_ids(self, user_id, limit: int) -> list[int]: ...


class DbRecipeSource:
    def __init__(self, db: Session, quick_max_minutes: int | None = None) -> None:
        self.db = db
        self.quick_max_minutes = settings.QUICK_MAX_MINUTES if quick_max_minutes is None else quick_max_minutes

    def find_all(self):
        return crud.list_recipes(self.db)

    def find_by_id(self, recipe_id: int):
        return crud.get_recipe(self.db, recipe_id)

    def find_popular(self, limit: int):
        return crud.list_popular_recipes(self.db, limit)

    def find_quick_recipes(self):
        return crud.list_quick_recipes(self.db, self.quick_max_minutes)

    def find_by_tag(self, tag: str):
        needle = tag.strip().lower()
        return [r for r in self.find_all() if any(t.lower() == needle for t in r.tags or [])]


class DbPantrySource:
    def __init__(self, db: Session, today: dt.date | None = None) -> None:
        self.db = db
        self.today = today

    def find_by_user_id(self, user_id):
        return snapshot(crud.list_pantry_items(self.db, int(user_id)), self.today)


class DbFavoriteSource:
    """Favorites-similarity ordering; falls back to the most favorited recipes."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_similar_recipe_ids(self, user_id, limit: int) -> list[int]:
        favorites = crud.list_favorite_recipes(self.db, int(user_id))
        if not favorites:
            return [r.id for r in crud.list_popular_recipes(self.db, limit)]
        candidates = crud.list_recipes(self.db)
        similar = similar_to_favorites(favorites, candidates, len(candidates))
        return [s.recipe.id for s in similar if s.has_overlap][:limit]
