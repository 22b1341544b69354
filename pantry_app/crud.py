from __future__ import annotations

import datetime as dt

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from pantry_app.errors import InvalidArgument, NotFound
from pantry_app.models.pantry import PantryItem
from pantry_app.models.recipe import FavoriteRecipe, Recipe
from pantry_app.models.user import User
from pantry_app.schemas.pantry import PantryItemCreate, PantryItemUpdate
from pantry_app.schemas.recipes import RecipeCreate, RecipeUpdate, RecipeVariation
from pantry_app.security import api_key_prefix, generate_api_key, hash_api_key


# users

def get_or_create_user(db: Session, username: str) -> User:
    user = db.execute(select(User).where(User.username == username)).scalar_one_or_none()
    if user:
        return user
    user = User(username=username)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def rotate_user_api_key(db: Session, user_id: int) -> str:
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    raw = generate_api_key()
    user.api_key_hash = hash_api_key(raw)
    user.api_key_prefix = api_key_prefix(raw)
    user.api_key_last_rotated_at = dt.datetime.utcnow()
    db.add(user)
    db.commit()
    return raw


def get_user_by_api_key(db: Session, raw_key: str) -> User | None:
    hashed = hash_api_key(raw_key)
    return db.execute(select(User).where(User.api_key_hash == hashed)).scalar_one_or_none()


# pantry

def list_pantry_items(db: Session, user_id: int) -> list[PantryItem]:
    return list(
        db.execute(
            select(PantryItem)
            .where(PantryItem.user_id == user_id)
            .order_by(PantryItem.name.asc(), PantryItem.id.asc())
        ).scalars()
    )


def get_pantry_item(db: Session, user_id: int, item_id: int) -> PantryItem | None:
    return db.execute(
        select(PantryItem).where(and_(PantryItem.id == item_id, PantryItem.user_id == user_id))
    ).scalar_one_or_none()


def create_pantry_item(db: Session, user_id: int, data: PantryItemCreate) -> PantryItem:
    item = PantryItem(user_id=user_id, **data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_pantry_item(db: Session, user_id: int, item_id: int, patch: PantryItemUpdate) -> PantryItem | None:
    item = get_pantry_item(db, user_id, item_id)
    if not item:
        return None
    data = patch.model_dump(exclude_unset=True)
    purchased_on = data.get("purchased_on", item.purchased_on)
    expires_on = data.get("expires_on", item.expires_on)
    if purchased_on and expires_on and expires_on < purchased_on:
        raise InvalidArgument("expires_on must not be before purchased_on")
    for k, v in data.items():
        setattr(item, k, v)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def delete_pantry_item(db: Session, user_id: int, item_id: int) -> bool:
    item = get_pantry_item(db, user_id, item_id)
    if not item:
        return False
    db.delete(item)
    db.commit()
    return True


def list_expiring_items(db: Session, user_id: int, today: dt.date, days: int) -> list[PantryItem]:
    """Items expiring between today and today + days, inclusive."""
    until = today + dt.timedelta(days=days)
    return list(
        db.execute(
            select(PantryItem)
            .where(
                and_(
                    PantryItem.user_id == user_id,
                    PantryItem.expires_on.is_not(None),
                    PantryItem.expires_on >= today,
                    PantryItem.expires_on <= until,
                )
            )
            .order_by(PantryItem.expires_on.asc(), PantryItem.id.asc())
        ).scalars()
    )


def list_expired_items(db: Session, user_id: int, today: dt.date) -> list[PantryItem]:
    return list(
        db.execute(
            select(PantryItem)
            .where(
                and_(
                    PantryItem.user_id == user_id,
                    PantryItem.expires_on.is_not(None),
                    PantryItem.expires_on < today,
                )
            )
            .order_by(PantryItem.expires_on.asc(), PantryItem.id.asc())
        ).scalars()
    )


def delete_expired_items(db: Session, user_id: int, today: dt.date) -> int:
    items = list_expired_items(db, user_id, today)
    for item in items:
        db.delete(item)
    db.commit()
    return len(items)


# recipes

def list_recipes(db: Session) -> list[Recipe]:
    return list(db.execute(select(Recipe).order_by(Recipe.id.asc())).scalars())


def get_recipe(db: Session, recipe_id: int) -> Recipe | None:
    return db.get(Recipe, recipe_id)


def create_recipe(db: Session, data: RecipeCreate, author_id: int | None = None) -> Recipe:
    recipe = Recipe(author_id=author_id, **data.model_dump())
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


def update_recipe(db: Session, recipe_id: int, patch: RecipeUpdate) -> Recipe | None:
    recipe = get_recipe(db, recipe_id)
    if not recipe:
        return None
    for k, v in patch.model_dump(exclude_unset=True).items():
        setattr(recipe, k, v)
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


def delete_recipe(db: Session, recipe_id: int) -> bool:
    recipe = get_recipe(db, recipe_id)
    if not recipe:
        return False
    db.delete(recipe)
    db.commit()
    return True


def duplicate_with_variations(
    db: Session,
    recipe_id: int,
    variations: list[RecipeVariation],
    author_id: int | None = None,
) -> list[Recipe]:
    original = get_recipe(db, recipe_id)
    if not original:
        raise NotFound(f"Recipe {recipe_id} not found")

    created: list[Recipe] = []
    for variation in variations:
        changes = variation.model_dump(exclude_unset=True, exclude={"suffix"})
        tags = changes.get("tags", original.tags)
        copy = Recipe(
            author_id=author_id,
            title=f"{original.title} - {variation.suffix.strip()}",
            servings=changes.get("servings", original.servings),
            prep_time_minutes=changes.get("prep_time_minutes", original.prep_time_minutes),
            calories=changes.get("calories", original.calories),
            difficulty=changes.get("difficulty", original.difficulty),
            meal_type=changes.get("meal_type", original.meal_type),
            ingredients=list(changes.get("ingredients") or original.ingredients),
            steps=list(changes.get("steps") or original.steps),
            tags=list(tags) if tags else None,
        )
        db.add(copy)
        created.append(copy)
    db.commit()
    for recipe in created:
        db.refresh(recipe)
    return created


def list_popular_recipes(db: Session, limit: int) -> list[Recipe]:
    """Most favorited first; recipes nobody favorited follow in id order."""
    fav_count = func.count(FavoriteRecipe.id)
    stmt = (
        select(Recipe)
        .outerjoin(FavoriteRecipe, FavoriteRecipe.recipe_id == Recipe.id)
        .group_by(Recipe.id)
        .order_by(fav_count.desc(), Recipe.id.asc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars())


def list_quick_recipes(db: Session, max_minutes: int) -> list[Recipe]:
    return list(
        db.execute(
            select(Recipe)
            .where(Recipe.prep_time_minutes <= max_minutes)
            .order_by(Recipe.prep_time_minutes.asc(), Recipe.id.asc())
        ).scalars()
    )


# favorites

def _get_favorite(db: Session, user_id: int, recipe_id: int) -> FavoriteRecipe | None:
    return db.execute(
        select(FavoriteRecipe).where(
            and_(FavoriteRecipe.user_id == user_id, FavoriteRecipe.recipe_id == recipe_id)
        )
    ).scalar_one_or_none()


def is_favorite(db: Session, user_id: int, recipe_id: int) -> bool:
    return _get_favorite(db, user_id, recipe_id) is not None


def add_favorite(db: Session, user_id: int, recipe_id: int) -> FavoriteRecipe | None:
    if not get_recipe(db, recipe_id):
        return None
    existing = _get_favorite(db, user_id, recipe_id)
    if existing:
        return existing
    fav = FavoriteRecipe(user_id=user_id, recipe_id=recipe_id)
    db.add(fav)
    db.commit()
    db.refresh(fav)
    return fav


def remove_favorite(db: Session, user_id: int, recipe_id: int) -> bool:
    fav = _get_favorite(db, user_id, recipe_id)
    if not fav:
        return False
    db.delete(fav)
    db.commit()
    return True


def list_favorite_recipes(db: Session, user_id: int) -> list[Recipe]:
    return list(
        db.execute(
            select(Recipe)
            .join(FavoriteRecipe, FavoriteRecipe.recipe_id == Recipe.id)
            .where(FavoriteRecipe.user_id == user_id)
            .order_by(FavoriteRecipe.created_at.desc(), FavoriteRecipe.id.desc())
        ).scalars()
    )


def list_favorite_ids(db: Session, user_id: int) -> set[int]:
    return set(
        db.execute(select(FavoriteRecipe.recipe_id).where(FavoriteRecipe.user_id == user_id)).scalars()
    )
