"""Load a small demo catalogue and a demo user with a pantry.

Run after scripts/init_db.py. Prints the demo user's API key.
"""

from __future__ import annotations

import datetime as dt

from pantry_app import crud
from pantry_app.db import SessionLocal
from pantry_app.schemas.pantry import PantryItemCreate
from pantry_app.schemas.recipes import RecipeCreate


RECIPES = [
    RecipeCreate(
        title="Arroz com Feijão",
        prep_time_minutes=40,
        calories=450,
        meal_type="lunch",
        ingredients=["Arroz", "Feijão", "Alho", "Sal"],
        steps=["Cook the rice", "Cook the beans with garlic", "Serve together"],
        tags=["brasileira", "básico"],
    ),
    RecipeCreate(
        title="Omelete de Queijo",
        prep_time_minutes=10,
        calories=320,
        meal_type="breakfast",
        ingredients=["Ovo", "Queijo", "Sal", "Manteiga"],
        steps=["Beat the eggs", "Fry in butter", "Add cheese and fold"],
        tags=["rápida", "vegetariana"],
    ),
    RecipeCreate(
        title="Bolo de Chocolate",
        prep_time_minutes=70,
        calories=650,
        difficulty="medium",
        meal_type="dessert",
        ingredients=["Farinha", "Ovo", "Açúcar", "Chocolate", "Leite"],
        steps=["Mix the dry ingredients", "Add eggs and milk", "Bake for 40 minutes"],
        tags=["doce", "festa"],
    ),
    RecipeCreate(
        title="Salada Caprese",
        prep_time_minutes=15,
        calories=280,
        meal_type="snack",
        ingredients=["Tomate", "Mussarela", "Manjericão", "Azeite"],
        steps=["Slice tomato and cheese", "Layer with basil", "Drizzle olive oil"],
        tags=["rápida", "vegetariana", "italiana"],
    ),
]


def main() -> None:
    today = dt.date.today()
    with SessionLocal() as db:
        if not crud.list_recipes(db):
            for recipe in RECIPES:
                crud.create_recipe(db, recipe)

        user = crud.get_or_create_user(db, "demo")
        if not crud.list_pantry_items(db, user.id):
            for name, days in [("arroz", None), ("feijão", 30), ("ovo", 5), ("leite", 2), ("tomate", -1)]:
                expires = today + dt.timedelta(days=days) if days is not None else None
                crud.create_pantry_item(db, user.id, PantryItemCreate(name=name, expires_on=expires))

        token = crud.rotate_user_api_key(db, user.id)
    print(f"Seeded demo data. Demo user API key: {token}")


if __name__ == "__main__":
    main()
