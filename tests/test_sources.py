from pantry_app import crud
from pantry_app.schemas.recipes import RecipeCreate
from pantry_app.services.sources import DbFavoriteSource, DbRecipeSource


def _recipe(db, title, prep=20, ingredients=("Arroz",), tags=None):
    data = RecipeCreate(
        title=title,
        prep_time_minutes=prep,
        ingredients=list(ingredients),
        steps=["Cook"],
        tags=tags,
    )
    return crud.create_recipe(db, data)


def test_quick_threshold_zero_is_respected(test_app):
    _, SessionLocal = test_app
    with SessionLocal() as db:
        _recipe(db, "Salada", prep=5)
        _recipe(db, "Lasanha", prep=90)

        assert DbRecipeSource(db, quick_max_minutes=0).find_quick_recipes() == []
        assert [r.title for r in DbRecipeSource(db).find_quick_recipes()] == ["Salada"]


def test_similar_ids_skip_candidates_without_overlap(test_app):
    _, SessionLocal = test_app
    with SessionLocal() as db:
        user = crud.get_or_create_user(db, username="ana")
        favorite = _recipe(db, "Arroz Branco", ingredients=["Arroz"])
        crud.add_favorite(db, user.id, favorite.id)

        # no shared ingredient, but scores higher than the overlapping one below
        _recipe(db, "Omelete", ingredients=["Ovo"])
        overlapping = _recipe(
            db,
            "Arroz de Forno",
            ingredients=["Arroz", "Tomate", "Cebola", "Alho", "Batata", "Cenoura", "Milho", "Ervilha", "Pimenta", "Azeite"],
            tags=["forno", "jantar"],
        )

        assert DbFavoriteSource(db).find_similar_recipe_ids(user.id, 1) == [overlapping.id]
