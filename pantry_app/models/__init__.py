from .base import Base
from .pantry import PantryItem
from .recipe import FavoriteRecipe, Recipe
from .user import User

__all__ = [
    "Base",
    "User",
    "PantryItem",
    "Recipe",
    "FavoriteRecipe",
]
