import datetime as dt

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Recipe(Base):
    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    title: Mapped[str] = mapped_column(String(200), index=True)
    servings: Mapped[int] = mapped_column(Integer, default=1)
    prep_time_minutes: Mapped[int] = mapped_column(Integer)
    calories: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # easy | medium | hard
    difficulty: Mapped[str] = mapped_column(String(20), default="easy")
    # breakfast | lunch | dinner | snack | dessert
    meal_type: Mapped[str] = mapped_column(String(20), default="lunch")

    # ingredients[0] is the main ingredient
    ingredients: Mapped[list[str]] = mapped_column(JSON, default=list)
    steps: Mapped[list[str]] = mapped_column(JSON, default=list)
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=lambda: dt.datetime.utcnow())

    favorited_by = relationship("FavoriteRecipe", back_populates="recipe", cascade="all, delete-orphan")


class FavoriteRecipe(Base):
    __tablename__ = "favorite_recipes"
    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    recipe_id: Mapped[int] = mapped_column(ForeignKey("recipes.id", ondelete="CASCADE"), index=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=lambda: dt.datetime.utcnow())

    user = relationship("User", back_populates="favorites")
    recipe = relationship("Recipe", back_populates="favorited_by")
