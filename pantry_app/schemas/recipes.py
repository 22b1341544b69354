from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from pantry_app.services.stats import calorie_band, format_prep_time


DIFFICULTY_VALUES = {"easy", "medium", "hard"}
MEAL_TYPE_VALUES = {"breakfast", "lunch", "dinner", "snack", "dessert"}
RECIPE_REQUIRED_FIELDS = ("title", "servings", "prep_time_minutes", "difficulty", "meal_type", "ingredients", "steps")


def _reject_explicit_nulls(model: BaseModel, fields: tuple[str, ...]) -> None:
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{name} must not be null")


def _validate_enum_str(value: str | None, allowed: set[str], field_name: str) -> str | None:
    if value is None:
        return None
    v = value.strip().lower()
    if v not in allowed:
        raise ValueError(f"{field_name} must be one of: {sorted(allowed)}")
    return v


def _clean_list(values: list[str] | None, field_name: str, required: bool) -> list[str] | None:
    if values is None:
        return None
    cleaned = [v.strip() for v in values if v and v.strip()]
    if required and not cleaned:
        raise ValueError(f"{field_name} must have at least one entry")
    return cleaned


class RecipeCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    servings: int = Field(default=1, ge=1, le=100)
    prep_time_minutes: int = Field(gt=0, le=24 * 60)
    calories: int | None = Field(default=None, ge=0)
    difficulty: str = "easy"
    meal_type: str = "lunch"
    ingredients: list[str]
    steps: list[str]
    tags: list[str] | None = None

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("difficulty")
    @classmethod
    def _difficulty(cls, v: str) -> str:
        return _validate_enum_str(v, DIFFICULTY_VALUES, "difficulty")

    @field_validator("meal_type")
    @classmethod
    def _meal_type(cls, v: str) -> str:
        return _validate_enum_str(v, MEAL_TYPE_VALUES, "meal_type")

    @field_validator("ingredients")
    @classmethod
    def _ingredients(cls, v: list[str]) -> list[str]:
        return _clean_list(v, "ingredients", required=True)

    @field_validator("steps")
    @classmethod
    def _steps(cls, v: list[str]) -> list[str]:
        return _clean_list(v, "steps", required=True)

    @field_validator("tags")
    @classmethod
    def _tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_list(v, "tags", required=False)


class RecipeUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    servings: int | None = Field(default=None, ge=1, le=100)
    prep_time_minutes: int | None = Field(default=None, gt=0, le=24 * 60)
    calories: int | None = Field(default=None, ge=0)
    difficulty: str | None = None
    meal_type: str | None = None
    ingredients: list[str] | None = None
    steps: list[str] | None = None
    tags: list[str] | None = None

    @field_validator("title")
    @classmethod
    def _title(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("difficulty")
    @classmethod
    def _difficulty(cls, v: str | None) -> str | None:
        return _validate_enum_str(v, DIFFICULTY_VALUES, "difficulty")

    @field_validator("meal_type")
    @classmethod
    def _meal_type(cls, v: str | None) -> str | None:
        return _validate_enum_str(v, MEAL_TYPE_VALUES, "meal_type")

    @field_validator("ingredients")
    @classmethod
    def _ingredients(cls, v: list[str] | None) -> list[str] | None:
        return _clean_list(v, "ingredients", required=True)

    @field_validator("steps")
    @classmethod
    def _steps(cls, v: list[str] | None) -> list[str] | None:
        return _clean_list(v, "steps", required=True)

    @field_validator("tags")
    @classmethod
    def _tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_list(v, "tags", required=False)

    @model_validator(mode="after")
    def _reject_nulls(self) -> "RecipeUpdate":
        _reject_explicit_nulls(self, RECIPE_REQUIRED_FIELDS)
        return self


class RecipeVariation(RecipeUpdate):
    suffix: str = Field(min_length=1, max_length=60)


class RecipeVariationsIn(BaseModel):
    variations: list[RecipeVariation] = Field(min_length=1, max_length=20)


class RecipeOut(BaseModel):
    id: int
    title: str
    servings: int
    prep_time_minutes: int
    prep_time_label: str | None = None
    calories: int | None
    calorie_band: str | None = None
    difficulty: str
    meal_type: str
    ingredients: list[str]
    steps: list[str]
    tags: list[str] | None
    author_id: int | None = None

    class Config:
        from_attributes = True


class SearchResultOut(BaseModel):
    recipe: RecipeOut
    relevance_score: int
    matched_in: list[str]


class SearchSuggestionsOut(BaseModel):
    results: list[RecipeOut]
    suggestions: list[str]


class TagCountOut(BaseModel):
    tag: str
    count: int


class IngredientFrequencyOut(BaseModel):
    ingredient: str
    count: int
    percentage: int


class RecipeStatisticsOut(BaseModel):
    total: int
    favorites: int
    quick: int
    medium: int
    slow: int
    top_tags: list[TagCountOut]
    by_difficulty: dict[str, int]
    by_meal_type: dict[str, int]
    average_prep_minutes: int
    average_calories: int | None


def recipe_out(recipe) -> RecipeOut:
    out = RecipeOut.model_validate(recipe)
    return out.model_copy(
        update={
            "prep_time_label": format_prep_time(recipe.prep_time_minutes),
            "calorie_band": calorie_band(recipe.calories),
        }
    )
