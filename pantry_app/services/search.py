from __future__ import annotations

from typing import Iterable, Sequence

from pantry_app.errors import InvalidArgument
from pantry_app.services.types import RecipeLike, SearchResult


MIN_QUERY_LENGTH = 2
SUGGESTIONS_LIMIT = 5

TITLE_EXACT_SCORE = 100
TITLE_PREFIX_SCORE = 75
TITLE_CONTAINS_SCORE = 50
INGREDIENT_SCORE = 25
TAG_SCORE = 15

ORDER_RELEVANCE = "relevance"
ORDER_TITLE = "title"
ORDER_TIME = "time"
ORDER_CALORIES = "calories"
ORDER_VALUES = {ORDER_RELEVANCE, ORDER_TITLE, ORDER_TIME, ORDER_CALORIES}


def _require_query(query: str | None, min_length: int) -> str:
    term = (query or "").strip()
    if len(term) < min_length:
        raise InvalidArgument(f"Search query must have at least {min_length} characters")
    return term.lower()


def _any_contains(values: Iterable[str] | None, term: str) -> bool:
    return any(term in v.lower() for v in values or [])


def _title_rank(recipe: RecipeLike, term: str) -> tuple[int, str]:
    title = recipe.title.lower()
    if title == term:
        tier = 0
    elif title.startswith(term):
        tier = 1
    else:
        tier = 2
    return tier, title


def order_by_title_match(recipes: Iterable[RecipeLike], query: str) -> list[RecipeLike]:
    """Exact title first, then prefix matches, then the rest alphabetically."""
    term = query.strip().lower()
    return sorted(recipes, key=lambda r: _title_rank(r, term))


def search_by_title(
    recipes: Iterable[RecipeLike],
    query: str | None,
    min_length: int = MIN_QUERY_LENGTH,
) -> list[RecipeLike]:
    if not query or not query.strip():
        return []
    term = _require_query(query, min_length)
    found = [r for r in recipes if term in r.title.lower()]
    return order_by_title_match(found, term)


def search_advanced(
    recipes: Iterable[RecipeLike],
    query: str | None,
    *,
    include_ingredients: bool = False,
    include_tags: bool = False,
    order_by: str = ORDER_RELEVANCE,
    min_length: int = MIN_QUERY_LENGTH,
) -> list[RecipeLike]:
    term = _require_query(query, min_length)
    if order_by not in ORDER_VALUES:
        raise InvalidArgument(f"order_by must be one of: {sorted(ORDER_VALUES)}")

    found = [
        r
        for r in recipes
        if term in r.title.lower()
        or (include_ingredients and _any_contains(r.ingredients, term))
        or (include_tags and _any_contains(r.tags, term))
    ]

    if order_by == ORDER_TITLE:
        return sorted(found, key=lambda r: r.title.lower())
    if order_by == ORDER_TIME:
        return sorted(found, key=lambda r: r.prep_time_minutes)
    if order_by == ORDER_CALORIES:
        return sorted(found, key=lambda r: r.calories or 0)
    return order_by_title_match(found, term)


def search_with_relevance(
    recipes: Iterable[RecipeLike],
    query: str | None,
    include_ingredients: bool = False,
    include_tags: bool = False,
) -> list[SearchResult]:
    term = (query or "").strip().lower()
    if not term:
        return []

    results: list[SearchResult] = []
    for recipe in recipes:
        matched_in: list[str] = []
        relevance = 0

        title = recipe.title.lower()
        if term in title:
            matched_in.append("title")
            if title == term:
                relevance += TITLE_EXACT_SCORE
            elif title.startswith(term):
                relevance += TITLE_PREFIX_SCORE
            else:
                relevance += TITLE_CONTAINS_SCORE

        if include_ingredients and _any_contains(recipe.ingredients, term):
            matched_in.append("ingredients")
            relevance += INGREDIENT_SCORE

        if include_tags and _any_contains(recipe.tags, term):
            matched_in.append("tags")
            relevance += TAG_SCORE

        if matched_in:
            results.append(SearchResult(recipe=recipe, relevance_score=relevance, matched_in=matched_in))

    results.sort(key=lambda r: r.relevance_score, reverse=True)
    return results


def title_suggestions(found: Sequence[RecipeLike], limit: int = SUGGESTIONS_LIMIT) -> list[str]:
    seen: list[str] = []
    for recipe in found:
        if recipe.title not in seen:
            seen.append(recipe.title)
        if len(seen) >= limit:
            break
    return seen
