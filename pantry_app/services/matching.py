from __future__ import annotations

from typing import Sequence

from pantry_app.services.types import MatchResult


DEFAULT_CAN_MAKE_THRESHOLD = 80


def _norm(value: str) -> str:
    return (value or "").strip().lower()


def percent(part: int, whole: int) -> int:
    """Round-half-up integer percentage; 0 when `whole` is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def is_satisfied(ingredient: str, available: Sequence[str]) -> bool:
    """Loose containment in either direction ("leite" ~ "leite condensado")."""
    needle = _norm(ingredient)
    if not needle:
        return False
    for name in available:
        candidate = _norm(name)
        if not candidate:
            continue
        if needle in candidate or candidate in needle:
            return True
    return False


def score(ingredients: Sequence[str], available: Sequence[str]) -> MatchResult:
    satisfied: list[str] = []
    missing: list[str] = []
    for ingredient in ingredients:
        if is_satisfied(ingredient, available):
            satisfied.append(ingredient)
        else:
            missing.append(ingredient)

    return MatchResult(
        match_percentage=percent(len(satisfied), len(ingredients)),
        available_ingredients=satisfied,
        missing_ingredients=missing,
    )


def can_make(
    ingredients: Sequence[str],
    available: Sequence[str],
    threshold: int = DEFAULT_CAN_MAKE_THRESHOLD,
) -> bool:
    return score(ingredients, available).match_percentage >= threshold
