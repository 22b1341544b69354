from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable

from pantry_app.settings import settings


COMMON_STAPLES = ("sal", "pimenta", "azeite", "óleo", "água", "açúcar")

STATUS_EXPIRED = "expired"
STATUS_EXPIRING = "expiring"
STATUS_FRESH = "fresh"


@dataclass(frozen=True)
class PantrySnapshot:
    name: str
    expiry_days_remaining: int | None = None


def days_until_expiry(expires_on: dt.date | None, today: dt.date | None = None) -> int | None:
    if expires_on is None:
        return None
    today = today or dt.date.today()
    return (expires_on - today).days


def expiry_status(days: int | None, soon_days: int | None = None) -> str:
    soon = settings.EXPIRING_SOON_DAYS if soon_days is None else soon_days
    if days is None:
        return STATUS_FRESH
    if days < 0:
        return STATUS_EXPIRED
    if days <= soon:
        return STATUS_EXPIRING
    return STATUS_FRESH


def snapshot(items: Iterable, today: dt.date | None = None) -> list[PantrySnapshot]:
    """Freeze ORM pantry rows into name + remaining-days pairs."""
    today = today or dt.date.today()
    return [
        PantrySnapshot(name=item.name, expiry_days_remaining=days_until_expiry(item.expires_on, today))
        for item in items
    ]


def is_available(item: PantrySnapshot) -> bool:
    days = item.expiry_days_remaining
    return days is None or days > 0


def available_names(items: Iterable[PantrySnapshot], include_staples: bool = False) -> list[str]:
    names = [item.name for item in items if is_available(item)]
    if include_staples:
        names.extend(COMMON_STAPLES)
    return names
