from __future__ import annotations

import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query

from sqlalchemy.orm import Session

from pantry_app import crud
from pantry_app.api.deps import get_current_user, get_today, require_api_key
from pantry_app.db import get_db
from pantry_app.schemas.pantry import PantryItemCreate, PantryItemOut, PantryItemUpdate
from pantry_app.services.pantry import days_until_expiry, expiry_status
from pantry_app.settings import settings

router = APIRouter(prefix="/pantry", tags=["pantry"], dependencies=[Depends(require_api_key)])


def _to_out(item, today: dt.date) -> PantryItemOut:
    days = days_until_expiry(item.expires_on, today)
    out = PantryItemOut.model_validate(item)
    return out.model_copy(update={"days_until_expiry": days, "status": expiry_status(days)})


@router.get("", response_model=list[PantryItemOut])
def list_items(db: Session = Depends(get_db), user=Depends(get_current_user), today: dt.date = Depends(get_today)):
    return [_to_out(i, today) for i in crud.list_pantry_items(db, user.id)]


@router.post("", response_model=PantryItemOut)
def add_item(
    payload: PantryItemCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
    today: dt.date = Depends(get_today),
):
    return _to_out(crud.create_pantry_item(db, user.id, payload), today)


@router.get("/expiring", response_model=list[PantryItemOut])
def list_expiring(
    days: int | None = Query(default=None, ge=0, le=365),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
    today: dt.date = Depends(get_today),
):
    window = settings.EXPIRING_SOON_DAYS if days is None else days
    return [_to_out(i, today) for i in crud.list_expiring_items(db, user.id, today, window)]


@router.get("/expired", response_model=list[PantryItemOut])
def list_expired(db: Session = Depends(get_db), user=Depends(get_current_user), today: dt.date = Depends(get_today)):
    return [_to_out(i, today) for i in crud.list_expired_items(db, user.id, today)]


@router.delete("/expired")
def purge_expired(db: Session = Depends(get_db), user=Depends(get_current_user), today: dt.date = Depends(get_today)):
    return {"ok": True, "deleted": crud.delete_expired_items(db, user.id, today)}


@router.patch("/{item_id}", response_model=PantryItemOut)
def patch_item(
    item_id: int,
    payload: PantryItemUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
    today: dt.date = Depends(get_today),
):
    item = crud.update_pantry_item(db, user.id, item_id, payload)
    if not item:
        raise HTTPException(status_code=404, detail="Pantry item not found")
    return _to_out(item, today)


@router.delete("/{item_id}")
def delete_item(item_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    ok = crud.delete_pantry_item(db, user.id, item_id)
    if not ok:
        raise HTTPException(status_code=404, detail="Pantry item not found")
    return {"ok": True}
