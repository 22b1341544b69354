from __future__ import annotations

import datetime as dt
from pydantic import BaseModel, Field, field_validator, model_validator


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name must not be empty")
    return v


class PantryItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    quantity: float | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, max_length=20)
    lot: str | None = Field(default=None, max_length=50)
    purchased_on: dt.date | None = None
    expires_on: dt.date | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _clean_name(v)

    @model_validator(mode="after")
    def _validate_dates(self) -> "PantryItemCreate":
        if self.purchased_on and self.expires_on and self.expires_on < self.purchased_on:
            raise ValueError("expires_on must not be before purchased_on")
        return self


class PantryItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    quantity: float | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, max_length=20)
    lot: str | None = Field(default=None, max_length=50)
    purchased_on: dt.date | None = None
    expires_on: dt.date | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str | None) -> str | None:
        return _clean_name(v) if v is not None else None

    @model_validator(mode="after")
    def _validate_patch(self) -> "PantryItemUpdate":
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name must not be null")
        if self.purchased_on and self.expires_on and self.expires_on < self.purchased_on:
            raise ValueError("expires_on must not be before purchased_on")
        return self


class PantryItemOut(BaseModel):
    id: int
    name: str
    quantity: float | None
    unit: str | None
    lot: str | None
    purchased_on: dt.date | None
    expires_on: dt.date | None
    days_until_expiry: int | None = None
    status: str = "fresh"

    class Config:
        from_attributes = True
