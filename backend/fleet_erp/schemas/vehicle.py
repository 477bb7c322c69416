from __future__ import annotations

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from fleet_erp.core.enums import VehicleStatus
from fleet_erp.schemas.common import BaseReadModel

_PLATE_RE = re.compile(r"^[A-Z0-9-]{5,10}$")


def _normalize_plate(value: str) -> str:
    normalized = value.strip().upper().replace(" ", "")
    if not _PLATE_RE.match(normalized):
        raise ValueError("plate must have 5-10 letters, digits or dashes")
    return normalized


class VehicleCreate(BaseModel):
    plate: str
    brand: str | None = Field(default=None, max_length=64)
    model: str | None = Field(default=None, max_length=64)
    year: int | None = Field(default=None, ge=1900, le=2100)
    color: str | None = Field(default=None, max_length=32)
    current_km: int = Field(default=0, ge=0)
    status: VehicleStatus = VehicleStatus.ACTIVE
    branch_id: UUID | None = None

    @field_validator("plate")
    @classmethod
    def normalize_plate(cls, value: str) -> str:
        return _normalize_plate(value)


class VehicleUpdate(BaseModel):
    plate: str | None = None
    brand: str | None = Field(default=None, max_length=64)
    model: str | None = Field(default=None, max_length=64)
    year: int | None = Field(default=None, ge=1900, le=2100)
    color: str | None = Field(default=None, max_length=32)

    @field_validator("plate")
    @classmethod
    def normalize_plate(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _normalize_plate(value)


class VehicleStatusUpdate(BaseModel):
    status: VehicleStatus


class VehicleKmUpdate(BaseModel):
    current_km: int = Field(ge=0)


class VehicleRead(BaseReadModel):
    id: UUID
    plate: str
    brand: str | None = None
    model: str | None = None
    year: int | None = None
    color: str | None = None
    current_km: int
    status: VehicleStatus
    branch_id: UUID
    created_at: datetime
    updated_at: datetime
