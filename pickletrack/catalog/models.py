from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Bar(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    tips: tuple[str, ...] = Field(..., min_length=1, description="Distinct tips mentioning picklebacks")


class LocateResponse(BaseModel):
    id: str = ""
    name: str = ""
    comment: str = ""
