"""Places query schema."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class NearbyQuery(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    radius: int = Field(default=5000, ge=1, le=50000)
    type: str = Field(default="doctor", min_length=1, max_length=64)
    keyword: Optional[str] = Field(default=None, max_length=128)

    @field_validator("keyword")
    @classmethod
    def blank_keyword(cls, v: Optional[str]) -> Optional[str]:
        return (v or "").strip() or None
