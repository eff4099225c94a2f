"""Chat log schemas."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from vitalcare.core.utils.pagination import Pagination

BOT_TYPES = {"general", "mental", "image_voice"}


def _bot_type(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    val = v.strip().lower()
    if val not in BOT_TYPES:
        raise ValueError("invalid_bot_type")
    return val


class ChatLogCreate(BaseModel):
    bot_type: str
    message: str = Field(min_length=1, max_length=20000)
    response: str = Field(min_length=1, max_length=50000)

    @field_validator("bot_type")
    @classmethod
    def validate_bot_type(cls, v: str) -> str:
        return _bot_type(v)

    @field_validator("message", "response")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must_not_be_blank")
        return v


class ChatLogFilter(Pagination):
    bot_type: Optional[str] = None

    @field_validator("bot_type")
    @classmethod
    def validate_bot_type(cls, v: Optional[str]) -> Optional[str]:
        return _bot_type(v)
