"""Messaging request schemas (camelCase keys accepted)."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

LANGUAGES = {"en", "hi"}
SERVICES = {"health_alerts", "vaccination_reminders", "medication_reminders", "health_tips", "appointments"}


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubscribeRequest(_Request):
    phone_number: str = Field(min_length=7, max_length=32)
    language: str = "en"
    services: List[str] = Field(default_factory=list)

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        val = (v or "en").strip().lower()
        if val not in LANGUAGES:
            raise ValueError("invalid_language")
        return val

    @field_validator("services")
    @classmethod
    def validate_services(cls, v: List[str]) -> List[str]:
        cleaned = list(dict.fromkeys(s.strip().lower() for s in v if s and s.strip()))
        unknown = [s for s in cleaned if s not in SERVICES]
        if unknown:
            raise ValueError("invalid_service")
        return cleaned


class UnsubscribeRequest(_Request):
    phone_number: str = Field(min_length=7, max_length=32)


class SendMessageRequest(_Request):
    phone_number: str = Field(min_length=7, max_length=32)
    message: str = Field(min_length=1, max_length=1600)


class LogsQuery(BaseModel):
    limit: int = Field(default=50, ge=1, le=500)
