"""Pagination helpers for SQLAlchemy queries."""

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, Field
from sqlalchemy.orm import Query


class Pagination(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)


def paginate(query: Query, page: int = 1, per_page: int = 20) -> Tuple[List, int]:
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return items, total


def page_count(total: int, per_page: int) -> int:
    return (total + per_page - 1) // per_page if per_page else 1
