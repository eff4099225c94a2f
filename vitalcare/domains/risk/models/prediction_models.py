"""Persisted risk predictions."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from vitalcare.extensions import db


def _prediction_id() -> str:
    return f"pred_{uuid.uuid4().hex}"


class RiskPrediction(db.Model):
    __tablename__ = "risk_prediction"
    __table_args__ = (
        db.Index("ix_risk_prediction_user_created", "user_id", "created_at"),
        db.Index("ix_risk_prediction_alert_created", "alert_level", "created_at"),
    )

    id: Mapped[str] = mapped_column(db.String(64), primary_key=True, default=_prediction_id)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    indicators: Mapped[dict] = mapped_column(db.JSON, nullable=False)
    risks: Mapped[list] = mapped_column(db.JSON, nullable=False)
    overall_risk_score: Mapped[float] = mapped_column(db.Float, nullable=False)
    alert_level: Mapped[str] = mapped_column(db.String(16), nullable=False)
    preventive_plan: Mapped[dict] = mapped_column(db.JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    user = db.relationship("User", lazy="joined")
