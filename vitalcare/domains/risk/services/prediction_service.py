"""Prediction persistence, history and clinician queries."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func

from vitalcare.core.utils.pagination import paginate
from vitalcare.domains.risk.events import RISK_ALERT_RAISED, RISK_PREDICTION_CREATED
from vitalcare.domains.risk.ml.preventive_plan import assess
from vitalcare.domains.risk.models.prediction_models import RiskPrediction
from vitalcare.domains.risk.schemas.risk_schemas import DISEASES, HealthIndicators, RiskAssessment
from vitalcare.extensions import db
from vitalcare.platform.outbox import enqueue as enqueue_outbox

logger = logging.getLogger(__name__)

HIGH_RISK_LEVELS = ("high", "critical")


def create_prediction(user_id: int, indicators: HealthIndicators) -> Tuple[RiskPrediction, RiskAssessment]:
    """Score the indicators, store the result and stage the outbox events."""
    assessment = assess(indicators)
    prediction = RiskPrediction(
        user_id=user_id,
        indicators=indicators.model_dump(mode="json"),
        risks=[risk.model_dump(mode="json") for risk in assessment.risks],
        overall_risk_score=round(assessment.overall_risk_score, 1),
        alert_level=assessment.alert_level,
        preventive_plan=assessment.preventive_plan.model_dump(mode="json"),
    )
    db.session.add(prediction)
    db.session.flush()

    enqueue_outbox(
        RISK_PREDICTION_CREATED,
        {
            "prediction_id": prediction.id,
            "user_id": user_id,
            "overall_risk_score": prediction.overall_risk_score,
            "alert_level": prediction.alert_level,
        },
        user_id=user_id,
    )
    if assessment.alert_level in HIGH_RISK_LEVELS:
        enqueue_outbox(
            RISK_ALERT_RAISED,
            {
                "prediction_id": prediction.id,
                "user_id": user_id,
                "alert_level": assessment.alert_level,
                "diseases": [r.disease for r in assessment.risks if r.risk_level in HIGH_RISK_LEVELS],
                "timeline": assessment.preventive_plan.timeline,
            },
            user_id=user_id,
        )
        logger.info("High-risk prediction %s for user %s (%s)", prediction.id, user_id, assessment.alert_level)
    db.session.commit()
    return prediction, assessment


def list_predictions(user_id: int, page: int = 1, per_page: int = 20) -> Tuple[List[RiskPrediction], int]:
    query = RiskPrediction.query.filter_by(user_id=user_id).order_by(
        RiskPrediction.created_at.desc(), RiskPrediction.id.desc()
    )
    return paginate(query, page, per_page)


def get_prediction(user_id: int, prediction_id: str) -> Optional[RiskPrediction]:
    return RiskPrediction.query.filter_by(id=prediction_id, user_id=user_id).first()


def list_high_risk(limit: int = 50) -> List[RiskPrediction]:
    """Latest high or critical prediction per user, newest first."""
    latest = (
        db.session.query(
            RiskPrediction.user_id.label("user_id"),
            func.max(RiskPrediction.created_at).label("created_at"),
        )
        .filter(RiskPrediction.alert_level.in_(HIGH_RISK_LEVELS))
        .group_by(RiskPrediction.user_id)
        .subquery()
    )
    rows = (
        RiskPrediction.query.join(
            latest,
            (RiskPrediction.user_id == latest.c.user_id) & (RiskPrediction.created_at == latest.c.created_at),
        )
        .filter(RiskPrediction.alert_level.in_(HIGH_RISK_LEVELS))
        .order_by(RiskPrediction.created_at.desc(), RiskPrediction.id.desc())
        .all()
    )
    # Two predictions can share a timestamp; keep one per user.
    seen: set[int] = set()
    result: List[RiskPrediction] = []
    for row in rows:
        if row.user_id in seen:
            continue
        seen.add(row.user_id)
        result.append(row)
        if len(result) >= limit:
            break
    return result


def get_risk_trend(user_id: int, disease: str) -> dict:
    """Scores for one disease across the user's predictions, oldest first."""
    if disease not in DISEASES:
        raise ValueError("validation_error")
    records = (
        RiskPrediction.query.filter_by(user_id=user_id)
        .order_by(RiskPrediction.created_at.asc(), RiskPrediction.id.asc())
        .all()
    )
    dates: List[str] = []
    scores: List[int] = []
    for record in records:
        match = next((r for r in record.risks or [] if r.get("disease") == disease), None)
        if match is None:
            continue
        dates.append(record.created_at.isoformat())
        scores.append(match.get("risk_score", 0))
    return {"disease": disease, "dates": dates, "scores": scores}
