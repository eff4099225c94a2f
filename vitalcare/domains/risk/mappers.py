"""DTO mappers for the risk domain."""

from __future__ import annotations

from vitalcare.domains.risk.models.prediction_models import RiskPrediction
from vitalcare.domains.risk.schemas.risk_schemas import RiskAssessment


def map_assessment(assessment: RiskAssessment) -> dict:
    data = assessment.model_dump()
    data["overall_risk_score"] = round(assessment.overall_risk_score, 1)
    return data


def map_prediction(p: RiskPrediction) -> dict:
    return {
        "id": p.id,
        "user_id": p.user_id,
        "indicators": p.indicators,
        "risks": p.risks,
        "overall_risk_score": p.overall_risk_score,
        "alert_level": p.alert_level,
        "preventive_plan": p.preventive_plan,
        "created_at": p.created_at.isoformat() if p.created_at else None,
    }


def map_high_risk(p: RiskPrediction) -> dict:
    """Clinician view: the patient plus the prediction summary."""
    user = p.user
    return {
        "id": p.id,
        "user_id": p.user_id,
        "email": user.email if user else None,
        "full_name": user.full_name if user else None,
        "overall_risk_score": p.overall_risk_score,
        "alert_level": p.alert_level,
        "risks": p.risks,
        "created_at": p.created_at.isoformat() if p.created_at else None,
    }
