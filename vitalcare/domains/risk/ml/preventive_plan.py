"""Preventive plan generation from scored risks."""

from __future__ import annotations

from typing import Iterable, List

from vitalcare.domains.risk.ml.risk_calculator import predict_disease_risk
from vitalcare.domains.risk.schemas.risk_schemas import (
    DiseaseRisk,
    HealthIndicators,
    PreventivePlan,
    RiskAssessment,
)

IMMEDIATE_KEYWORDS = ("immediate", "urgent")
LIFESTYLE_KEYWORDS = ("exercise", "diet", "lifestyle")
CHECKUP_KEYWORDS = ("screen", "consult", "medical")

TIMELINES = {
    "critical": "Immediate action required - 1 week",
    "high": "High priority - 1 month",
    "medium": "Medium priority - 3 months",
}
DEFAULT_TIMELINE = "Ongoing preventive care"


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _matches(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def generate_preventive_plan(risks: Iterable[DiseaseRisk], alert_level: str) -> PreventivePlan:
    """Bucket recommendations into immediate, lifestyle and checkup actions."""
    immediate: List[str] = []
    lifestyle: List[str] = []
    checkups: List[str] = []

    for risk in risks:
        if risk.risk_level in ("high", "critical"):
            immediate.append(f"Urgent: Consult specialist for {risk.disease} risk")
            checkups.append(f"{risk.disease} screening within 1 month")
        elif risk.risk_level == "moderate":
            checkups.append(f"{risk.disease} screening within 3 months")

        for rec in risk.recommendations:
            text = rec.lower()
            if _matches(text, IMMEDIATE_KEYWORDS):
                immediate.append(rec)
            elif _matches(text, LIFESTYLE_KEYWORDS):
                lifestyle.append(rec)
            elif _matches(text, CHECKUP_KEYWORDS):
                checkups.append(rec)
            else:
                lifestyle.append(rec)

    return PreventivePlan(
        immediate_actions=_unique(immediate),
        lifestyle_changes=_unique(lifestyle),
        medical_checkups=_unique(checkups),
        timeline=TIMELINES.get(alert_level, DEFAULT_TIMELINE),
    )


def assess(indicators: HealthIndicators) -> RiskAssessment:
    risks, overall, alert_level = predict_disease_risk(indicators)
    return RiskAssessment(
        risks=risks,
        overall_risk_score=overall,
        alert_level=alert_level,
        preventive_plan=generate_preventive_plan(risks, alert_level),
    )
