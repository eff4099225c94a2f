"""Risk prediction schemas.

Inputs accept the frontend's camelCase keys as well as snake_case.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from vitalcare.core.utils.pagination import Pagination

DISEASES = ("diabetes", "heart_failure", "cancer")

Disease = Literal["diabetes", "heart_failure", "cancer"]
RiskLevel = Literal["low", "moderate", "high", "critical"]
AlertLevel = Literal["none", "medium", "high", "critical"]


class IndicatorModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class FamilyHistory(IndicatorModel):
    diabetes: bool = False
    heart_disease: bool = False
    cancer: bool = False


class Lifestyle(IndicatorModel):
    smoking: bool = False
    alcohol: Literal["none", "moderate", "heavy"] = "none"
    exercise: Literal["none", "light", "moderate", "heavy"] = "moderate"
    diet: Literal["poor", "moderate", "good"] = "moderate"
    sleep_quality: Optional[Literal["poor", "fair", "good", "excellent"]] = None
    sleep_hours: Optional[float] = Field(default=None, ge=0, le=24)
    stress_level: Optional[Literal["none", "low", "moderate", "high"]] = None
    daily_steps: Optional[float] = Field(default=None, ge=0)
    water_intake: Optional[float] = Field(default=None, ge=0)
    work_schedule: Optional[Literal["standard", "shift", "night", "irregular"]] = None
    screen_time: Optional[float] = Field(default=None, ge=0, le=24)

    @field_validator(
        "alcohol", "exercise", "diet", "sleep_quality", "stress_level", "work_schedule", mode="before"
    )
    @classmethod
    def normalize_choice(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v


class Genetics(IndicatorModel):
    has_genetic_testing: bool = False
    genetic_risk_factors: List[str] = Field(default_factory=list)


class ClinicalData(IndicatorModel):
    previous_conditions: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)


class HealthIndicators(IndicatorModel):
    age: float = Field(ge=0, le=130)
    gender: Literal["male", "female", "other"] = "other"
    bmi: float = Field(default=0, ge=0)
    blood_pressure_systolic: float = Field(default=0, ge=0)
    blood_pressure_diastolic: float = Field(default=0, ge=0)
    glucose: float = Field(default=0, ge=0)
    insulin: float = Field(default=0, ge=0)
    cholesterol: float = Field(default=0, ge=0)
    triglycerides: float = Field(default=0, ge=0)
    family_history: FamilyHistory = Field(default_factory=FamilyHistory)
    lifestyle: Lifestyle = Field(default_factory=Lifestyle)
    genetics: Genetics = Field(default_factory=Genetics)
    clinical_data: ClinicalData = Field(default_factory=ClinicalData)

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class DiseaseRisk(BaseModel):
    model_config = ConfigDict(frozen=True)

    disease: Disease
    risk_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    probability: float = Field(ge=0, le=1)
    factors: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class PreventivePlan(BaseModel):
    immediate_actions: List[str] = Field(default_factory=list)
    lifestyle_changes: List[str] = Field(default_factory=list)
    medical_checkups: List[str] = Field(default_factory=list)
    timeline: str


class RiskAssessment(BaseModel):
    risks: List[DiseaseRisk]
    overall_risk_score: float
    alert_level: AlertLevel
    preventive_plan: PreventivePlan


class PredictRequest(BaseModel):
    """Body of POST /predict; indicators may also be sent unwrapped."""

    indicators: HealthIndicators


class HistoryFilter(Pagination):
    pass


class TrendQuery(BaseModel):
    disease: Disease = "diabetes"

    @field_validator("disease", mode="before")
    @classmethod
    def normalize_disease(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class HighRiskQuery(BaseModel):
    limit: int = Field(default=50, ge=1, le=200)
