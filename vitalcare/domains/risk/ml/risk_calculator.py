"""Rule-based disease risk calculator.

Scores are sums of fixed points gated by thresholds on the indicators.
Every function here is pure; no I/O and no randomness.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from vitalcare.domains.risk.schemas.risk_schemas import DiseaseRisk, HealthIndicators

LEVEL_THRESHOLDS = ((70, "critical"), (50, "high"), (30, "moderate"))
ALERT_THRESHOLDS = ((80, "critical"), (60, "high"), (40, "medium"))

DEFAULT_RECOMMENDATIONS = {
    "diabetes": ("Schedule annual diabetes screening", "Maintain healthy weight through diet and exercise"),
    "heart_failure": ("Annual cardiovascular screening recommended", "ECG and stress test consultation"),
}
FALLBACK_RECOMMENDATION = {
    "diabetes": "Continue regular checkups",
    "heart_failure": "Maintain healthy lifestyle",
    "cancer": "Continue preventive care",
}


@dataclass
class _Tally:
    disease: str
    score: int = 0
    factors: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def add(self, points: int, factor: str, *recommendations: str) -> None:
        self.score += points
        self.factors.append(factor)
        self.recommendations.extend(recommendations)

    def finish(self) -> DiseaseRisk:
        level = risk_level_for(self.score)
        if level != "low":
            self.recommendations.extend(DEFAULT_RECOMMENDATIONS.get(self.disease, ()))
        if self.disease == "cancer":
            self.recommendations.append(
                "Schedule annual cancer screening appropriate for age and risk factors"
                if level != "low"
                else "Maintain regular age-appropriate screenings"
            )
        score = min(100, max(0, self.score))
        return DiseaseRisk(
            disease=self.disease,
            risk_score=score,
            risk_level=level,
            probability=score / 100,
            factors=self.factors,
            recommendations=self.recommendations or [FALLBACK_RECOMMENDATION[self.disease]],
        )


def risk_level_for(score: float) -> str:
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return "low"


def alert_level_for(max_score: float) -> str:
    for threshold, level in ALERT_THRESHOLDS:
        if max_score >= threshold:
            return level
    return "none"


def _num(value: float) -> str:
    # whole numbers print without a trailing ".0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _sleep_out_of_range(hours: Optional[float]) -> bool:
    return bool(hours) and (hours < 6 or hours > 9)


def _low_steps(steps: Optional[float]) -> bool:
    return bool(steps) and steps < 5000


def diabetes_risk(ind: HealthIndicators) -> DiseaseRisk:
    life = ind.lifestyle
    tally = _Tally("diabetes")

    if ind.age >= 65:
        tally.add(25, "Advanced age (65+)")
    elif ind.age >= 45:
        tally.add(15, "Age (45-64)")

    if ind.bmi >= 30:
        tally.add(20, "Obesity (BMI ≥30)", "Work with a nutritionist to develop a weight loss plan")
    elif ind.bmi >= 25:
        tally.add(10, "Overweight (BMI 25-29.9)", "Consider moderate exercise and dietary improvements")

    if ind.glucose >= 126:
        tally.add(
            30,
            "Elevated blood glucose (≥126 mg/dL)",
            "Immediate medical consultation required for glucose levels",
        )
    elif ind.glucose >= 100:
        tally.add(15, "Pre-diabetic glucose levels (100-125 mg/dL)", "Monitor glucose levels monthly")

    if ind.family_history.diabetes:
        tally.add(15, "Family history of diabetes")
    if life.exercise == "none":
        tally.add(10, "Sedentary lifestyle", "Start with 150 minutes of moderate exercise per week")
    if life.diet == "poor":
        tally.add(10, "Poor diet quality", "Reduce processed foods and increase fiber intake")
    if life.sleep_quality == "poor":
        tally.add(8, "Poor sleep quality", "Improve sleep hygiene and aim for 7-9 hours per night")
    if _sleep_out_of_range(life.sleep_hours):
        tally.add(
            5,
            f"Inadequate sleep ({_num(life.sleep_hours)} hours)",
            "Maintain consistent 7-9 hours of sleep per night",
        )
    if life.stress_level == "high":
        tally.add(8, "High stress levels", "Implement stress management techniques (meditation, yoga)")
    if _low_steps(life.daily_steps):
        tally.add(
            5,
            f"Low daily activity ({_num(life.daily_steps)} steps)",
            "Increase daily steps to at least 7,000-10,000 steps",
        )
    if life.water_intake and life.water_intake < 1.5:
        tally.add(
            3,
            f"Inadequate hydration ({_num(life.water_intake)}L)",
            "Increase water intake to 2-3 liters daily",
        )
    if life.work_schedule in ("night", "shift"):
        tally.add(5, "Irregular work schedule", "Maintain regular meal times despite shift work")
    if ind.insulin > 20:
        tally.add(10, "Elevated insulin levels")

    return tally.finish()


def heart_failure_risk(ind: HealthIndicators) -> DiseaseRisk:
    life = ind.lifestyle
    tally = _Tally("heart_failure")

    if ind.blood_pressure_systolic >= 140 or ind.blood_pressure_diastolic >= 90:
        tally.add(
            25,
            "High blood pressure (≥140/90)",
            "Monitor blood pressure daily",
            "Consult cardiologist for hypertension management",
        )
    elif ind.blood_pressure_systolic >= 120 or ind.blood_pressure_diastolic >= 80:
        tally.add(10, "Elevated blood pressure (pre-hypertension)")

    if ind.cholesterol >= 240:
        tally.add(20, "High cholesterol (≥240 mg/dL)", "Implement heart-healthy diet (Mediterranean or DASH)")
    elif ind.cholesterol >= 200:
        tally.add(10, "Borderline high cholesterol (200-239 mg/dL)")

    if ind.age >= 65:
        tally.add(15, "Age-related cardiovascular risk")
    if ind.family_history.heart_disease:
        tally.add(15, "Family history of heart disease")
    if life.smoking:
        tally.add(20, "Smoking", "Quit smoking immediately - seek support programs")
    if life.alcohol == "heavy":
        tally.add(10, "Heavy alcohol consumption", "Reduce alcohol intake to moderate levels")
    if life.exercise == "none":
        tally.add(10, "Lack of physical activity", "Start cardiovascular exercise program")
    if life.sleep_quality == "poor":
        tally.add(8, "Poor sleep quality", "Address sleep apnea if present, improve sleep hygiene")
    if _sleep_out_of_range(life.sleep_hours):
        tally.add(
            5,
            f"Inadequate sleep ({_num(life.sleep_hours)} hours)",
            "Aim for 7-9 hours of quality sleep nightly",
        )
    if life.stress_level == "high":
        tally.add(10, "High chronic stress", "Manage stress through relaxation techniques and counseling")
    if _low_steps(life.daily_steps):
        tally.add(
            7,
            f"Low daily activity ({_num(life.daily_steps)} steps)",
            "Increase cardiovascular activity gradually",
        )
    if ind.bmi >= 30:
        tally.add(10, "Obesity increases cardiac workload")

    return tally.finish()


def cancer_risk(ind: HealthIndicators) -> DiseaseRisk:
    life = ind.lifestyle
    tally = _Tally("cancer")

    if ind.age >= 65:
        tally.add(20, "Age-related cancer risk (65+)")
    elif ind.age >= 50:
        tally.add(10, "Age-related cancer risk (50-64)")

    if life.smoking:
        tally.add(
            25,
            "Smoking (lung, throat, and multiple cancers)",
            "Quit smoking - consult smoking cessation programs",
        )
    if life.alcohol == "heavy":
        tally.add(
            15,
            "Heavy alcohol use (increases various cancer risks)",
            "Limit alcohol to recommended levels",
        )
    if ind.family_history.cancer:
        tally.add(15, "Family history of cancer", "Consider genetic counseling and screening")
    if ind.bmi >= 30:
        tally.add(15, "Obesity (linked to multiple cancer types)", "Weight management and healthy diet")
    if life.exercise == "none":
        tally.add(10, "Sedentary lifestyle", "Regular physical activity reduces cancer risk")
    if life.diet == "poor":
        tally.add(10, "Poor diet quality", "Increase fruits, vegetables, and whole grains")
    if life.sleep_quality == "poor":
        tally.add(
            6,
            "Poor sleep quality (affects immune system)",
            "Improve sleep to boost immune function",
        )
    if _sleep_out_of_range(life.sleep_hours):
        tally.add(
            4,
            f"Inadequate sleep ({_num(life.sleep_hours)} hours)",
            "Maintain 7-9 hours of sleep for optimal immune health",
        )
    if life.stress_level == "high":
        tally.add(7, "Chronic high stress", "Stress reduction techniques to lower inflammation")
    if _low_steps(life.daily_steps):
        tally.add(
            5,
            f"Low daily activity ({_num(life.daily_steps)} steps)",
            "Regular moderate exercise reduces cancer risk",
        )
    if life.work_schedule == "night":
        tally.add(5, "Night shift work", "Maintain healthy circadian rhythm patterns")
    if ind.genetics.has_genetic_testing and ind.genetics.genetic_risk_factors:
        tally.add(
            20,
            f"Genetic risk factors identified: {', '.join(ind.genetics.genetic_risk_factors)}",
            "Enhanced screening protocol recommended",
        )

    return tally.finish()


def calculate_disease_risks(indicators: HealthIndicators) -> List[DiseaseRisk]:
    """Score diabetes, heart failure and cancer, in that order."""
    return [diabetes_risk(indicators), heart_failure_risk(indicators), cancer_risk(indicators)]


def predict_disease_risk(indicators: HealthIndicators) -> Tuple[List[DiseaseRisk], float, str]:
    """Return (risks, overall_risk_score, alert_level).

    The overall score is the plain mean of the three disease scores; the
    alert level buckets the highest of them.
    """
    risks = calculate_disease_risks(indicators)
    scores = [risk.risk_score for risk in risks]
    overall = sum(scores) / len(scores)
    return risks, overall, alert_level_for(max(scores))
