"""Unit tests for the rule-based risk calculator."""

import pytest

pytestmark = pytest.mark.unit

from vitalcare.domains.risk.ml.risk_calculator import (
    alert_level_for,
    calculate_disease_risks,
    predict_disease_risk,
    risk_level_for,
)
from vitalcare.domains.risk.schemas.risk_schemas import HealthIndicators


def _indicators(**overrides) -> HealthIndicators:
    data = {
        "age": 30,
        "gender": "female",
        "bmi": 22,
        "blood_pressure_systolic": 110,
        "blood_pressure_diastolic": 70,
        "glucose": 85,
        "insulin": 8,
        "cholesterol": 170,
        "triglycerides": 100,
        "lifestyle": {"smoking": False, "alcohol": "none", "exercise": "moderate", "diet": "good"},
    }
    data.update(overrides)
    return HealthIndicators.model_validate(data)


def _by_disease(risks):
    return {r.disease: r for r in risks}


def test_healthy_profile_is_low_everywhere():
    risks, overall, alert = predict_disease_risk(_indicators())
    assert [r.disease for r in risks] == ["diabetes", "heart_failure", "cancer"]
    assert all(r.risk_score == 0 and r.risk_level == "low" for r in risks)
    assert overall == 0
    assert alert == "none"

    by = _by_disease(risks)
    assert by["diabetes"].recommendations == ["Continue regular checkups"]
    assert by["heart_failure"].recommendations == ["Maintain healthy lifestyle"]
    assert by["cancer"].recommendations == ["Maintain regular age-appropriate screenings"]


def test_documented_diabetes_example_is_clipped_and_critical():
    ind = _indicators(
        age=70,
        bmi=32,
        glucose=130,
        family_history={"diabetes": True},
        lifestyle={"exercise": "none", "diet": "good"},
    )
    diabetes = _by_disease(calculate_disease_risks(ind))["diabetes"]
    assert diabetes.risk_score == 100
    assert diabetes.risk_level == "critical"
    assert diabetes.probability == 1.0
    assert "Family history of diabetes" in diabetes.factors
    assert diabetes.recommendations[-2:] == [
        "Schedule annual diabetes screening",
        "Maintain healthy weight through diet and exercise",
    ]


def test_scores_are_clipped_to_100():
    ind = _indicators(
        age=70,
        bmi=35,
        glucose=140,
        insulin=30,
        blood_pressure_systolic=160,
        cholesterol=260,
        family_history={"diabetes": True, "heart_disease": True, "cancer": True},
        lifestyle={
            "smoking": True,
            "alcohol": "heavy",
            "exercise": "none",
            "diet": "poor",
            "sleep_quality": "poor",
            "sleep_hours": 4,
            "stress_level": "high",
            "daily_steps": 1000,
            "water_intake": 0.5,
            "work_schedule": "night",
        },
        genetics={"has_genetic_testing": True, "genetic_risk_factors": ["BRCA1"]},
    )
    risks, overall, alert = predict_disease_risk(ind)
    assert all(r.risk_score == 100 for r in risks)
    assert all(0 <= r.probability <= 1 for r in risks)
    assert overall == 100
    assert alert == "critical"


def test_heart_failure_blood_pressure_tiers():
    high = _by_disease(calculate_disease_risks(_indicators(blood_pressure_diastolic=95)))["heart_failure"]
    assert high.risk_score == 25
    assert "Monitor blood pressure daily" in high.recommendations

    elevated = _by_disease(calculate_disease_risks(_indicators(blood_pressure_systolic=125)))["heart_failure"]
    assert elevated.risk_score == 10
    assert elevated.factors == ["Elevated blood pressure (pre-hypertension)"]
    assert elevated.recommendations == ["Maintain healthy lifestyle"]


def test_cancer_genetics_requires_testing_and_factors():
    without_factors = _indicators(genetics={"has_genetic_testing": True, "genetic_risk_factors": []})
    assert _by_disease(calculate_disease_risks(without_factors))["cancer"].risk_score == 0

    with_factors = _indicators(genetics={"has_genetic_testing": True, "genetic_risk_factors": ["BRCA1", "BRCA2"]})
    cancer = _by_disease(calculate_disease_risks(with_factors))["cancer"]
    assert cancer.risk_score == 20
    assert "Genetic risk factors identified: BRCA1, BRCA2" in cancer.factors


def test_optional_lifestyle_fields_count_only_when_present():
    ind = _indicators(lifestyle={"sleep_hours": 0, "daily_steps": 0, "water_intake": 0, "diet": "good"})
    assert all(r.risk_score == 0 for r in calculate_disease_risks(ind))

    ind = _indicators(lifestyle={"sleep_hours": 5.5, "daily_steps": 3000, "diet": "good"})
    by = _by_disease(calculate_disease_risks(ind))
    assert by["diabetes"].risk_score == 10
    assert by["heart_failure"].risk_score == 12
    assert by["cancer"].risk_score == 9
    assert "Inadequate sleep (5.5 hours)" in by["diabetes"].factors
    assert "Low daily activity (3000 steps)" in by["cancer"].factors


def test_shift_work_affects_diabetes_but_only_night_work_affects_cancer():
    by = _by_disease(calculate_disease_risks(_indicators(lifestyle={"work_schedule": "shift", "diet": "good"})))
    assert by["diabetes"].risk_score == 5
    assert by["cancer"].risk_score == 0


@pytest.mark.parametrize(
    "overrides,expected",
    [
        ({"age": 45}, (15, 0, 0)),
        ({"age": 50}, (15, 0, 10)),
        ({"age": 65}, (25, 15, 20)),
        ({"bmi": 27}, (10, 0, 0)),
        ({"bmi": 30}, (20, 10, 15)),
        ({"glucose": 100}, (15, 0, 0)),
        ({"glucose": 126}, (30, 0, 0)),
        ({"insulin": 20}, (0, 0, 0)),
        ({"insulin": 21}, (10, 0, 0)),
        ({"cholesterol": 200}, (0, 10, 0)),
        ({"cholesterol": 240}, (0, 20, 0)),
        ({"blood_pressure_systolic": 140}, (0, 25, 0)),
        ({"family_history": {"diabetes": True}}, (15, 0, 0)),
        ({"family_history": {"heart_disease": True}}, (0, 15, 0)),
        ({"family_history": {"cancer": True}}, (0, 0, 15)),
        ({"lifestyle": {"smoking": True}}, (0, 20, 25)),
        ({"lifestyle": {"alcohol": "heavy"}}, (0, 10, 15)),
        ({"lifestyle": {"exercise": "none"}}, (10, 10, 10)),
        ({"lifestyle": {"diet": "poor"}}, (10, 0, 10)),
        ({"lifestyle": {"sleep_quality": "poor"}}, (8, 8, 6)),
        ({"lifestyle": {"sleep_hours": 10}}, (5, 5, 4)),
        ({"lifestyle": {"stress_level": "high"}}, (8, 10, 7)),
        ({"lifestyle": {"daily_steps": 4999}}, (5, 7, 5)),
        ({"lifestyle": {"water_intake": 1.0}}, (3, 0, 0)),
        ({"lifestyle": {"work_schedule": "night"}}, (5, 0, 5)),
    ],
)
def test_single_indicator_weights(overrides, expected):
    risks = calculate_disease_risks(_indicators(**overrides))
    assert tuple(r.risk_score for r in risks) == expected


def test_factor_numbers_keep_full_precision():
    ind = _indicators(lifestyle={"sleep_hours": 9.123456789, "water_intake": 1.25, "daily_steps": 4000.0})
    diabetes = _by_disease(calculate_disease_risks(ind))["diabetes"]
    assert "Inadequate sleep (9.123456789 hours)" in diabetes.factors
    assert "Inadequate hydration (1.25L)" in diabetes.factors
    assert "Low daily activity (4000 steps)" in diabetes.factors

    whole = _by_disease(calculate_disease_risks(_indicators(lifestyle={"sleep_hours": 10.0})))["cancer"]
    assert "Inadequate sleep (10 hours)" in whole.factors


def test_fractional_age_is_accepted():
    ind = _indicators(age=64.5)
    assert ind.age == 64.5
    assert _by_disease(calculate_disease_risks(ind))["diabetes"].factors == ["Age (45-64)"]


def test_camel_case_payload_is_accepted():
    ind = HealthIndicators.model_validate(
        {
            "age": 50,
            "bmi": 26,
            "bloodPressureSystolic": 145,
            "bloodPressureDiastolic": 85,
            "familyHistory": {"heartDisease": True},
            "lifestyle": {"smoking": True, "sleepQuality": "poor", "stressLevel": "high"},
        }
    )
    assert ind.blood_pressure_systolic == 145
    assert ind.family_history.heart_disease is True
    heart = _by_disease(calculate_disease_risks(ind))["heart_failure"]
    assert heart.risk_score == 25 + 15 + 20 + 8 + 10
    assert heart.risk_level == "critical"


def test_overall_score_is_mean_and_alert_uses_max():
    ind = _indicators(age=50, lifestyle={"smoking": True, "diet": "good"})
    risks, overall, alert = predict_disease_risk(ind)
    scores = [r.risk_score for r in risks]
    assert scores == [15, 20, 35]
    assert overall == pytest.approx(sum(scores) / 3)
    assert alert == "none"


def test_calculator_is_deterministic():
    ind = _indicators(age=67, bmi=31, glucose=110, lifestyle={"exercise": "none", "diet": "poor"})
    assert predict_disease_risk(ind) == predict_disease_risk(ind)


@pytest.mark.parametrize(
    "score,level",
    [(0, "low"), (29, "low"), (30, "moderate"), (49, "moderate"), (50, "high"), (69, "high"), (70, "critical"), (140, "critical")],
)
def test_risk_level_thresholds(score, level):
    assert risk_level_for(score) == level


@pytest.mark.parametrize(
    "score,alert",
    [(0, "none"), (39, "none"), (40, "medium"), (59, "medium"), (60, "high"), (79, "high"), (80, "critical"), (100, "critical")],
)
def test_alert_level_thresholds(score, alert):
    assert alert_level_for(score) == alert


def test_invalid_enum_value_is_rejected():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        _indicators(lifestyle={"alcohol": "sometimes"})
