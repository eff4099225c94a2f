"""Tests for the risk prediction API."""

import pytest

pytestmark = pytest.mark.integration

from vitalcare.domains.risk.schemas.risk_schemas import HealthIndicators
from vitalcare.domains.risk.services import create_prediction

CRITICAL = {
    "age": 70,
    "bmi": 32,
    "glucose": 130,
    "familyHistory": {"diabetes": True},
    "lifestyle": {"exercise": "none"},
}


class TestAssessAPI:
    def test_assess_is_public_and_stateless(self, client):
        resp = client.post("/api/predictions/assess", json={"indicators": CRITICAL})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["ok"] is True
        assessment = data["assessment"]
        assert assessment["alert_level"] == "critical"
        assert assessment["risks"][0]["disease"] == "diabetes"
        assert assessment["risks"][0]["risk_score"] == 100
        assert assessment["preventive_plan"]["timeline"] == "Immediate action required - 1 week"

    def test_assess_accepts_unwrapped_indicators(self, client):
        resp = client.post("/api/predictions/assess", json={"age": 20})
        assert resp.status_code == 200
        assert resp.get_json()["assessment"]["overall_risk_score"] == 0

    def test_assess_validation_error(self, client):
        resp = client.post("/api/predictions/assess", json={"indicators": {"age": -1}})
        assert resp.status_code == 400
        data = resp.get_json()
        assert data["error"] == "validation_error"
        assert data["details"]

    def test_assess_accepts_fractional_age(self, client):
        resp = client.post("/api/predictions/assess", json={"age": 45.5, "lifestyle": {"dailySteps": 4200.5}})
        assert resp.status_code == 200
        diabetes = resp.get_json()["assessment"]["risks"][0]
        assert "Age (45-64)" in diabetes["factors"]
        assert "Low daily activity (4200.5 steps)" in diabetes["factors"]

    @pytest.mark.parametrize("path", ["/api/predictions/assess", "/api/predictions/predict"])
    def test_get_on_post_only_paths_is_405(self, client, auth_headers, path):
        resp = client.get(path, headers=auth_headers)
        assert resp.status_code == 405
        assert resp.headers["Allow"] == "POST"
        assert resp.get_json()["error"] == "method_not_allowed"


class TestPredictAPI:
    def test_predict_requires_auth(self, client):
        resp = client.post("/api/predictions/predict", json={"indicators": CRITICAL})
        assert resp.status_code == 401

    def test_predict_persists_and_returns_prediction(self, client, auth_headers):
        resp = client.post("/api/predictions/predict", json={"indicators": CRITICAL}, headers=auth_headers)
        assert resp.status_code == 201
        data = resp.get_json()
        assert data["prediction"]["id"].startswith("pred_")
        assert data["prediction"]["alert_level"] == "critical"
        assert data["assessment"]["risks"][0]["risk_level"] == "critical"

        history = client.get("/api/predictions/history", headers=auth_headers).get_json()
        assert history["total"] == 1
        assert history["items"][0]["id"] == data["prediction"]["id"]

    def test_get_prediction_own_and_missing(self, client, patient, auth_headers, user_factory, headers_for):
        prediction, _ = create_prediction(patient.id, HealthIndicators.model_validate(CRITICAL))

        resp = client.get(f"/api/predictions/{prediction.id}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.get_json()["prediction"]["id"] == prediction.id

        stranger = user_factory("stranger@example.com")
        resp = client.get(f"/api/predictions/{prediction.id}", headers=headers_for(stranger))
        assert resp.status_code == 404

    def test_history_pagination_validation(self, client, auth_headers):
        resp = client.get("/api/predictions/history?per_page=0", headers=auth_headers)
        assert resp.status_code == 400


class TestTrendsAPI:
    def test_own_trend(self, client, patient, auth_headers):
        create_prediction(patient.id, HealthIndicators.model_validate(CRITICAL))
        resp = client.get("/api/predictions/trends?disease=diabetes", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["scores"] == [100]
        assert len(data["dates"]) == 1

    def test_unknown_disease_rejected(self, client, auth_headers):
        resp = client.get("/api/predictions/trends?disease=flu", headers=auth_headers)
        assert resp.status_code == 400

    def test_patient_trend_requires_clinician(self, client, patient, auth_headers, clinician_headers):
        create_prediction(patient.id, HealthIndicators.model_validate(CRITICAL))

        assert client.get(f"/api/predictions/trends/{patient.id}", headers=auth_headers).status_code == 403

        resp = client.get(f"/api/predictions/trends/{patient.id}?disease=cancer", headers=clinician_headers)
        assert resp.status_code == 200
        assert resp.get_json()["disease"] == "cancer"


class TestHighRiskAPI:
    def test_requires_clinician_role(self, client, auth_headers):
        assert client.get("/api/predictions/high-risk").status_code == 401
        assert client.get("/api/predictions/high-risk", headers=auth_headers).status_code == 403

    def test_lists_high_risk_patients(self, client, patient, clinician_headers):
        create_prediction(patient.id, HealthIndicators.model_validate(CRITICAL))
        create_prediction(patient.id, HealthIndicators.model_validate({"age": 20}))

        resp = client.get("/api/predictions/high-risk", headers=clinician_headers)
        assert resp.status_code == 200
        items = resp.get_json()["items"]
        assert len(items) == 1
        assert items[0]["user_id"] == patient.id
        assert items[0]["email"] == "patient@example.com"
        assert items[0]["alert_level"] == "critical"

    def test_admin_satisfies_clinician_role(self, client, admin_headers):
        resp = client.get("/api/predictions/high-risk", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["items"] == []
