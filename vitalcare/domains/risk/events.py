"""Risk domain event catalog."""

from __future__ import annotations

RISK_PREDICTION_CREATED = "risk.prediction.created"
RISK_ALERT_RAISED = "risk.alert.raised"

EVENT_CATALOG = {
    RISK_PREDICTION_CREATED: {
        "version": "v1",
        "payload": {
            "prediction_id": "str",
            "user_id": "int",
            "overall_risk_score": "float",
            "alert_level": "str",
        },
    },
    RISK_ALERT_RAISED: {
        "version": "v1",
        "payload": {
            "prediction_id": "str",
            "user_id": "int",
            "alert_level": "str",
            "diseases": "list[str]",
            "timeline": "str",
        },
    },
}
