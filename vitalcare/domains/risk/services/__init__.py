from vitalcare.domains.risk.services.prediction_service import (
    create_prediction,
    get_prediction,
    get_risk_trend,
    list_high_risk,
    list_predictions,
)

__all__ = [
    "create_prediction",
    "list_predictions",
    "get_prediction",
    "list_high_risk",
    "get_risk_trend",
]
