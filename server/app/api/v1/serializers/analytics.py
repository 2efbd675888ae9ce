# server/app/api/v1/serializers/analytics.py

from dataclasses import asdict
from typing import Any, Dict, TYPE_CHECKING

from app.core.utils.datetime import format_timestamp

if TYPE_CHECKING:
    from app.application.services.aggregation_service import CategoryShare, PerformanceMetrics, Stats
    from app.application.services.hotspot_service import Hotspot
    from app.application.services.prediction_service import Prediction


def serialize_summary(stats: "Stats", perf: "PerformanceMetrics") -> Dict[str, Any]:
    return {**asdict(stats), "performance": asdict(perf)}


def serialize_category_share(c: "CategoryShare") -> Dict[str, Any]:
    return {
        "category": c.category.value,
        "count": c.count,
        "percentage": round(c.percentage, 1),
    }


def serialize_hotspot(h: "Hotspot") -> Dict[str, Any]:
    return {
        "building": h.building,
        "location": h.location,
        "category": h.category.value,
        "count": h.count,
        "ratio": h.ratio,
        "intensity": h.intensity.value,
    }


def serialize_prediction(p: "Prediction") -> Dict[str, Any]:
    return {
        "location": p.display_location,
        "building": p.building,
        "category": p.category.value,
        "predicted_date": format_timestamp(p.predicted_date),
        "confidence": p.confidence,
        "confidence_level": p.level.value,
        "incident_count": p.incident_count,
    }
