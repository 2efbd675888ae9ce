# server/app/api/v1/serializers/incident.py

from typing import Any, Dict, Optional, TYPE_CHECKING

from app.core.utils.datetime import format_timestamp
from app.domain.sla import SLAStatus, describe_sla

if TYPE_CHECKING:
    from app.domain.incident import Incident


def serialize_sla(s: SLAStatus) -> Dict[str, Any]:
    return {
        "bucket": s.bucket.value,
        "remaining_minutes": s.remaining_minutes,
        "label": describe_sla(s),
    }


def serialize_incident(i: "Incident", sla: Optional[SLAStatus] = None) -> Dict[str, Any]:
    data = {
        "id": i.id,
        "title": i.title,
        "description": i.description,
        "category": i.category.value,
        "priority": i.priority.value,
        "status": i.status.value,
        "location": i.location,
        "building": i.building,
        "floor": i.floor,
        "room": i.room,
        "latitude": i.latitude,
        "longitude": i.longitude,
        "reported_by": i.reported_by,
        "assigned_to": i.assigned_to,
        "created_at": format_timestamp(i.created_at),
        "sla_deadline": format_timestamp(i.sla_deadline),
        "updated_at": format_timestamp(i.updated_at),
        "resolved_at": format_timestamp(i.resolved_at),
        "closed_at": format_timestamp(i.closed_at),
    }
    if sla is not None:
        # calculé à l'instant de la requête
        data["sla"] = serialize_sla(sla)
    return data
