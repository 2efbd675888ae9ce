# server/app/api/v1/serializers/notification.py

from typing import Any, Dict, TYPE_CHECKING

from app.core.utils.datetime import format_timestamp

if TYPE_CHECKING:
    from app.domain.incident import Notification


def serialize_notification(n: "Notification") -> Dict[str, Any]:
    return {
        "id": n.id,
        "incident_id": n.incident_id,
        "title": n.title,
        "message": n.message,
        "type": n.type.value,
        "is_read": n.is_read,
        "created_at": format_timestamp(n.created_at),
    }
