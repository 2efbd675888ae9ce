from __future__ import annotations
"""server/app/application/services/notification_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
Notifications liées aux changements de statut.

Le cœur signale seulement `notify_required` ; ce module construit la
notification destinée au déclarant puis la confie au repository.
"""
import logging
from typing import Optional

from app.domain.enums import IncidentStatus, NotificationType
from app.domain.incident import Notification, Profile
from app.domain.transitions import Transitioned
from app.infrastructure.persistence.repositories.notification_repository import NotificationRepository

log = logging.getLogger(__name__)

STATUS_LABELS = {
    IncidentStatus.REPORTED: "Reported",
    IncidentStatus.ASSIGNED: "Assigned",
    IncidentStatus.IN_PROGRESS: "In Progress",
    IncidentStatus.RESOLVED: "Resolved",
    IncidentStatus.CLOSED: "Closed",
}


def build_status_notification(result: Transitioned, actor: Optional[Profile] = None) -> Optional[Notification]:
    """
    Retourne None si aucune notification n'est due :
    - transition sans changement effectif (notify_required=False),
    - l'acteur est lui-même le déclarant.
    """
    if not result.notify_required:
        return None
    incident = result.incident
    if actor is not None and actor.id == incident.reported_by:
        return None

    new_label = STATUS_LABELS[incident.status]
    if incident.status is IncidentStatus.RESOLVED:
        ntype = NotificationType.RESOLVED
        title = "Incident resolved"
    else:
        ntype = NotificationType.INCIDENT_UPDATE
        title = "Incident updated"

    return Notification(
        user_id=incident.reported_by,
        incident_id=incident.id,
        title=title,
        message=f'"{incident.title}" moved from {STATUS_LABELS[result.previous_status]} to {new_label}',
        type=ntype,
        created_at=incident.updated_at,
    )


def notify_status_change(
    repo: NotificationRepository,
    result: Transitioned,
    actor: Optional[Profile] = None,
) -> Optional[Notification]:
    notification = build_status_notification(result, actor)
    if notification is None:
        return None
    repo.add(notification)
    log.info("Notification %s -> user %s (incident %s)", notification.type.value, notification.user_id, notification.incident_id)
    return notification
