# server/app/infrastructure/persistence/repositories/notification_repository.py

from __future__ import annotations

from typing import Any, Mapping

from app.core.utils.datetime import format_timestamp, parse_timestamp
from app.domain.enums import NotificationType
from app.domain.incident import Notification, coerce_enum
from app.infrastructure.persistence.backend.supabase_client import NotFoundError, SupabaseClient

TABLE = "notifications"


def notification_to_row(notification: Notification) -> dict[str, Any]:
    return {
        "user_id": notification.user_id,
        "incident_id": notification.incident_id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type.value,
        "is_read": notification.is_read,
        "created_at": format_timestamp(notification.created_at),
    }


def notification_from_row(row: Mapping[str, Any]) -> Notification:
    return Notification(
        id=str(row["id"]) if row.get("id") is not None else None,
        user_id=str(row["user_id"]),
        incident_id=row.get("incident_id"),
        title=row.get("title") or "",
        message=row.get("message") or "",
        type=coerce_enum(NotificationType, row.get("type"), "type"),
        is_read=bool(row.get("is_read")),
        created_at=parse_timestamp(row.get("created_at")),
    )


class NotificationRepository:
    """
    Repository pour la table notifications.

    La livraison (temps réel, badge non-lu...) est du ressort du backend :
    insérer la ligne suffit. Le panneau de notifications lit et acquitte
    les lignes de l'utilisateur courant.
    """

    def __init__(self, backend: SupabaseClient):
        self.backend = backend

    def add(self, notification: Notification) -> Mapping[str, Any]:
        rows = self.backend.insert(TABLE, notification_to_row(notification))
        return rows[0] if rows else notification_to_row(notification)

    def list_for(self, user_id: str, *, unread_only: bool = False, limit: int = 50) -> list[Notification]:
        """Notifications de `user_id`, les plus récentes d'abord."""
        params = {
            "user_id": f"eq.{user_id}",
            "order": "created_at.desc",
            "limit": str(limit),
        }
        if unread_only:
            params["is_read"] = "eq.false"
        return [notification_from_row(r) for r in self.backend.select(TABLE, params)]

    def mark_read(self, notification_id: str, user_id: str) -> Notification:
        """
        Acquitte une notification appartenant à `user_id`.

        Raises:
            NotFoundError: aucune ligne ne correspond (id inconnu ou autre destinataire)
        """
        rows = self.backend.update(TABLE, {"id": notification_id, "user_id": user_id}, {"is_read": True})
        if not rows:
            raise NotFoundError(f"{TABLE}: no row for id={notification_id}")
        return notification_from_row(rows[0])
