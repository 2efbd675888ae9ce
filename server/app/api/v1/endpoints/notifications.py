from __future__ import annotations
"""server/app/api/v1/endpoints/notifications.py
~~~~~~~~~~~~~~~~~~~~~~~~
Panneau de notifications de l'utilisateur courant.

- GET   /notifications            : ses notifications, les plus récentes d'abord
- PATCH /notifications/{id}/read  : acquittement (404 si la notification n'est pas la sienne)
"""
from fastapi import APIRouter, Depends, Query

from app.api.v1.serializers.notification import serialize_notification
from app.domain.incident import Profile
from app.infrastructure.persistence.backend.supabase_client import SupabaseClient
from app.infrastructure.persistence.repositories.notification_repository import NotificationRepository
from app.presentation.api.deps import get_backend, get_current_profile

router = APIRouter(prefix="/notifications")


@router.get("")
def list_notifications(
    unread: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
) -> dict:
    items = NotificationRepository(backend).list_for(profile.id, unread_only=unread, limit=limit)
    return {
        "items": [serialize_notification(n) for n in items],
        "unread": sum(1 for n in items if not n.is_read),
    }


@router.patch("/{notification_id}/read")
def mark_notification_read(
    notification_id: str,
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
) -> dict:
    return serialize_notification(NotificationRepository(backend).mark_read(notification_id, profile.id))
