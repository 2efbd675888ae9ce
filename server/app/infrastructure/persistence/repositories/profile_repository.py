# server/app/infrastructure/persistence/repositories/profile_repository.py

from __future__ import annotations

from typing import Any, Mapping

from app.domain.enums import UserRole
from app.domain.incident import Profile, coerce_enum
from app.infrastructure.persistence.backend.supabase_client import SupabaseClient

TABLE = "profiles"


def profile_from_row(row: Mapping[str, Any]) -> Profile:
    return Profile(
        id=str(row["id"]),
        email=row.get("email") or "",
        full_name=row.get("full_name") or "",
        role=coerce_enum(UserRole, row.get("role"), "role"),
        phone=row.get("phone"),
        room_number=row.get("room_number"),
    )


class ProfileRepository:
    def __init__(self, backend: SupabaseClient) -> None:
        self.backend = backend

    def get(self, user_id: str) -> Profile:
        return profile_from_row(self.backend.select_one(TABLE, {"id": f"eq.{user_id}"}))
