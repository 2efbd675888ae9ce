from __future__ import annotations
"""
server/app/presentation/api/deps.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Dépendances communes côté "presentation" (API).

Contenu :
- get_backend         : client du backend hébergé agissant avec le jeton de l'appelant.
- get_current_profile : vérifie le jeton auprès du backend, charge le profil (rôle).
- get_now / get_rng   : horloge et source d'aléa, surchargeables en tests
                        (`app.dependency_overrides`).

Conventions :
- 401 si jeton manquant / refusé par le backend / profil introuvable
- les autres erreurs backend remontent (BackendError -> 502, voir main.py)
"""

import random
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import Depends, HTTPException, status

from app.core.config import settings
from app.core.security import bearer_token
from app.domain.incident import Profile
from app.infrastructure.persistence.backend.supabase_client import (
    BackendError,
    NotFoundError,
    SupabaseClient,
)
from app.infrastructure.persistence.repositories.profile_repository import ProfileRepository


@lru_cache(maxsize=1)
def _shared_backend() -> SupabaseClient:
    return SupabaseClient(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
        timeout=settings.BACKEND_TIMEOUT_SECONDS,
    )


def get_backend(token: str = Depends(bearer_token)) -> SupabaseClient:
    return _shared_backend().with_token(token)


def get_current_profile(
    token: str = Depends(bearer_token),
    backend: SupabaseClient = Depends(get_backend),
) -> Profile:
    """
    Étapes :
    1) GET /auth/v1/user avec le jeton (le backend vérifie signature / expiration)
    2) charge le profil `profiles.id == user.id`

    Raises:
        HTTPException(401): jeton refusé, utilisateur sans id, profil introuvable
    """
    try:
        user = backend.get_user(token)
    except BackendError as exc:
        if exc.status_code in (401, 403):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid_token") from exc
        raise

    sub = (user or {}).get("id")
    if not sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid_token")

    try:
        return ProfileRepository(backend).get(sub)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="profile_not_found") from exc


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_rng() -> random.Random:
    return random.Random()
