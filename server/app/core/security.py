from __future__ import annotations
"""server/app/core/security.py
~~~~~~~~~~~~~~~~~~~~~~~~
Sécurité : jeton Bearer émis par le backend hébergé (header Authorization).

La vérification du jeton est déléguée au backend (`/auth/v1/user`) ;
ici on ne fait qu'extraire le jeton de la requête.
"""
from typing import Optional

from fastapi import Header, HTTPException, status


async def bearer_token(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> str:
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="missing_token")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid_token")
    return token.strip()
