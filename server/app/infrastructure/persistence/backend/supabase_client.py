from __future__ import annotations
"""server/app/infrastructure/persistence/backend/supabase_client.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Client minimal du backend hébergé (PostgREST + GoTrue) via httpx.

Principes :
- Toute la persistance et l'authentification sont déléguées au backend ;
  ce client ne fait que des appels REST synchrones.
- Chaque requête porte `apikey` + `Authorization: Bearer <token>` (token de
  l'utilisateur si fourni, sinon la clé anonyme) : les règles RLS du backend
  s'appliquent donc avec l'identité de l'appelant.
- Réponse non-2xx -> BackendError ; select_one sans résultat -> NotFoundError.
- Le `transport` est injectable (httpx.MockTransport en tests).
"""

import copy
import logging
from typing import Any, Mapping, Optional

import httpx

log = logging.getLogger(__name__)


class BackendError(Exception):
    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"backend error {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class NotFoundError(BackendError):
    def __init__(self, detail: str) -> None:
        super().__init__(404, detail)


class SupabaseClient:
    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        access_token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self._http = httpx.Client(base_url=self.url, timeout=timeout, transport=transport)

    def with_token(self, access_token: Optional[str]) -> "SupabaseClient":
        """Copie légère partageant la connexion, mais agissant au nom d'un autre utilisateur."""
        clone = copy.copy(self)
        clone.access_token = access_token
        return clone

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Bas niveau
    # ------------------------------------------------------------------
    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = self._headers(kwargs.pop("headers", None))
        try:
            r = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            log.warning("Backend unreachable (%s %s): %s", method, path, exc)
            raise BackendError(503, str(exc)) from exc

        if r.status_code >= 400:
            log.warning("Backend %s %s -> %s %s", method, path, r.status_code, r.text[:200])
            raise BackendError(r.status_code, r.text)
        if not r.content:
            return None
        return r.json()

    # ------------------------------------------------------------------
    # PostgREST
    # ------------------------------------------------------------------
    def select(self, table: str, params: Optional[Mapping[str, str]] = None) -> list[dict]:
        query = {"select": "*"}
        query.update(params or {})
        return self._request("GET", f"/rest/v1/{table}", params=query) or []

    def select_one(self, table: str, params: Mapping[str, str]) -> dict:
        rows = self.select(table, {**params, "limit": "1"})
        if not rows:
            raise NotFoundError(f"{table}: no row for {dict(params)}")
        return rows[0]

    def update(self, table: str, match: Mapping[str, str], values: Mapping[str, Any]) -> list[dict]:
        params = {k: f"eq.{v}" for k, v in match.items()}
        return self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=params,
            json=dict(values),
            headers={"Prefer": "return=representation"},
        ) or []

    def insert(self, table: str, values: Mapping[str, Any]) -> list[dict]:
        return self._request(
            "POST",
            f"/rest/v1/{table}",
            json=dict(values),
            headers={"Prefer": "return=representation"},
        ) or []

    def ping(self) -> None:
        """Lève BackendError si l'API REST ne répond pas en 2xx."""
        self._request("GET", "/rest/v1/")

    # ------------------------------------------------------------------
    # GoTrue
    # ------------------------------------------------------------------
    def get_user(self, access_token: str) -> dict:
        """Vérifie le token auprès du backend et retourne l'utilisateur associé."""
        return self.with_token(access_token)._request("GET", "/auth/v1/user")
