# coding: utf-8
# server/app/core/utils/datetime.py
"""server/app/core/utils/datetime.py
~~~~~~~~~~~~~~~~~~~~~~~~
Utilitaires pour la gestion des dates et heures.

Aucune fonction ici ne lit l'horloge système : l'instant courant est
toujours fourni par l'appelant.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def ensure_utc(dt: datetime) -> datetime:
    """Rend un datetime "aware" en UTC (un datetime naïf est supposé UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: Optional[str | datetime]) -> Optional[datetime]:
    """
    Parse un horodatage ISO-8601 tel que renvoyé par PostgREST
    (ex: "2025-03-01T10:00:00.123456+00:00" ou suffixe "Z").
    Retourne None pour None / chaîne vide. Lève ValueError si illisible.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    value = value.strip()
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(value))


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    """Sérialise en ISO-8601 UTC (None conservé)."""
    return ensure_utc(dt).isoformat() if dt else None


def window_start(now: datetime, days: int) -> datetime:
    """Début d'une fenêtre glissante de `days` jours se terminant à `now`."""
    return ensure_utc(now) - timedelta(days=days)


def minutes_between(start: datetime, end: datetime) -> float:
    """Durée (end - start) en minutes, négative si end < start."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / 60.0


def hours_between(start: datetime, end: datetime) -> float:
    """Durée (end - start) en heures."""
    return minutes_between(start, end) / 60.0
