from __future__ import annotations
"""server/app/application/services/hotspot_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
Classement des "hotspots" (couples bâtiment / lieu) sur une fenêtre glissante.

Principes :
- Filtre created_at >= window_start (+ catégorie optionnelle).
- Regroupe par (building, location) ; la catégorie du groupe est celle du
  premier incident rencontré (pas de vote majoritaire).
- Tri décroissant par count, ordre de première apparition à égalité.
- Le classement complet est retourné ; l'appelant prend le préfixe voulu.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from app.core.utils.datetime import ensure_utc
from app.domain.enums import IncidentCategory, IntensityTier
from app.domain.incident import Incident, coerce_enum
from app.domain.policies import intensity_tier


@dataclass(frozen=True)
class Hotspot:
    building: str
    location: str
    category: IncidentCategory
    count: int
    ratio: float
    intensity: IntensityTier


def rank_hotspots(
    incidents: Iterable[Incident],
    window_start: datetime,
    category_filter: Optional[Any] = None,
) -> list[Hotspot]:
    window_start = ensure_utc(window_start)
    wanted = coerce_enum(IncidentCategory, category_filter, "category") if category_filter else None

    # (building, location) -> catégorie du premier incident, nombre d'incidents
    first_category: dict[tuple[str, str], IncidentCategory] = {}
    counts: dict[tuple[str, str], int] = {}
    for inc in incidents:
        if inc.created_at < window_start:
            continue
        if wanted is not None and inc.category is not wanted:
            continue
        key = (inc.building, inc.location)
        first_category.setdefault(key, inc.category)
        counts[key] = counts.get(key, 0) + 1

    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    max_count = max([n for _, n in ranked] + [1])

    return [
        Hotspot(
            building=building,
            location=location,
            category=first_category[(building, location)],
            count=count,
            ratio=count / max_count,
            intensity=intensity_tier(count / max_count),
        )
        for (building, location), count in ranked
    ]
