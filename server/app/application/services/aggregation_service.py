from __future__ import annotations
"""server/app/application/services/aggregation_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
Agrégats du tableau de bord (fonctions pures).

- compute_stats        : total / actifs / résolus / en retard / durée moyenne de résolution
- category_breakdown   : répartition par catégorie sur une fenêtre glissante
- performance_metrics  : taux de résolution + "efficacité" (écran admin)

Les arrondis d'affichage ne sont pas faits ici, sauf dans performance_metrics
qui produit directement les valeurs affichées.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from app.core.utils.datetime import ensure_utc, hours_between
from app.core.utils.numbers import round_half_up
from app.domain.enums import ACTIVE_STATUSES, DONE_STATUSES, IncidentCategory, IncidentStatus
from app.domain.incident import Incident


@dataclass(frozen=True)
class Stats:
    total: int
    active: int
    resolved: int
    overdue: int
    avg_resolution_hours: float


@dataclass(frozen=True)
class CategoryShare:
    category: IncidentCategory
    count: int
    percentage: float


@dataclass(frozen=True)
class PerformanceMetrics:
    avg_resolution_hours: int
    resolution_rate: int
    efficiency: int


def compute_stats(incidents: Iterable[Incident], now: datetime) -> Stats:
    now = ensure_utc(now)
    total = active = resolved = overdue = 0
    durations: list[float] = []

    for inc in incidents:
        total += 1
        if inc.status in ACTIVE_STATUSES:
            active += 1
        if inc.status is IncidentStatus.RESOLVED:
            resolved += 1
        if inc.status not in DONE_STATUSES and inc.sla_deadline < now:
            overdue += 1
        if inc.resolved_at is not None:
            durations.append(hours_between(inc.created_at, inc.resolved_at))

    avg = sum(durations) / len(durations) if durations else 0.0
    return Stats(total=total, active=active, resolved=resolved, overdue=overdue, avg_resolution_hours=avg)


def category_breakdown(incidents: Iterable[Incident], window_start: datetime) -> list[CategoryShare]:
    """
    Filtre created_at >= window_start, groupe par catégorie, tri décroissant par count.
    À égalité, l'ordre de première apparition est conservé (tri stable sur un dict ordonné).
    """
    window_start = ensure_utc(window_start)
    counts: dict[IncidentCategory, int] = {}
    for inc in incidents:
        if inc.created_at < window_start:
            continue
        counts[inc.category] = counts.get(inc.category, 0) + 1

    in_window = sum(counts.values())
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [
        CategoryShare(
            category=cat,
            count=n,
            percentage=(100.0 * n / in_window) if in_window else 0.0,
        )
        for cat, n in ranked
    ]


def performance_metrics(stats: Stats) -> PerformanceMetrics:
    rate = round_half_up(100 * stats.resolved / stats.total) if stats.total else 0
    if stats.overdue == 0:
        efficiency = 100
    else:
        efficiency = round_half_up(max(0.0, 100 - (stats.overdue / stats.active) * 100))
    return PerformanceMetrics(
        avg_resolution_hours=round_half_up(stats.avg_resolution_hours),
        resolution_rate=rate,
        efficiency=efficiency,
    )
