from __future__ import annotations
"""server/app/domain/sla.py
~~~~~~~~~~~~~~~~~~~~~~~~
Évaluation SLA d'un incident à un instant donné.
"""

from dataclasses import dataclass
from datetime import datetime

from app.core.utils.datetime import minutes_between
from app.core.utils.numbers import round_half_up
from app.domain.enums import DONE_STATUSES, SLABucket
from app.domain.incident import Incident
from app.domain.policies import DEFAULT_SLA_CRITICAL_MINUTES, sla_bucket


@dataclass(frozen=True)
class SLAStatus:
    bucket: SLABucket
    remaining_minutes: float


def evaluate_sla(
    incident: Incident,
    now: datetime,
    *,
    critical_minutes: int = DEFAULT_SLA_CRITICAL_MINUTES,
) -> SLAStatus:
    """
    Résolu / clos : `completed` (remaining_minutes = 0, non significatif).
    Sinon remaining = sla_deadline - now (en minutes, éventuellement négatif).
    """
    if incident.status in DONE_STATUSES:
        return SLAStatus(SLABucket.COMPLETED, 0.0)
    remaining = minutes_between(now, incident.sla_deadline)
    return SLAStatus(sla_bucket(remaining, critical_minutes), remaining)


def describe_sla(status: SLAStatus) -> str:
    """Libellé affiché dans l'écran de détail ("Overdue", "42 mins left", "5h left"...)."""
    if status.bucket is SLABucket.COMPLETED:
        return "Completed"
    if status.bucket is SLABucket.OVERDUE:
        return "Overdue"
    if status.bucket is SLABucket.CRITICAL:
        return f"{round_half_up(status.remaining_minutes)} mins left"
    return f"{round_half_up(status.remaining_minutes / 60)}h left"
