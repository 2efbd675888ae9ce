# server/app/domain/policies.py

from __future__ import annotations
"""
Règles métier paramétrables.

- Table des transitions de statut (politique "forward" ou "permissive").
- Seau d'urgence SLA à partir des minutes restantes.
- Palier d'intensité d'un hotspot à partir d'un ratio count / max.
- Niveau de confiance d'une prédiction.
"""

from typing import Mapping

from app.domain.enums import ConfidenceLevel, IncidentStatus, IntensityTier, SLABucket

S = IncidentStatus

# Progression vers l'avant uniquement ; "closed" est terminal.
FORWARD_TRANSITIONS: Mapping[IncidentStatus, frozenset[IncidentStatus]] = {
    S.REPORTED: frozenset({S.ASSIGNED, S.IN_PROGRESS, S.RESOLVED, S.CLOSED}),
    S.ASSIGNED: frozenset({S.IN_PROGRESS, S.RESOLVED, S.CLOSED}),
    S.IN_PROGRESS: frozenset({S.RESOLVED, S.CLOSED}),
    S.RESOLVED: frozenset({S.CLOSED}),
    S.CLOSED: frozenset(),
}

# Comportement de l'écran de détail d'origine : tout statut vers tout autre.
PERMISSIVE_TRANSITIONS: Mapping[IncidentStatus, frozenset[IncidentStatus]] = {
    src: frozenset(s for s in S if s is not src) for src in S
}

TRANSITION_POLICIES: Mapping[str, Mapping[IncidentStatus, frozenset[IncidentStatus]]] = {
    "forward": FORWARD_TRANSITIONS,
    "permissive": PERMISSIVE_TRANSITIONS,
}

DEFAULT_SLA_CRITICAL_MINUTES = 120


def transition_table(policy: str | None) -> Mapping[IncidentStatus, frozenset[IncidentStatus]]:
    """Retourne la table associée au nom de politique (défaut : forward)."""
    name = (policy or "forward").strip().lower()
    try:
        return TRANSITION_POLICIES[name]
    except KeyError:
        raise ValueError(f"unknown transition policy: {policy!r}") from None


def allowed_targets(
    current: IncidentStatus,
    table: Mapping[IncidentStatus, frozenset[IncidentStatus]] = FORWARD_TRANSITIONS,
) -> frozenset[IncidentStatus]:
    return table.get(current, frozenset())


def sla_bucket(remaining_minutes: float, critical_minutes: int = DEFAULT_SLA_CRITICAL_MINUTES) -> SLABucket:
    """
    < 0                    -> overdue
    0 <= r < critical_min  -> critical
    sinon                  -> onTrack
    """
    if remaining_minutes < 0:
        return SLABucket.OVERDUE
    if remaining_minutes < critical_minutes:
        return SLABucket.CRITICAL
    return SLABucket.ON_TRACK


def intensity_tier(ratio: float) -> IntensityTier:
    """Seuils stricts : >0.7 critical, >0.5 high, >0.3 medium, sinon low."""
    if ratio > 0.7:
        return IntensityTier.CRITICAL
    if ratio > 0.5:
        return IntensityTier.HIGH
    if ratio > 0.3:
        return IntensityTier.MEDIUM
    return IntensityTier.LOW


def confidence_level(confidence: float) -> ConfidenceLevel:
    if confidence >= 0.8:
        return ConfidenceLevel.HIGH
    if confidence >= 0.7:
        return ConfidenceLevel.ELEVATED
    return ConfidenceLevel.MODERATE
