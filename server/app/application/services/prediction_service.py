from __future__ import annotations
"""server/app/application/services/prediction_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
"Prédictions" de récurrence par lieu et catégorie.

⚠️ Heuristique volontairement naïve, PAS un modèle statistique :
- regroupe par (building, location, category) dans la fenêtre ;
- écarte les groupes de moins de `min_recurrence` incidents ;
- confiance = clamp(0.6, 0.95, min(0.95, count/10 * 0.5 + 0.5) + jitter),
  jitter uniforme dans [-0.05, 0.05] ;
- date prévue = now + 7..20 jours entiers (tirage uniforme) ;
- tri décroissant par confiance.

La source d'aléa est injectée (`random.Random` ou tout objet exposant
`.random() -> float` dans [0, 1)) : avec une graine fixe, le résultat est
déterministe.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Protocol

from app.core.utils.datetime import ensure_utc
from app.domain.enums import ConfidenceLevel, IncidentCategory
from app.domain.incident import Incident
from app.domain.policies import confidence_level

MIN_CONFIDENCE = 0.6
MAX_CONFIDENCE = 0.95
MIN_DAYS_AHEAD = 7
DAYS_AHEAD_SPAN = 14


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class Prediction:
    building: str
    location: str
    category: IncidentCategory
    predicted_date: datetime
    confidence: float
    incident_count: int

    @property
    def display_location(self) -> str:
        return f"{self.building} - {self.location}"

    @property
    def level(self) -> ConfidenceLevel:
        return confidence_level(self.confidence)


def base_confidence(count: int) -> float:
    return min(MAX_CONFIDENCE, (count / 10) * 0.5 + 0.5)


def predict_hotspots(
    incidents: Iterable[Incident],
    window_start: datetime,
    now: datetime,
    rng: RandomSource,
    *,
    min_recurrence: int = 2,
) -> list[Prediction]:
    window_start = ensure_utc(window_start)
    now = ensure_utc(now)

    counts: dict[tuple[str, str, IncidentCategory], int] = {}
    for inc in incidents:
        if inc.created_at < window_start:
            continue
        key = (inc.building, inc.location, inc.category)
        counts[key] = counts.get(key, 0) + 1

    predictions: list[Prediction] = []
    for (building, location, category), count in counts.items():
        if count < min_recurrence:
            continue
        days_ahead = MIN_DAYS_AHEAD + int(rng.random() * DAYS_AHEAD_SPAN)
        jitter = (rng.random() - 0.5) * 0.1
        confidence = max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, base_confidence(count) + jitter))
        predictions.append(
            Prediction(
                building=building,
                location=location,
                category=category,
                predicted_date=now + timedelta(days=days_ahead),
                confidence=confidence,
                incident_count=count,
            )
        )

    predictions.sort(key=lambda p: p.confidence, reverse=True)
    return predictions
