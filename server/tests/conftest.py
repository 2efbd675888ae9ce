# server/tests/conftest.py
"""
Conftest *global* pour toute la suite de tests.

Points clés :
- Définit des ENV sûres AVANT tout import de `app` (les Settings sont lus à l'import) :
  aucun test ne doit joindre le vrai backend hébergé.
- Fournit l'instant de référence `now` et la factory `make_incident`.
"""

import itertools
import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("SUPABASE_URL", "http://backend.invalid")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ.setdefault("TRANSITION_POLICY", "forward")

from app.domain.incident import build_incident  # noqa: E402

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_incident():
    """
    Factory d'incidents valides. Les champs passés en kwargs écrasent les défauts.
    Si `created_at` est fourni sans `sla_deadline`, l'échéance vaut created_at + 2 jours.
    """
    seq = itertools.count(1)

    def _make(**overrides):
        n = next(seq)
        created = overrides.get("created_at", NOW - timedelta(days=1))
        fields = dict(
            id=f"inc-{n}",
            title=f"Incident {n}",
            description="",
            category="electricity",
            priority="medium",
            status="reported",
            location="Room1",
            building="BuildingA",
            reported_by="student-1",
            created_at=created,
            sla_deadline=created + timedelta(days=2),
        )
        fields.update(overrides)
        return build_incident(**fields)

    return _make
