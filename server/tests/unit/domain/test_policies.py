# server/tests/unit/domain/test_policies.py
import pytest

from app.domain.enums import ConfidenceLevel, IncidentStatus, IntensityTier
from app.domain.policies import (
    FORWARD_TRANSITIONS,
    PERMISSIVE_TRANSITIONS,
    allowed_targets,
    confidence_level,
    intensity_tier,
    transition_table,
)

pytestmark = pytest.mark.unit


def test_closed_is_terminal():
    assert allowed_targets(IncidentStatus.CLOSED) == frozenset()


def test_forward_table_never_points_backwards():
    order = list(IncidentStatus)
    for src, targets in FORWARD_TRANSITIONS.items():
        assert all(order.index(t) > order.index(src) for t in targets)


def test_permissive_table_allows_every_other_status():
    for src, targets in PERMISSIVE_TRANSITIONS.items():
        assert src not in targets
        assert len(targets) == len(IncidentStatus) - 1


@pytest.mark.parametrize("name,table", [(None, FORWARD_TRANSITIONS), ("Forward", FORWARD_TRANSITIONS), ("permissive", PERMISSIVE_TRANSITIONS)])
def test_transition_table_lookup(name, table):
    assert transition_table(name) is table


def test_unknown_policy_raises():
    with pytest.raises(ValueError):
        transition_table("anything-goes")


@pytest.mark.parametrize(
    "ratio,tier",
    [
        (1.0, IntensityTier.CRITICAL),
        (0.71, IntensityTier.CRITICAL),
        (0.7, IntensityTier.HIGH),
        (0.51, IntensityTier.HIGH),
        (0.5, IntensityTier.MEDIUM),
        (0.31, IntensityTier.MEDIUM),
        (0.3, IntensityTier.LOW),
        (0.0, IntensityTier.LOW),
    ],
)
def test_intensity_tier_thresholds_are_strict(ratio, tier):
    assert intensity_tier(ratio) is tier


@pytest.mark.parametrize(
    "confidence,level",
    [(0.95, ConfidenceLevel.HIGH), (0.8, ConfidenceLevel.HIGH), (0.79, ConfidenceLevel.ELEVATED), (0.7, ConfidenceLevel.ELEVATED), (0.6, ConfidenceLevel.MODERATE)],
)
def test_confidence_level(confidence, level):
    assert confidence_level(confidence) is level
