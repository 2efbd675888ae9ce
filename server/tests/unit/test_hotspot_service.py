# server/tests/unit/test_hotspot_service.py
from datetime import timedelta

import pytest

from app.application.services.hotspot_service import rank_hotspots
from app.domain.enums import IncidentCategory, IntensityTier
from app.domain.errors import ValidationError

pytestmark = pytest.mark.unit


@pytest.fixture
def start(now):
    return now - timedelta(days=30)


def test_ranks_by_frequency(make_incident, start):
    rows = [
        make_incident(building="BuildingB", location="Room2"),
        make_incident(building="BuildingA", location="Room1"),
        make_incident(building="BuildingA", location="Room1"),
    ]
    ranked = rank_hotspots(rows, start)
    assert [(h.building, h.location, h.count) for h in ranked] == [
        ("BuildingA", "Room1", 2),
        ("BuildingB", "Room2", 1),
    ]


def test_same_location_in_two_buildings_are_distinct(make_incident, start):
    rows = [
        make_incident(building="North", location="Kitchen"),
        make_incident(building="South", location="Kitchen"),
    ]
    assert len(rank_hotspots(rows, start)) == 2


def test_group_category_is_first_seen(make_incident, start):
    rows = [
        make_incident(category="water"),
        make_incident(category="electricity"),
        make_incident(category="electricity"),
    ]
    (hotspot,) = rank_hotspots(rows, start)
    assert hotspot.category is IncidentCategory.WATER
    assert hotspot.count == 3


def test_ties_keep_first_seen_order(make_incident, start):
    rows = [make_incident(location=name) for name in ("C", "A", "B")]
    assert [h.location for h in rank_hotspots(rows, start)] == ["C", "A", "B"]


def test_window_and_category_filter(make_incident, now, start):
    rows = [
        make_incident(location="Old", created_at=now - timedelta(days=31)),
        make_incident(location="Wifi", category="internet"),
        make_incident(location="Tap", category="water"),
        make_incident(location="Tap", category="water"),
    ]
    assert [h.location for h in rank_hotspots(rows, start)] == ["Tap", "Wifi"]
    assert [h.location for h in rank_hotspots(rows, start, "internet")] == ["Wifi"]
    assert [h.location for h in rank_hotspots(rows, start, IncidentCategory.WATER)] == ["Tap"]


def test_unknown_category_filter_is_rejected(make_incident, start):
    with pytest.raises(ValidationError):
        rank_hotspots([make_incident()], start, "gas")


def test_intensity_relative_to_top_hotspot(make_incident, start):
    rows = []
    for location, n in (("A", 10), ("B", 6), ("C", 4), ("D", 3)):
        rows += [make_incident(location=location) for _ in range(n)]
    ranked = rank_hotspots(rows, start)

    assert [h.intensity for h in ranked] == [
        IntensityTier.CRITICAL,
        IntensityTier.HIGH,
        IntensityTier.MEDIUM,
        IntensityTier.LOW,
    ]
    assert ranked[0].ratio == 1.0
    assert ranked[1].ratio == pytest.approx(0.6)


def test_empty_result(start):
    assert rank_hotspots([], start) == []
