# server/tests/unit/test_incident_service.py
from dataclasses import replace
from datetime import timedelta

import pytest

from app.application.services.incident_service import ListScope, change_status, filter_incidents
from app.domain.enums import IncidentStatus, NotificationType, UserRole
from app.domain.errors import InvalidTransitionError, NoOpError, UnauthorizedError
from app.domain.incident import Profile
from app.domain.transitions import Transitioned

pytestmark = pytest.mark.unit


class FakeIncidentRepo:
    def __init__(self, *incidents):
        self.rows = {i.id: i for i in incidents}
        self.saved = []

    def get(self, incident_id):
        return self.rows[incident_id]

    def save_status(self, incident):
        self.saved.append(incident)
        self.rows[incident.id] = incident
        return incident


class FakeNotificationRepo:
    def __init__(self):
        self.added = []

    def add(self, notification):
        self.added.append(notification)
        return {}


def _profile(role, user_id="staff-1"):
    return Profile(id=user_id, email=f"{user_id}@campus.test", full_name=user_id, role=UserRole(role))


# ---------------------------------------------------------------------------
# filter_incidents
# ---------------------------------------------------------------------------
def test_filter_scopes(make_incident, now):
    older = make_incident(reported_by="alice", status="resolved", created_at=now - timedelta(days=3))
    newer = make_incident(reported_by="bob", status="assigned", created_at=now - timedelta(hours=2))
    middle = make_incident(reported_by="alice", status="in_progress", created_at=now - timedelta(days=1))
    rows = [older, newer, middle]

    assert filter_incidents(rows) == [newer, middle, older]
    assert filter_incidents(rows, "my", "alice") == [middle, older]
    assert filter_incidents(rows, ListScope.ACTIVE) == [newer, middle]


def test_filter_unknown_scope_raises(make_incident):
    with pytest.raises(ValueError):
        filter_incidents([make_incident()], "mine")


# ---------------------------------------------------------------------------
# change_status
# ---------------------------------------------------------------------------
def test_successful_change_persists_and_notifies(make_incident, now):
    inc = make_incident(id="inc-9", status="in_progress", reported_by="student-7")
    incidents, notifications = FakeIncidentRepo(inc), FakeNotificationRepo()

    out = change_status(
        incidents, notifications,
        incident_id="inc-9", target_status="resolved", actor=_profile("technician"), now=now,
    )

    assert isinstance(out, Transitioned)
    assert incidents.saved[0].status is IncidentStatus.RESOLVED
    assert incidents.saved[0].resolved_at == now
    (note,) = notifications.added
    assert note.user_id == "student-7"
    assert note.incident_id == "inc-9"
    assert note.type is NotificationType.RESOLVED


@pytest.mark.parametrize(
    "target,role,error",
    [
        ("in_progress", "admin", NoOpError),
        ("assigned", "admin", InvalidTransitionError),
        ("resolved", "student", UnauthorizedError),
    ],
)
def test_refusals_write_nothing(make_incident, now, target, role, error):
    inc = make_incident(status="in_progress")
    incidents, notifications = FakeIncidentRepo(inc), FakeNotificationRepo()

    out = change_status(incidents, notifications, incident_id=inc.id, target_status=target, actor=_profile(role), now=now)

    assert isinstance(out, error)
    assert incidents.saved == []
    assert notifications.added == []


def test_permissive_policy_allows_reopening(make_incident, now):
    inc = make_incident(status="closed")
    inc = replace(inc, closed_at=now - timedelta(hours=1))
    incidents = FakeIncidentRepo(inc)

    out = change_status(
        incidents, FakeNotificationRepo(),
        incident_id=inc.id, target_status="reported", actor=_profile("admin"), now=now, policy="permissive",
    )

    assert isinstance(out, Transitioned)
    assert out.incident.status is IncidentStatus.REPORTED
    assert out.incident.closed_at == now - timedelta(hours=1)


def test_reporter_acting_on_own_incident_is_not_notified(make_incident, now):
    inc = make_incident(status="reported", reported_by="tech-1")
    notifications = FakeNotificationRepo()

    change_status(
        FakeIncidentRepo(inc), notifications,
        incident_id=inc.id, target_status="assigned", actor=_profile("technician", "tech-1"), now=now,
    )

    assert notifications.added == []
