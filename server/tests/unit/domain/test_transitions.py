# server/tests/unit/domain/test_transitions.py
from datetime import timedelta

import pytest

from app.domain.enums import IncidentStatus
from app.domain.errors import InvalidTransitionError, NoOpError, UnauthorizedError
from app.domain.policies import FORWARD_TRANSITIONS, PERMISSIVE_TRANSITIONS
from app.domain.transitions import Transitioned, apply_transition

pytestmark = pytest.mark.unit

ALL = list(IncidentStatus)


def test_reported_to_closed_by_technician(make_incident, now):
    inc = make_incident(status="reported")
    out = apply_transition(inc, "closed", "technician", now)

    assert isinstance(out, Transitioned)
    assert out.incident.status is IncidentStatus.CLOSED
    assert out.incident.closed_at == now
    assert out.incident.resolved_at is None
    assert out.incident.updated_at == now
    assert out.notify_required is True
    assert out.previous_status is IncidentStatus.REPORTED


def test_input_record_is_not_modified(make_incident, now):
    inc = make_incident(status="assigned")
    apply_transition(inc, "in_progress", "admin", now)
    assert inc.status is IncidentStatus.ASSIGNED
    assert inc.updated_at != now


def test_resolve_stamps_resolved_at(make_incident, now):
    out = apply_transition(make_incident(status="in_progress"), IncidentStatus.RESOLVED, "admin", now)
    assert out.incident.resolved_at == now
    assert out.incident.closed_at is None


@pytest.mark.parametrize("role", ["student", "guest", None])
def test_non_staff_roles_are_unauthorized(make_incident, now, role):
    inc = make_incident()
    out = apply_transition(inc, "assigned", role, now)
    assert isinstance(out, UnauthorizedError)


def test_role_is_checked_before_no_op(make_incident, now):
    inc = make_incident(status="reported")
    assert isinstance(apply_transition(inc, "reported", "student", now), UnauthorizedError)


@pytest.mark.parametrize("status", [s.value for s in ALL])
def test_same_status_is_no_op(make_incident, now, status):
    inc = make_incident(status=status)
    out = apply_transition(inc, status, "admin", now)
    assert isinstance(out, NoOpError)
    assert inc.status.value == status


@pytest.mark.parametrize(
    "current,target",
    [
        ("resolved", "reported"),
        ("closed", "resolved"),
        ("closed", "reported"),
        ("in_progress", "assigned"),
        ("assigned", "reported"),
    ],
)
def test_backward_moves_are_invalid(make_incident, now, current, target):
    out = apply_transition(make_incident(status=current), target, "technician", now)
    assert isinstance(out, InvalidTransitionError)


def test_unknown_target_is_invalid(make_incident, now):
    out = apply_transition(make_incident(), "archived", "admin", now)
    assert isinstance(out, InvalidTransitionError)


@pytest.mark.parametrize("current", ALL)
@pytest.mark.parametrize("target", ALL)
def test_forward_table_is_exactly_enforced(make_incident, now, current, target):
    out = apply_transition(make_incident(status=current), target, "admin", now)
    if target is current:
        assert isinstance(out, NoOpError)
    elif target in FORWARD_TRANSITIONS[current]:
        assert isinstance(out, Transitioned)
    else:
        assert isinstance(out, InvalidTransitionError)


def test_second_identical_transition_is_no_op(make_incident, now):
    first = apply_transition(make_incident(status="assigned"), "in_progress", "admin", now)
    second = apply_transition(first.incident, "in_progress", "admin", now + timedelta(minutes=5))
    assert isinstance(second, NoOpError)


def test_resolved_at_is_kept_when_closing(make_incident, now):
    resolved = apply_transition(make_incident(status="in_progress"), "resolved", "admin", now).incident
    later = now + timedelta(hours=3)
    closed = apply_transition(resolved, "closed", "technician", later).incident
    assert closed.resolved_at == now
    assert closed.closed_at == later
    assert closed.updated_at == later


def test_permissive_policy_never_overwrites_stamps(make_incident, now):
    t1 = now
    t2 = now + timedelta(hours=1)
    t3 = now + timedelta(hours=2)
    inc = apply_transition(make_incident(), "resolved", "admin", t1, table=PERMISSIVE_TRANSITIONS).incident
    inc = apply_transition(inc, "reported", "admin", t2, table=PERMISSIVE_TRANSITIONS).incident
    inc = apply_transition(inc, "resolved", "admin", t3, table=PERMISSIVE_TRANSITIONS).incident

    assert inc.status is IncidentStatus.RESOLVED
    assert inc.resolved_at == t1
    assert inc.updated_at == t3


def test_permissive_policy_still_reports_no_op_and_role(make_incident, now):
    inc = make_incident(status="closed")
    assert isinstance(apply_transition(inc, "closed", "admin", now, table=PERMISSIVE_TRANSITIONS), NoOpError)
    assert isinstance(apply_transition(inc, "reported", "student", now, table=PERMISSIVE_TRANSITIONS), UnauthorizedError)
    assert isinstance(apply_transition(inc, "reported", "admin", now, table=PERMISSIVE_TRANSITIONS), Transitioned)
