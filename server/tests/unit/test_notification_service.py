# server/tests/unit/test_notification_service.py
import pytest

from app.application.services.notification_service import build_status_notification, notify_status_change
from app.domain.enums import IncidentStatus, NotificationType, UserRole
from app.domain.incident import Profile
from app.domain.transitions import Transitioned, apply_transition

pytestmark = pytest.mark.unit


class _Repo:
    def __init__(self):
        self.rows = []

    def add(self, n):
        self.rows.append(n)
        return {}


def test_update_notification_content(make_incident, now):
    inc = make_incident(title="Leaking tap", status="reported", reported_by="student-3")
    result = apply_transition(inc, "assigned", "admin", now)
    n = build_status_notification(result)

    assert n.type is NotificationType.INCIDENT_UPDATE
    assert n.title == "Incident updated"
    assert n.message == '"Leaking tap" moved from Reported to Assigned'
    assert n.created_at == now
    assert n.is_read is False


def test_resolved_notification_type(make_incident, now):
    result = apply_transition(make_incident(status="assigned"), "resolved", "admin", now)
    assert build_status_notification(result).type is NotificationType.RESOLVED


def test_no_notification_when_not_required(make_incident, now):
    inc = make_incident()
    result = Transitioned(incident=inc, previous_status=IncidentStatus.REPORTED, notify_required=False)
    assert build_status_notification(result) is None


def test_notify_status_change_writes_to_repo(make_incident, now):
    repo = _Repo()
    result = apply_transition(make_incident(status="resolved"), "closed", "technician", now)
    actor = Profile(id="tech-2", email="t@campus.test", full_name="Tech", role=UserRole.TECHNICIAN)

    n = notify_status_change(repo, result, actor)

    assert repo.rows == [n]
    assert n.type is NotificationType.INCIDENT_UPDATE
