from __future__ import annotations
"""server/app/domain/enums.py
~~~~~~~~~~~~~~~~~~~~~~~~
Énumérations métier (valeurs exactes partagées avec le backend hébergé).
"""
from enum import Enum


class IncidentCategory(str, Enum):
    ELECTRICITY = "electricity"
    WATER = "water"
    INTERNET = "internet"
    HOSTEL = "hostel"
    EQUIPMENT = "equipment"


class IncidentPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IncidentStatus(str, Enum):
    REPORTED = "reported"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class UserRole(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"
    TECHNICIAN = "technician"


class NotificationType(str, Enum):
    INCIDENT_UPDATE = "incident_update"
    ASSIGNMENT = "assignment"
    RESOLVED = "resolved"
    WARNING = "warning"


class SLABucket(str, Enum):
    COMPLETED = "completed"
    OVERDUE = "overdue"
    CRITICAL = "critical"
    ON_TRACK = "onTrack"


class IntensityTier(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    ELEVATED = "elevated"
    MODERATE = "moderate"


# Statuts "en cours" (ni résolus ni clos)
ACTIVE_STATUSES = frozenset({
    IncidentStatus.REPORTED,
    IncidentStatus.ASSIGNED,
    IncidentStatus.IN_PROGRESS,
})

DONE_STATUSES = frozenset({IncidentStatus.RESOLVED, IncidentStatus.CLOSED})

# Rôles autorisés à faire évoluer le statut d'un incident
STAFF_ROLES = frozenset({UserRole.ADMIN, UserRole.TECHNICIAN})
