from __future__ import annotations
"""server/app/domain/errors.py
~~~~~~~~~~~~~~~~~~~~~~~~
Taxonomie des erreurs métier.

- `ValidationError`        : enregistrement mal formé (levée par la factory).
- `UnauthorizedError`      : rôle de l'appelant insuffisant.
- `InvalidTransitionError` : statut cible inatteignable depuis le statut courant.
- `NoOpError`              : statut cible == statut courant (saut bénin).

Le moteur de transitions **retourne** ces erreurs comme valeurs : c'est à
l'appelant de décider s'il affiche un message, ignore, ou lève (`raise err`).
"""


class DomainError(Exception):
    """Base des erreurs métier. `code` est un identifiant stable (API/logs)."""

    code = "domain_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class ValidationError(DomainError):
    code = "validation_error"


class TransitionError(DomainError):
    """Base des refus du moteur de transitions."""

    code = "transition_error"


class UnauthorizedError(TransitionError):
    code = "unauthorized"


class InvalidTransitionError(TransitionError):
    code = "invalid_transition"


class NoOpError(TransitionError):
    code = "no_op"
