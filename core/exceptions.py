from __future__ import annotations

from typing import Any, Optional, Dict


class AppError(Exception):
    """Base pour les erreurs métier applicatives.

    Porte un code stable, un status HTTP suggéré et un hint optionnel.
    """

    code: str = "app_error"
    http_status: int = 500

    def __init__(self, message: str, *, hint: Optional[str] = None, details: Any | None = None):
        super().__init__(message)
        self.hint = hint
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": str(self),
            "code": self.code,
            "hint": self.hint,
        }


class BadRequestError(AppError):
    code = "bad_request"
    http_status = 400


class DependencyValidationError(BadRequestError):
    """Malformed update request or reference to an unknown todo."""

    code = "validation_error"


class CircularDependencyError(AppError):
    """The proposed prerequisite list would close a cycle."""

    code = "circular_dependency"
    http_status = 409

    def __init__(self, message: str, *, path: list[int] | None = None, hint: Optional[str] = None):
        self.path = list(path or [])
        if hint is None and self.path:
            hint = " -> ".join(str(p) for p in self.path)
        super().__init__(message, hint=hint, details={"path": self.path})


class NotFoundError(AppError):
    code = "not_found"
    http_status = 404


class PersistenceError(AppError):
    code = "persistence_error"
    http_status = 500


class GraphContractViolation(AppError):
    """The scheduler met a cycle: some write bypassed the cycle guard."""

    code = "graph_inconsistent"
    http_status = 500
