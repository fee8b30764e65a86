from .exceptions import (
    PermissionDeniedException,
    ShareTokenCollisionException,
    TokenAllocationExhaustedException,
    TripValidationException,
    UnknownActionException,
    UnknownRoleException,
)

__all__ = [
    "TripValidationException",
    "PermissionDeniedException",
    "UnknownRoleException",
    "UnknownActionException",
    "ShareTokenCollisionException",
    "TokenAllocationExhaustedException",
]
