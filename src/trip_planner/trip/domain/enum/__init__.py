from .activity_type import ActivityType
from .participant_role import ParticipantRole
from .trip_action import TripAction
from .validation_error_kind import ValidationErrorKind

__all__ = ["ActivityType", "ParticipantRole", "TripAction", "ValidationErrorKind"]
