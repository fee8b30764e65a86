from .entity import Trip
from .enum import ActivityType, ParticipantRole, TripAction, ValidationErrorKind
from .factory import TripFactory
from .repository import TripChangeSet, TripRepository
from .service import ShareTokenIssuer
from .validation import ItineraryValidator, TripValidator
from .value_object import (
    Activity,
    Actor,
    Day,
    Participant,
    ShareToken,
    TripPeriod,
    TripSettings,
)

__all__ = [
    "Trip",
    "TripFactory",
    "TripRepository",
    "TripChangeSet",
    "TripValidator",
    "ItineraryValidator",
    "ShareTokenIssuer",
    "ActivityType",
    "ParticipantRole",
    "TripAction",
    "ValidationErrorKind",
    "Activity",
    "Actor",
    "Day",
    "Participant",
    "ShareToken",
    "TripPeriod",
    "TripSettings",
]
