from .itinerary_validator import ItineraryValidator
from .trip_validator import (
    DESCRIPTION_MAX_LENGTH,
    PATCHABLE_FIELDS,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    TripValidator,
)
from .validated import (
    ParticipantEntry,
    ValidatedActivity,
    ValidatedDay,
    ValidatedPatch,
    ValidatedTrip,
)

__all__ = [
    "TripValidator",
    "ItineraryValidator",
    "ValidatedTrip",
    "ValidatedPatch",
    "ValidatedDay",
    "ValidatedActivity",
    "ParticipantEntry",
    "PATCHABLE_FIELDS",
    "TITLE_MIN_LENGTH",
    "TITLE_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
]
