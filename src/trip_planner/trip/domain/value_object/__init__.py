from .activity import Activity, Attachment, Coordinates, Cost, Location
from .actor import Actor
from .day import Day
from .participant import Participant
from .share_token import SHARE_TOKEN_ALPHABET, SHARE_TOKEN_LENGTH, ShareToken
from .trip_period import MAX_TRIP_DAYS, MIN_TRIP_DAYS, TripPeriod
from .trip_settings import DEFAULT_TIMEZONE, TripSettings

__all__ = [
    "Activity",
    "Actor",
    "Attachment",
    "Coordinates",
    "Cost",
    "Day",
    "Location",
    "Participant",
    "ShareToken",
    "SHARE_TOKEN_ALPHABET",
    "SHARE_TOKEN_LENGTH",
    "TripPeriod",
    "MIN_TRIP_DAYS",
    "MAX_TRIP_DAYS",
    "TripSettings",
    "DEFAULT_TIMEZONE",
]
