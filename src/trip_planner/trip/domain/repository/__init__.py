from .trip_change_set import TripChangeSet
from .trip_repository import TripRepository

__all__ = ["TripChangeSet", "TripRepository"]
