from .trip_factory import TripFactory

__all__ = ["TripFactory"]
