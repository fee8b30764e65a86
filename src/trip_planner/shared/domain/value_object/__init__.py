from .currency import Currency
from .iso_date_time import IsoDateTime
from .money import Money
from .trip_id import TripId
from .user_id import UserId

__all__ = ["TripId", "UserId", "Currency", "Money", "IsoDateTime"]
