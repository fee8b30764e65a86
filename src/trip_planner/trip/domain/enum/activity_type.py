from enum import Enum


class ActivityType(str, Enum):
    """アクティビティの種別"""

    FLIGHT = "flight"
    HOTEL = "hotel"
    RESTAURANT = "restaurant"
    ATTRACTION = "attraction"
    TRANSPORT = "transport"
    OTHER = "other"
