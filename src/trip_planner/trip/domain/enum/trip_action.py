from enum import Enum


class TripAction(str, Enum):
    """権限判定の対象となる操作"""

    UPDATE_TITLE = "update_title"
    DELETE_TRIP = "delete_trip"
    ADD_PARTICIPANT = "add_participant"
    VIEW_TRIP = "view_trip"
