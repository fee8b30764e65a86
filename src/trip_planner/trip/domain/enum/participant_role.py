from enum import Enum


class ParticipantRole(str, Enum):
    """旅行参加者のロール"""

    OWNER = "owner"
    ORGANIZER = "organizer"
    PARTICIPANT = "participant"
    VIEWER = "viewer"
