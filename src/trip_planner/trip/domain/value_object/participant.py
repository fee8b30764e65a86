from __future__ import annotations

from dataclasses import dataclass

from trip_planner.shared.domain.value_object import IsoDateTime, UserId
from trip_planner.trip.domain.enum import ParticipantRole


@dataclass(frozen=True)
class Participant:
    """旅行の参加者（ユーザー情報は表示用に非正規化して保持）"""

    user_id: UserId
    phone_number: str
    display_name: str
    role: ParticipantRole
    joined_at: IsoDateTime

    @property
    def is_owner(self) -> bool:
        return self.role == ParticipantRole.OWNER

    def to_dict(self) -> dict:
        return {
            "userId": str(self.user_id),
            "phoneNumber": self.phone_number,
            "displayName": self.display_name,
            "role": self.role.value,
            "joinedAt": str(self.joined_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Participant:
        return cls(
            user_id=UserId(data["userId"]),
            phone_number=data.get("phoneNumber", ""),
            display_name=data.get("displayName", ""),
            role=ParticipantRole(data["role"]),
            joined_at=IsoDateTime.from_string(data["joinedAt"]),
        )
