from dataclasses import dataclass, field
from typing import Any

from trip_planner.shared.domain.value_object import IsoDateTime, UserId
from trip_planner.trip.domain.enum import ActivityType, ParticipantRole
from trip_planner.trip.domain.value_object import (
    Activity,
    Cost,
    Location,
    TripPeriod,
    TripSettings,
)


@dataclass(frozen=True)
class ValidatedTrip:
    """作成用に正規化されたペイロード"""

    title: str
    description: str
    period: TripPeriod
    settings: TripSettings
    cover_image_url: str | None = None


@dataclass(frozen=True)
class ParticipantEntry:
    """パッチで指定された参加者（既存参加者の joined_at は引き継ぐ）"""

    user_id: UserId
    phone_number: str
    display_name: str
    role: ParticipantRole
    joined_at: IsoDateTime | None = None


@dataclass(frozen=True)
class ValidatedPatch:
    """更新用に正規化されたパッチ

    changes のキー: title, description, period, settings,
    cover_image_url, participants
    """

    changes: dict[str, Any] = field(default_factory=dict)

    @property
    def fields(self) -> frozenset[str]:
        return frozenset(self.changes)


@dataclass(frozen=True)
class ValidatedDay:
    date: IsoDateTime
    title: str | None = None


@dataclass(frozen=True)
class ValidatedActivity:
    title: str
    type: ActivityType
    description: str | None = None
    start_time: IsoDateTime | None = None
    end_time: IsoDateTime | None = None
    location: Location | None = None
    cost: Cost | None = None
    notes: str | None = None

    @classmethod
    def from_activity(cls, activity: Activity) -> "ValidatedActivity":
        return cls(
            title=activity.title,
            type=activity.type,
            description=activity.description,
            start_time=activity.start_time,
            end_time=activity.end_time,
            location=activity.location,
            cost=activity.cost,
            notes=activity.notes,
        )
