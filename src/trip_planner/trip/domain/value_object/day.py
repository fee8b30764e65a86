from __future__ import annotations

from dataclasses import dataclass

from trip_planner.shared.domain.value_object import IsoDateTime

from .activity import Activity


@dataclass(frozen=True)
class Day:
    """旅行の1日分（アクティビティを順序付きで保持）"""

    day_id: str
    date: IsoDateTime
    title: str | None = None
    activities: tuple[Activity, ...] = ()

    def find_activity(self, activity_id: str) -> Activity | None:
        return next((a for a in self.activities if a.activity_id == activity_id), None)

    def to_dict(self) -> dict:
        data: dict = {
            "dayId": self.day_id,
            "date": str(self.date),
            "activities": [a.to_dict() for a in self.activities],
        }
        if self.title:
            data["title"] = self.title
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Day:
        return cls(
            day_id=data["dayId"],
            date=IsoDateTime.from_string(data["date"]),
            title=data.get("title"),
            activities=tuple(Activity.from_dict(a) for a in data.get("activities", [])),
        )
