from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from trip_planner.shared.domain.value_object import IsoDateTime, Money, UserId
from trip_planner.trip.domain.enum import ActivityType


@dataclass(frozen=True)
class Coordinates:
    lat: Decimal
    lng: Decimal

    def __post_init__(self) -> None:
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180 <= self.lng <= 180:
            raise ValueError(f"Longitude out of range: {self.lng}")


@dataclass(frozen=True)
class Location:
    """アクティビティの場所"""

    name: str
    address: str | None = None
    coordinates: Coordinates | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Location name cannot be empty")

    def to_dict(self) -> dict:
        data: dict = {"name": self.name}
        if self.address:
            data["address"] = self.address
        if self.coordinates is not None:
            data["coordinates"] = {
                "lat": self.coordinates.lat,
                "lng": self.coordinates.lng,
            }
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Location:
        coordinates = data.get("coordinates")
        return cls(
            name=data["name"],
            address=data.get("address"),
            coordinates=Coordinates(
                lat=Decimal(str(coordinates["lat"])),
                lng=Decimal(str(coordinates["lng"])),
            )
            if coordinates
            else None,
        )


@dataclass(frozen=True)
class Cost:
    """費用（誰が支払い、誰で割り勘するか）"""

    price: Money
    paid_by: UserId | None = None
    split_between: tuple[UserId, ...] = ()

    def to_dict(self) -> dict:
        data: dict = {
            "amount": str(self.price.amount),
            "currency": str(self.price.currency),
        }
        if self.paid_by is not None:
            data["paidBy"] = str(self.paid_by)
        if self.split_between:
            data["splitBetween"] = [str(user_id) for user_id in self.split_between]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Cost:
        return cls(
            price=Money.of(data["amount"], data["currency"]),
            paid_by=UserId(data["paidBy"]) if data.get("paidBy") else None,
            split_between=tuple(UserId(u) for u in data.get("splitBetween", [])),
        )


@dataclass(frozen=True)
class Attachment:
    url: str
    file_name: str
    file_type: str

    def to_dict(self) -> dict:
        return {"url": self.url, "fileName": self.file_name, "fileType": self.file_type}

    @classmethod
    def from_dict(cls, data: dict) -> Attachment:
        return cls(url=data["url"], file_name=data["fileName"], file_type=data["fileType"])


@dataclass(frozen=True)
class Activity:
    """アクティビティ（Day 配下に入れ子で保持される）"""

    activity_id: str
    title: str
    type: ActivityType
    created_by: UserId
    created_at: IsoDateTime
    updated_by: UserId
    updated_at: IsoDateTime
    description: str | None = None
    start_time: IsoDateTime | None = None
    end_time: IsoDateTime | None = None
    location: Location | None = None
    cost: Cost | None = None
    notes: str | None = None
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data: dict = {
            "activityId": self.activity_id,
            "title": self.title,
            "type": self.type.value,
            "createdBy": str(self.created_by),
            "createdAt": str(self.created_at),
            "updatedBy": str(self.updated_by),
            "updatedAt": str(self.updated_at),
            "attachments": [a.to_dict() for a in self.attachments],
        }
        # 値のない任意項目は出力しない
        if self.description:
            data["description"] = self.description
        if self.start_time is not None:
            data["startTime"] = str(self.start_time)
        if self.end_time is not None:
            data["endTime"] = str(self.end_time)
        if self.location is not None:
            data["location"] = self.location.to_dict()
        if self.cost is not None:
            data["cost"] = self.cost.to_dict()
        if self.notes:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Activity:
        return cls(
            activity_id=data["activityId"],
            title=data["title"],
            type=ActivityType(data["type"]),
            created_by=UserId(data["createdBy"]),
            created_at=IsoDateTime.from_string(data["createdAt"]),
            updated_by=UserId(data["updatedBy"]),
            updated_at=IsoDateTime.from_string(data["updatedAt"]),
            description=data.get("description"),
            start_time=IsoDateTime.from_string(data["startTime"])
            if data.get("startTime")
            else None,
            end_time=IsoDateTime.from_string(data["endTime"])
            if data.get("endTime")
            else None,
            location=Location.from_dict(data["location"]) if data.get("location") else None,
            cost=Cost.from_dict(data["cost"]) if data.get("cost") else None,
            notes=data.get("notes"),
            attachments=tuple(Attachment.from_dict(a) for a in data.get("attachments", [])),
        )
