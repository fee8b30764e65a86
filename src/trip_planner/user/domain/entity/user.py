from __future__ import annotations

from trip_planner.shared.domain import AggregateRoot
from trip_planner.shared.domain.value_object import IsoDateTime, TripId, UserId


class User(AggregateRoot[UserId]):
    """ユーザー

    trip_ids は参加している旅行のインデックス。
    旅行側のトランザクションでのみ追加・削除されるため、ここに変更メソッドは持たない。
    プロフィール（表示名・電話番号）は update_profile で変更する。
    """

    def __init__(
        self,
        id: UserId,
        phone_number: str,
        display_name: str,
        created_at: IsoDateTime,
        updated_at: IsoDateTime,
        trip_ids: frozenset[TripId] = frozenset(),
    ) -> None:
        super().__init__(id)
        self._phone_number = phone_number
        self._display_name = display_name
        self._created_at = created_at
        self._updated_at = updated_at
        self._trip_ids = frozenset(trip_ids)

    @property
    def phone_number(self) -> str:
        return self._phone_number

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def updated_at(self) -> IsoDateTime:
        return self._updated_at

    @property
    def trip_ids(self) -> frozenset[TripId]:
        return self._trip_ids

    def update_profile(
        self,
        now: IsoDateTime,
        display_name: str | None = None,
        phone_number: str | None = None,
    ) -> bool:
        """指定された項目だけを変更する（変更がなければ False）"""
        changed = False
        if display_name is not None and display_name != self._display_name:
            self._display_name = display_name
            changed = True
        if phone_number is not None and phone_number != self._phone_number:
            self._phone_number = phone_number
            changed = True
        if changed:
            self._updated_at = now
        return changed

    def to_dict(self) -> dict:
        return {
            "userId": str(self.id),
            "phoneNumber": self._phone_number,
            "displayName": self._display_name,
            "tripIds": sorted(str(t) for t in self._trip_ids),
            "createdAt": str(self._created_at),
            "updatedAt": str(self._updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(
            id=UserId(data["userId"]),
            phone_number=data.get("phoneNumber", ""),
            display_name=data.get("displayName", ""),
            trip_ids=frozenset(TripId(value=t) for t in data.get("tripIds") or ()),
            created_at=IsoDateTime.from_string(data["createdAt"]),
            updated_at=IsoDateTime.from_string(data["updatedAt"]),
        )
