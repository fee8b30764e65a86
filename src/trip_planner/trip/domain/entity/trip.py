from __future__ import annotations

from dataclasses import replace

from trip_planner.shared.domain import AggregateRoot, ResourceNotFoundException
from trip_planner.shared.domain.exception import BusinessRuleViolationException
from trip_planner.shared.domain.value_object import IsoDateTime, TripId, UserId
from trip_planner.trip.domain.enum import ParticipantRole
from trip_planner.trip.domain.validation import ValidatedPatch
from trip_planner.trip.domain.value_object import (
    Activity,
    Day,
    Participant,
    ShareToken,
    TripPeriod,
    TripSettings,
)


class Trip(AggregateRoot[TripId]):
    """旅行（集約ルート）

    Day / Activity は旅行ドキュメント内に入れ子で保持され、
    旅行全体で1つの整合性境界となる。
    変更系メソッドは updated_at と version を進める。
    """

    def __init__(
        self,
        id: TripId,
        title: str,
        period: TripPeriod,
        participants: list[Participant],
        created_by: UserId,
        created_at: IsoDateTime,
        updated_at: IsoDateTime,
        settings: TripSettings,
        description: str = "",
        days: list[Day] | None = None,
        cover_image_url: str | None = None,
        version: int = 1,
    ) -> None:
        super().__init__(id, version)
        self._title = title
        self._description = description
        self._period = period
        self._participants = list(participants)
        self._days = list(days or [])
        self._created_by = created_by
        self._created_at = created_at
        self._updated_at = updated_at
        self._settings = settings
        self._cover_image_url = cover_image_url

        self._validate_participants(self._participants)

    def _validate_participants(self, participants: list[Participant]) -> None:
        """参加者は空にならず、オーナーは作成者ただ1人"""
        if not participants:
            raise BusinessRuleViolationException("Trip must have at least one participant")
        owners = [p for p in participants if p.is_owner]
        if len(owners) != 1 or owners[0].user_id != self._created_by:
            raise BusinessRuleViolationException("Trip must have exactly one owner (its creator)")

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def period(self) -> TripPeriod:
        return self._period

    @property
    def participants(self) -> tuple[Participant, ...]:
        return tuple(self._participants)

    @property
    def days(self) -> tuple[Day, ...]:
        return tuple(self._days)

    @property
    def created_by(self) -> UserId:
        return self._created_by

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def updated_at(self) -> IsoDateTime:
        return self._updated_at

    @property
    def settings(self) -> TripSettings:
        return self._settings

    @property
    def cover_image_url(self) -> str | None:
        return self._cover_image_url

    @property
    def share_token(self) -> ShareToken | None:
        return self._settings.share_token

    def participant_ids(self) -> frozenset[UserId]:
        return frozenset(p.user_id for p in self._participants)

    def role_of(self, user_id: UserId) -> ParticipantRole | None:
        """ユーザーのロールを返す（参加者でなければ None）"""
        for participant in self._participants:
            if participant.user_id == user_id:
                return participant.role
        return None

    def needs_share_token(self) -> bool:
        return self._settings.is_public and self._settings.share_token is None

    def apply_patch(self, patch: ValidatedPatch, now: IsoDateTime) -> bool:
        """検証済みパッチをマージする

        現在値と異なるフィールドだけを反映する。何も変わらなければ
        False を返し、updated_at / version も進めない（同じパッチの再適用は冪等）。
        """
        changes = patch.changes
        changed = False

        # 参加者の不変条件を先に検査し、途中まで反映された状態を残さない
        participants = self._participants
        if "participants" in changes:
            participants = [
                Participant(
                    user_id=entry.user_id,
                    phone_number=entry.phone_number,
                    display_name=entry.display_name,
                    role=entry.role,
                    joined_at=entry.joined_at or now,
                )
                for entry in changes["participants"]
            ]
            self._validate_participants(participants)

        if participants != self._participants:
            self._participants = participants
            changed = True
        if "title" in changes and changes["title"] != self._title:
            self._title = changes["title"]
            changed = True
        if "description" in changes and changes["description"] != self._description:
            self._description = changes["description"]
            changed = True
        if "cover_image_url" in changes and changes["cover_image_url"] != self._cover_image_url:
            self._cover_image_url = changes["cover_image_url"]
            changed = True
        if "period" in changes and changes["period"] != self._period:
            self._period = changes["period"]
            changed = True
        if "settings" in changes and changes["settings"] != self._settings:
            self._settings = changes["settings"]
            changed = True

        if changed:
            self._touch(now)
        return changed

    def update_participant_profile(
        self, user_id: UserId, display_name: str, phone_number: str, now: IsoDateTime
    ) -> bool:
        """非正規化している参加者の表示名・電話番号を書き換える

        参加者でない、または値が同じ場合は何もせず False を返す。
        """
        for index, participant in enumerate(self._participants):
            if participant.user_id != user_id:
                continue
            updated = replace(participant, display_name=display_name, phone_number=phone_number)
            if updated == participant:
                return False
            self._participants[index] = updated
            self._touch(now)
            return True
        return False

    def assign_share_token(self, token: ShareToken) -> None:
        """公開旅行に共有トークンを割り当てる"""
        if not self._settings.is_public:
            raise BusinessRuleViolationException("Share tokens are only issued for public trips")
        self._settings = self._settings.with_share_token(token)

    def find_day(self, day_id: str) -> Day:
        for day in self._days:
            if day.day_id == day_id:
                return day
        raise ResourceNotFoundException("day", day_id)

    def find_activity(self, day_id: str, activity_id: str) -> Activity:
        activity = self.find_day(day_id).find_activity(activity_id)
        if activity is None:
            raise ResourceNotFoundException("activity", activity_id)
        return activity

    def add_day(self, day: Day, now: IsoDateTime) -> None:
        self._days.append(day)
        self._touch(now)

    def remove_day(self, day_id: str, now: IsoDateTime) -> None:
        day = self.find_day(day_id)
        self._days.remove(day)
        self._touch(now)

    def add_activity(self, day_id: str, activity: Activity, now: IsoDateTime) -> None:
        day = self.find_day(day_id)
        self._replace_day(day, replace(day, activities=day.activities + (activity,)))
        self._touch(now)

    def replace_activity(self, day_id: str, activity: Activity, now: IsoDateTime) -> None:
        day = self.find_day(day_id)
        self.find_activity(day_id, activity.activity_id)
        activities = tuple(
            activity if a.activity_id == activity.activity_id else a for a in day.activities
        )
        self._replace_day(day, replace(day, activities=activities))
        self._touch(now)

    def remove_activity(self, day_id: str, activity_id: str, now: IsoDateTime) -> None:
        day = self.find_day(day_id)
        self.find_activity(day_id, activity_id)
        activities = tuple(a for a in day.activities if a.activity_id != activity_id)
        self._replace_day(day, replace(day, activities=activities))
        self._touch(now)

    def _replace_day(self, old: Day, new: Day) -> None:
        self._days[self._days.index(old)] = new

    def _touch(self, now: IsoDateTime) -> None:
        self._updated_at = now
        self._bump_version()

    def to_dict(self) -> dict:
        """永続化・レスポンス用のドキュメント表現を返す"""
        data: dict = {
            "tripId": str(self.id),
            "title": self._title,
            "description": self._description,
            "startDate": str(self._period.start),
            "endDate": str(self._period.end),
            "participants": [p.to_dict() for p in self._participants],
            "days": [d.to_dict() for d in self._days],
            "createdBy": str(self._created_by),
            "createdAt": str(self._created_at),
            "updatedAt": str(self._updated_at),
            "settings": self._settings.to_dict(),
            "version": self.version,
        }
        if self._cover_image_url:
            data["coverImageUrl"] = self._cover_image_url
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Trip:
        return cls(
            id=TripId(value=data["tripId"]),
            title=data["title"],
            description=data.get("description", ""),
            period=TripPeriod(
                start=IsoDateTime.from_string(data["startDate"]),
                end=IsoDateTime.from_string(data["endDate"]),
            ),
            participants=[Participant.from_dict(p) for p in data["participants"]],
            days=[Day.from_dict(d) for d in data.get("days", [])],
            created_by=UserId(data["createdBy"]),
            created_at=IsoDateTime.from_string(data["createdAt"]),
            updated_at=IsoDateTime.from_string(data["updatedAt"]),
            settings=TripSettings.from_dict(data.get("settings") or {}),
            cover_image_url=data.get("coverImageUrl"),
            version=int(data.get("version", 1)),
        )
