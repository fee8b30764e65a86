from trip_planner.shared.domain.value_object import IsoDateTime, TripId
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.enum import ParticipantRole
from trip_planner.trip.domain.validation import ValidatedTrip
from trip_planner.trip.domain.value_object import Actor, Participant


class TripFactory:
    """旅行エンティティのファクトリ

    - 検証済みペイロードから集約を組み立てる
    - 作成者をオーナーとして唯一の参加者に設定する
    - 共有トークンは割り当てない（保存時に採番する）
    """

    def create(
        self,
        trip_id: TripId,
        validated: ValidatedTrip,
        actor: Actor,
        now: IsoDateTime,
    ) -> Trip:
        owner = Participant(
            user_id=actor.user_id,
            phone_number=actor.phone_number,
            display_name=actor.display_name,
            role=ParticipantRole.OWNER,
            joined_at=now,
        )
        return Trip(
            id=trip_id,
            title=validated.title,
            description=validated.description,
            period=validated.period,
            participants=[owner],
            days=[],
            created_by=actor.user_id,
            created_at=now,
            updated_at=now,
            settings=validated.settings,
            cover_image_url=validated.cover_image_url,
        )
