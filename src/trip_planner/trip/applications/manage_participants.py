from trip_planner.shared.domain import ResourceNotFoundException, TripId, UserId
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.enum import ParticipantRole
from trip_planner.trip.domain.enum import ValidationErrorKind as Kind
from trip_planner.trip.domain.exception import TripValidationException
from trip_planner.trip.domain.value_object import Actor, Participant
from trip_planner.user.domain.repository import UserRepository

from .update_trip import UpdateTripService


def _to_entry(participant: Participant, role: ParticipantRole | str | None = None) -> dict:
    return {
        "user_id": str(participant.user_id),
        "phone_number": participant.phone_number,
        "display_name": participant.display_name,
        "role": role if role is not None else participant.role.value,
    }


def _find_participant(trip: Trip, user_id: UserId) -> Participant:
    for participant in trip.participants:
        if participant.user_id == user_id:
            return participant
    raise ResourceNotFoundException("participant", str(user_id))


def _reject_owner_change(role: ParticipantRole | str) -> None:
    if role == ParticipantRole.OWNER:
        raise TripValidationException("participants", Kind.OWNER_IMMUTABLE)


class ManageParticipantsService:
    """参加者の追加・削除・ロール変更

    いずれも参加者リストのパッチとして UpdateTripService を経由するため、
    認可（add_participant）と tripIds の更新は旅行の更新と同じ扱いになる。
    オーナーは追加・削除・ロール変更のいずれもできない。
    """

    def __init__(self, update_service: UpdateTripService, user_repository: UserRepository) -> None:
        self._update_service = update_service
        self._user_repository = user_repository

    def add(
        self, trip_id: TripId, actor: Actor, user_id: UserId, role: ParticipantRole | str
    ) -> Trip:
        _reject_owner_change(role)
        user = self._user_repository.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", str(user_id))

        def build_patch(trip: Trip) -> dict:
            if user_id in trip.participant_ids():
                raise TripValidationException("participants", Kind.DUPLICATE_PARTICIPANT)
            new_entry = {
                "user_id": str(user.id),
                "phone_number": user.phone_number,
                "display_name": user.display_name,
                "role": role,
            }
            return {"participants": [_to_entry(p) for p in trip.participants] + [new_entry]}

        return self._update_service.apply(trip_id, actor, build_patch)

    def remove(self, trip_id: TripId, actor: Actor, user_id: UserId) -> Trip:
        def build_patch(trip: Trip) -> dict:
            _reject_owner_change(_find_participant(trip, user_id).role)
            return {
                "participants": [
                    _to_entry(p) for p in trip.participants if p.user_id != user_id
                ]
            }

        return self._update_service.apply(trip_id, actor, build_patch)

    def change_role(
        self, trip_id: TripId, actor: Actor, user_id: UserId, role: ParticipantRole | str
    ) -> Trip:
        _reject_owner_change(role)

        def build_patch(trip: Trip) -> dict:
            _reject_owner_change(_find_participant(trip, user_id).role)
            return {
                "participants": [
                    _to_entry(p, role if p.user_id == user_id else None)
                    for p in trip.participants
                ]
            }

        return self._update_service.apply(trip_id, actor, build_patch)
