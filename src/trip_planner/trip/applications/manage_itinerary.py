import uuid
from dataclasses import replace
from typing import Callable, TypeVar

from trip_planner.shared.config import get_config
from trip_planner.shared.domain import IsoDateTime, TripId
from trip_planner.shared.utils import get_logger, retry_on_conflict
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.enum import TripAction
from trip_planner.trip.domain.repository import TripChangeSet, TripRepository
from trip_planner.trip.domain.types import ActivityInput, DayInput
from trip_planner.trip.domain.validation import ItineraryValidator
from trip_planner.trip.domain.value_object import Activity, Actor, Day

from .trip_access import authorize, load_trip, role_of

logger = get_logger()

T = TypeVar("T")


def _new_id() -> str:
    return uuid.uuid4().hex


class ManageItineraryService:
    """Day / Activity の追加・変更・削除

    旅行ドキュメント内の入れ子データのため、旅行全体を version 条件付きで書き込む。
    必要な操作は update_title で、対象の Day / Activity を探す前に判定する。
    """

    def __init__(
        self,
        repository: TripRepository,
        validator: ItineraryValidator | None = None,
        max_attempts: int | None = None,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
        id_generator: Callable[[], str] = _new_id,
    ) -> None:
        self._repository = repository
        self._validator = validator or ItineraryValidator()
        self._max_attempts = max_attempts or get_config().transaction_max_attempts
        self._clock = clock
        self._id_generator = id_generator

    def add_day(self, trip_id: TripId, actor: Actor, payload: DayInput) -> Day:
        def mutate(trip: Trip, now: IsoDateTime) -> Day:
            validated = self._validator.validate_day(payload)
            day = Day(day_id=self._id_generator(), date=validated.date, title=validated.title)
            trip.add_day(day, now)
            return day

        return self._mutate(trip_id, actor, mutate)

    def remove_day(self, trip_id: TripId, actor: Actor, day_id: str) -> None:
        self._mutate(trip_id, actor, lambda trip, now: trip.remove_day(day_id, now))

    def add_activity(
        self, trip_id: TripId, actor: Actor, day_id: str, payload: ActivityInput
    ) -> Activity:
        def mutate(trip: Trip, now: IsoDateTime) -> Activity:
            validated = self._validator.validate_activity(payload)
            activity = Activity(
                activity_id=self._id_generator(),
                title=validated.title,
                type=validated.type,
                description=validated.description,
                start_time=validated.start_time,
                end_time=validated.end_time,
                location=validated.location,
                cost=validated.cost,
                notes=validated.notes,
                created_by=actor.user_id,
                created_at=now,
                updated_by=actor.user_id,
                updated_at=now,
            )
            trip.add_activity(day_id, activity, now)
            return activity

        return self._mutate(trip_id, actor, mutate)

    def update_activity(
        self,
        trip_id: TripId,
        actor: Actor,
        day_id: str,
        activity_id: str,
        payload: ActivityInput,
    ) -> Activity:
        def mutate(trip: Trip, now: IsoDateTime) -> Activity:
            existing = trip.find_activity(day_id, activity_id)
            validated = self._validator.validate_activity(payload, existing)
            activity = replace(
                existing,
                title=validated.title,
                type=validated.type,
                description=validated.description,
                start_time=validated.start_time,
                end_time=validated.end_time,
                location=validated.location,
                cost=validated.cost,
                notes=validated.notes,
                updated_by=actor.user_id,
                updated_at=now,
            )
            trip.replace_activity(day_id, activity, now)
            return activity

        return self._mutate(trip_id, actor, mutate)

    def remove_activity(
        self, trip_id: TripId, actor: Actor, day_id: str, activity_id: str
    ) -> None:
        self._mutate(
            trip_id, actor, lambda trip, now: trip.remove_activity(day_id, activity_id, now)
        )

    def _mutate(
        self, trip_id: TripId, actor: Actor, mutate: Callable[[Trip, IsoDateTime], T]
    ) -> T:
        def attempt() -> T:
            trip = load_trip(self._repository, trip_id)
            authorize(role_of(trip, actor), [TripAction.UPDATE_TITLE])
            result = mutate(trip, self._clock())
            self._repository.update(trip, TripChangeSet())
            return result

        result = retry_on_conflict(attempt, self._max_attempts, logger)
        logger.info("Itinerary updated", extra={"trip_id": str(trip_id)})
        return result
