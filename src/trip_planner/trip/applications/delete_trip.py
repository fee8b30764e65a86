from trip_planner.shared.config import get_config
from trip_planner.shared.domain import TripId
from trip_planner.shared.utils import get_logger, retry_on_conflict
from trip_planner.trip.domain.enum import TripAction
from trip_planner.trip.domain.repository import TripRepository
from trip_planner.trip.domain.value_object import Actor

from .trip_access import authorize, load_trip, role_of

logger = get_logger()


class DeleteTripService:
    """旅行削除のユースケース（オーナーのみ）

    旅行・共有トークンの予約・全参加者の tripIds を1つのトランザクションで更新する。
    """

    def __init__(self, repository: TripRepository, max_attempts: int | None = None) -> None:
        self._repository = repository
        self._max_attempts = max_attempts or get_config().transaction_max_attempts

    def delete(self, trip_id: TripId, actor: Actor) -> None:
        def attempt() -> None:
            trip = load_trip(self._repository, trip_id)
            authorize(role_of(trip, actor), [TripAction.DELETE_TRIP])
            self._repository.delete(trip)

        retry_on_conflict(attempt, self._max_attempts, logger)
        logger.info("Trip deleted", extra={"trip_id": str(trip_id)})
