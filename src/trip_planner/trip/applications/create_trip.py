from typing import Callable

from trip_planner.shared.config import get_config
from trip_planner.shared.domain import IsoDateTime, TripId
from trip_planner.shared.utils import get_logger, retry_on_conflict
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.factory import TripFactory
from trip_planner.trip.domain.repository import TripRepository
from trip_planner.trip.domain.service import ShareTokenIssuer
from trip_planner.trip.domain.types import CreateTripInput
from trip_planner.trip.domain.validation import TripValidator
from trip_planner.trip.domain.value_object import Actor

from .trip_access import commit_with_share_token

logger = get_logger()


class CreateTripService:
    """旅行作成のユースケース

    作成者は常にオーナーになるため、ロールによる判定は行わない。
    旅行・共有トークンの予約・作成者の tripIds は1つのトランザクションで書き込む。
    """

    def __init__(
        self,
        repository: TripRepository,
        factory: TripFactory,
        validator: TripValidator | None = None,
        issuer: ShareTokenIssuer | None = None,
        max_attempts: int | None = None,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
        id_generator: Callable[[], TripId] = TripId.generate,
    ) -> None:
        config = get_config()
        self._repository = repository
        self._factory = factory
        self._validator = validator or TripValidator()
        self._issuer = issuer or ShareTokenIssuer(config.share_token_max_attempts)
        self._max_attempts = max_attempts or config.transaction_max_attempts
        self._clock = clock
        self._id_generator = id_generator

    def create(self, actor: Actor, payload: CreateTripInput) -> Trip:
        validated = self._validator.validate_create(payload)
        trip_id = self._id_generator()
        logger.info(
            "Creating trip",
            extra={"trip_id": str(trip_id), "is_public": validated.settings.is_public},
        )

        def attempt() -> Trip:
            trip = self._factory.create(trip_id, validated, actor, self._clock())
            commit_with_share_token(
                trip,
                self._issuer,
                self._repository,
                lambda: self._repository.save(trip),
                logger,
            )
            return trip

        trip = retry_on_conflict(attempt, self._max_attempts, logger)
        logger.info("Trip created", extra={"trip_id": str(trip.id)})
        return trip
