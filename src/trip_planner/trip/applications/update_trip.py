from typing import Callable

from trip_planner.shared.config import get_config
from trip_planner.shared.domain import IsoDateTime, TripId
from trip_planner.shared.utils import get_logger, retry_on_conflict
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.enum import TripAction
from trip_planner.trip.domain.policy import actions_for_fields
from trip_planner.trip.domain.repository import TripChangeSet, TripRepository
from trip_planner.trip.domain.service import ShareTokenIssuer
from trip_planner.trip.domain.types import UpdateTripInput
from trip_planner.trip.domain.validation import TripValidator
from trip_planner.trip.domain.value_object import Actor

from .trip_access import authorize, commit_with_share_token, load_trip, role_of

logger = get_logger()

PatchBuilder = Callable[[Trip], UpdateTripInput]


class UpdateTripService:
    """旅行更新のユースケース（マージパッチ）

    処理順: 読み込み → ロール解決 → 検証 → 認可 → トークン採番 → トランザクション書き込み

    - 同じパッチの再適用は何も書き込まない
    - 参加者の追加・削除に伴う tripIds の更新は旅行と同じトランザクションで行う
    - 楽観ロックの競合時は読み込みからやり直す
    """

    def __init__(
        self,
        repository: TripRepository,
        validator: TripValidator | None = None,
        issuer: ShareTokenIssuer | None = None,
        max_attempts: int | None = None,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        config = get_config()
        self._repository = repository
        self._validator = validator or TripValidator()
        self._issuer = issuer or ShareTokenIssuer(config.share_token_max_attempts)
        self._max_attempts = max_attempts or config.transaction_max_attempts
        self._clock = clock

    def update(self, trip_id: TripId, patch: UpdateTripInput, actor: Actor) -> Trip:
        return self.apply(trip_id, actor, lambda _trip: patch)

    def apply(self, trip_id: TripId, actor: Actor, build_patch: PatchBuilder) -> Trip:
        """最新の旅行からパッチを組み立てて適用する

        build_patch は再試行のたびに読み込み直した旅行で呼ばれる。
        """
        return retry_on_conflict(
            lambda: self._apply_once(trip_id, actor, build_patch),
            self._max_attempts,
            logger,
        )

    def _apply_once(self, trip_id: TripId, actor: Actor, build_patch: PatchBuilder) -> Trip:
        trip = load_trip(self._repository, trip_id)
        role = role_of(trip, actor)
        validated = self._validator.validate_update(trip, build_patch(trip))
        authorize(role, actions_for_fields(validated.fields) or [TripAction.VIEW_TRIP])

        previous_user_ids = trip.participant_ids()
        previous_token = trip.share_token
        if not trip.apply_patch(validated, self._clock()):
            logger.info("Patch already applied, nothing to write", extra={"trip_id": str(trip_id)})
            return trip

        commit_with_share_token(
            trip,
            self._issuer,
            self._repository,
            lambda: self._repository.update(
                trip, TripChangeSet.between(previous_user_ids, previous_token, trip)
            ),
            logger,
        )
        logger.info(
            "Trip updated",
            extra={"trip_id": str(trip_id), "fields": sorted(validated.fields), "version": trip.version},
        )
        return trip
