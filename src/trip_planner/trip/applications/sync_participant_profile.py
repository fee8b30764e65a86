from typing import Callable

from trip_planner.shared.config import get_config
from trip_planner.shared.domain import IsoDateTime, TripId
from trip_planner.shared.utils import get_logger, retry_on_conflict
from trip_planner.trip.domain.repository import TripChangeSet, TripRepository
from trip_planner.user.domain.entity import User

logger = get_logger()


class SyncParticipantProfileService:
    """ユーザーのプロフィール変更を参加中の旅行へ反映する

    旅行ドキュメントは参加者の表示名・電話番号を非正規化して持つため、
    user.trip_ids の各旅行で該当する参加者エントリを書き換える。
    書き込みは旅行ごとに version 条件付きで行い、競合時は読み込みからやり直す。
    """

    def __init__(
        self,
        repository: TripRepository,
        max_attempts: int | None = None,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._repository = repository
        self._max_attempts = max_attempts or get_config().transaction_max_attempts
        self._clock = clock

    def sync(self, user: User) -> list[TripId]:
        """書き換えた旅行の ID を返す"""
        updated = []
        for trip_id in sorted(user.trip_ids, key=str):
            if retry_on_conflict(
                lambda: self._sync_once(trip_id, user), self._max_attempts, logger
            ):
                updated.append(trip_id)
        logger.info(
            "Participant profile synced",
            extra={"user_id": str(user.id), "trip_count": len(updated)},
        )
        return updated

    def _sync_once(self, trip_id: TripId, user: User) -> bool:
        trip = self._repository.find_by_id(trip_id)
        if trip is None:
            # インデックスの更新と行き違いで削除済み
            logger.warning("Indexed trip not found", extra={"trip_id": str(trip_id)})
            return False
        if not trip.update_participant_profile(
            user.id, user.display_name, user.phone_number, self._clock()
        ):
            return False
        self._repository.update(trip, TripChangeSet())
        return True
