from typing import Callable

from trip_planner.shared.domain import IsoDateTime, ResourceNotFoundException, UserId
from trip_planner.shared.utils import get_logger
from trip_planner.trip.applications import SyncParticipantProfileService
from trip_planner.user.domain.entity import User
from trip_planner.user.domain.repository import UserRepository

logger = get_logger()


class UpdateUserProfileService:
    """表示名・電話番号の変更

    ユーザードキュメントを更新したあと、参加中の旅行の参加者エントリにも反映する。
    ユーザー側に変更がなくても旅行への反映は行うため、
    途中で失敗した場合は同じリクエストの再送で揃えられる。
    """

    def __init__(
        self,
        repository: UserRepository,
        participant_sync: SyncParticipantProfileService,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._repository = repository
        self._participant_sync = participant_sync
        self._clock = clock

    def update(
        self,
        user_id: UserId,
        display_name: str | None = None,
        phone_number: str | None = None,
    ) -> User:
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", str(user_id))

        if user.update_profile(
            self._clock(),
            display_name=display_name.strip() if display_name is not None else None,
            phone_number=phone_number,
        ):
            self._repository.update_profile(user)
            logger.info("User profile updated", extra={"user_id": str(user_id)})

        self._participant_sync.sync(user)
        return user
