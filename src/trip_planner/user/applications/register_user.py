from typing import Callable

from trip_planner.shared.domain import IsoDateTime, UserId
from trip_planner.user.domain.entity import User
from trip_planner.user.domain.repository import UserRepository


class RegisterUserService:
    """ユーザー登録のユースケース（旅行インデックスは空で作成する）"""

    def __init__(
        self,
        repository: UserRepository,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def register(self, user_id: str, phone_number: str, display_name: str) -> User:
        now = self._clock()
        user = User(
            id=UserId(user_id),
            phone_number=phone_number,
            display_name=display_name.strip(),
            created_at=now,
            updated_at=now,
        )
        self._repository.save(user)
        return user
