from typing import Callable

from trip_planner.trip.domain.exception import TokenAllocationExhaustedException
from trip_planner.trip.domain.value_object import ShareToken

DEFAULT_MAX_ATTEMPTS = 5


class ShareTokenIssuer:
    """公開旅行の共有トークンを発行する

    is_taken による事前チェックは衝突の回避のためで、一意性の保証は
    旅行の作成と同じトランザクション内での予約（条件付き書き込み）が担う。
    状態を持たないため、プロセス全体で共有してよい。
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        generate: Callable[[], ShareToken] = ShareToken.generate,
    ) -> None:
        self._max_attempts = max_attempts
        self._generate = generate

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def issue(self, is_taken: Callable[[ShareToken], bool]) -> ShareToken:
        """未使用のトークンを返す（上限回数まで再生成する）"""
        for _ in range(self._max_attempts):
            token = self._generate()
            if not is_taken(token):
                return token
        raise TokenAllocationExhaustedException(
            f"Could not allocate a unique share token after {self._max_attempts} attempts"
        )
