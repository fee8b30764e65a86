from typing import Callable, TypeVar

from aws_lambda_powertools import Logger

from trip_planner.shared.domain.exception import (
    OptimisticLockException,
    TransactionConflictException,
)

T = TypeVar("T")


def retry_on_conflict(
    operation: Callable[[], T],
    max_attempts: int,
    logger: Logger,
) -> T:
    """楽観ロック競合時に operation 全体（読み込みから書き込みまで）を再実行する

    上限を超えた場合は TransactionConflictException を送出する。
    それ以外の例外は再試行せずにそのまま伝播させる。
    """
    last_error: OptimisticLockException | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            return operation()
        except OptimisticLockException as e:
            logger.warning(
                "Transaction conflict, retrying",
                extra={"attempt": attempt, "max_attempts": max_attempts},
            )
            last_error = e

    raise TransactionConflictException(
        f"Could not commit after {max_attempts} attempts"
    ) from last_error
