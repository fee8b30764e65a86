from __future__ import annotations

from dataclasses import dataclass

from trip_planner.shared.domain.value_object import UserId
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.value_object import ShareToken


@dataclass(frozen=True)
class TripChangeSet:
    """旅行の更新に伴って同じトランザクションで書き込む派生データ

    - ユーザーごとの旅行インデックス（tripIds）への追加・削除
    - 共有トークンの予約・解放
    """

    added_user_ids: frozenset[UserId] = frozenset()
    removed_user_ids: frozenset[UserId] = frozenset()
    reserved_token: ShareToken | None = None
    released_token: ShareToken | None = None

    @classmethod
    def between(
        cls,
        previous_user_ids: frozenset[UserId],
        previous_token: ShareToken | None,
        trip: Trip,
    ) -> TripChangeSet:
        current_token = trip.share_token
        token_changed = previous_token != current_token
        return cls(
            added_user_ids=trip.participant_ids() - previous_user_ids,
            removed_user_ids=previous_user_ids - trip.participant_ids(),
            reserved_token=current_token if token_changed else None,
            released_token=previous_token if token_changed else None,
        )
