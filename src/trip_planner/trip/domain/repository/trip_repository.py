from abc import abstractmethod

from trip_planner.shared.domain import Repository, TripId
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.value_object import ShareToken

from .trip_change_set import TripChangeSet


class TripRepository(Repository[Trip, TripId]):
    """旅行リポジトリのインターフェース

    旅行ドキュメントと、派生データ（ユーザーの旅行インデックス・
    共有トークンの予約）は常に1つのトランザクションで書き込む。
    """

    @abstractmethod
    def find_by_id(self, trip_id: TripId) -> Trip | None:
        """旅行IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_ids(self, trip_ids: frozenset[TripId]) -> list[Trip]:
        """複数の旅行IDで検索する（存在しないIDは無視する）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_share_token(self, token: ShareToken) -> Trip | None:
        """共有トークンで検索する"""
        raise NotImplementedError

    @abstractmethod
    def share_token_exists(self, token: ShareToken) -> bool:
        """共有トークンが予約済みかどうか"""
        raise NotImplementedError

    @abstractmethod
    def save(self, trip: Trip) -> None:
        """新規の旅行を保存する

        旅行ドキュメント・共有トークンの予約・作成者の tripIds への追加を
        1つのトランザクションで書き込む。

        Raises:
            ShareTokenCollisionException: 共有トークンが既に予約されている
            ResourceNotFoundException: 作成者のユーザーが存在しない
            OptimisticLockException: トランザクションが競合した
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, trip: Trip, change_set: TripChangeSet) -> None:
        """変更済みの旅行を保存する

        trip.version は変更後の値。保存済みの version（trip.stored_version）と
        一致する場合のみ書き込む。

        Raises:
            OptimisticLockException: version が一致しない / トランザクションが競合した
            ShareTokenCollisionException: 新しい共有トークンが既に予約されている
            ResourceNotFoundException: 追加対象のユーザーが存在しない（削除対象で存在しないユーザーは tripIds の更新を省く）
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, trip: Trip) -> None:
        """旅行を削除し、全参加者の tripIds から旅行IDを取り除く

        ユーザードキュメントが存在しない参加者は tripIds の更新を省く。
        """
        raise NotImplementedError
