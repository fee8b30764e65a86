from abc import abstractmethod

from trip_planner.shared.domain import Repository, UserId
from trip_planner.user.domain.entity import User


class UserRepository(Repository[User, UserId]):
    """ユーザーリポジトリのインターフェース"""

    @abstractmethod
    def find_by_id(self, user_id: UserId) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, user: User) -> None:
        """新規ユーザーを保存する（既に存在する場合は DuplicateResourceException）"""
        raise NotImplementedError

    @abstractmethod
    def update_profile(self, user: User) -> None:
        """表示名・電話番号・更新日時だけを書き込む

        tripIds は旅行側のトランザクションが更新するため、ここでは触れない。
        ユーザーが存在しない場合は ResourceNotFoundException。
        """
        raise NotImplementedError
