from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Repository 基底クラス

    集約を丸ごと読み書きする。集約の一部だけを更新する操作は持たない。
    """

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """IDで集約を検索する（存在しなければ None）"""
        raise NotImplementedError

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """新しい集約を保存する

        Raises:
            DuplicateResourceException: 同じIDの集約が既に存在する
        """
        raise NotImplementedError
