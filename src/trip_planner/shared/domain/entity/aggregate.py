from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """AggregateRoot 基底クラス

    - 配下のエンティティへのアクセスは必ず集約ルートを経由
    - トランザクション境界 = 集約境界
    - version は楽観ロック用（コミットごとに 1 ずつ増える）
    """

    def __init__(self, id: ID, version: int = 1) -> None:
        super().__init__(id)
        self._version = version
        self._stored_version = version

    @property
    def version(self) -> int:
        return self._version

    @property
    def stored_version(self) -> int:
        """読み込み時点の version（条件付き書き込みの期待値）"""
        return self._stored_version

    def _bump_version(self) -> None:
        # 1回の保存で何度変更しても +1 のみ
        self._version = self._stored_version + 1
