class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    def __init__(self, entity_kind: str, id: str) -> None:
        self.entity_kind = entity_kind
        self.id = id
        super().__init__(f"{entity_kind.capitalize()} not found: {id}")


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（version が期待値と異なる場合）

    アプリケーション層で再試行される。
    """

    pass


class TransactionConflictException(DomainException):
    """トランザクションの競合が再試行上限を超えた場合"""

    pass
