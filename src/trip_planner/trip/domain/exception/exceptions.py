from trip_planner.shared.domain.exception import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateResourceException,
)
from trip_planner.trip.domain.enum import ParticipantRole, TripAction, ValidationErrorKind


class TripValidationException(BusinessRuleViolationException):
    """入力のバリデーションエラー（どのフィールドが、どの種類の違反か）"""

    def __init__(self, field: str, kind: ValidationErrorKind, message: str = "") -> None:
        self.field = field
        self.kind = kind
        super().__init__(message or f"{kind.value}: {field}")


class PermissionDeniedException(DomainException):
    """ロールに対して操作が許可されていない場合

    旅行の参加者でない場合、role は None になる。
    """

    def __init__(self, role: ParticipantRole | None, action: TripAction) -> None:
        self.role = role
        self.action = action
        role_name = role.value if role is not None else "non-participant"
        super().__init__(f"Permission denied: {role_name} cannot {action.value}")


class UnknownRoleException(DomainException):
    """定義されていないロール（プログラミングエラー）"""

    pass


class UnknownActionException(DomainException):
    """定義されていない操作（プログラミングエラー）"""

    pass


class ShareTokenCollisionException(DuplicateResourceException):
    """共有トークンの予約がコミット時に衝突した場合"""

    pass


class TokenAllocationExhaustedException(DomainException):
    """共有トークンの採番が再試行上限に達した場合"""

    pass
