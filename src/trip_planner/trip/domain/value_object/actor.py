from dataclasses import dataclass

from trip_planner.shared.domain.value_object import UserId


@dataclass(frozen=True)
class Actor:
    """操作を行う認証済みユーザー

    上流（認証基盤）で検証済みのため、この層では信頼する。
    """

    user_id: UserId
    phone_number: str
    display_name: str

    @classmethod
    def of(cls, user_id: str, phone_number: str, display_name: str) -> "Actor":
        return cls(
            user_id=UserId(user_id),
            phone_number=phone_number,
            display_name=display_name,
        )
