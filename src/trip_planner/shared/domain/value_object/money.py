from dataclasses import dataclass
from decimal import Decimal

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """金額（通貨情報を含む）

    Value Object として不変性を保証。
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if not self.amount.is_finite():
            raise ValueError(f"Invalid amount: {self.amount}")
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    @classmethod
    def of(cls, amount: Decimal | int | float | str, currency_code: str) -> "Money":
        """プリミティブ型から Money を生成"""
        return cls(amount=Decimal(str(amount)), currency=Currency(currency_code))
