from __future__ import annotations

from dataclasses import dataclass, replace
from zoneinfo import ZoneInfo

from trip_planner.shared.domain.value_object import Currency

from .share_token import ShareToken

DEFAULT_TIMEZONE = "UTC"


@dataclass(frozen=True)
class TripSettings:
    """旅行の設定

    share_token は is_public が True の場合のみ保持する。
    """

    currency: Currency
    timezone: str = DEFAULT_TIMEZONE
    is_public: bool = False
    share_token: ShareToken | None = None

    def __post_init__(self) -> None:
        if self.share_token is not None and not self.is_public:
            raise ValueError("Private trips cannot carry a share token")

    @classmethod
    def default(cls) -> TripSettings:
        return cls(currency=Currency.usd())

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def with_share_token(self, token: ShareToken) -> TripSettings:
        return replace(self, share_token=token)

    def to_dict(self) -> dict:
        data: dict = {
            "currency": str(self.currency),
            "timezone": self.timezone,
            "isPublic": self.is_public,
        }
        if self.share_token is not None:
            data["shareToken"] = str(self.share_token)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> TripSettings:
        share_token = data.get("shareToken")
        return cls(
            currency=Currency(data.get("currency", "USD")),
            timezone=data.get("timezone", DEFAULT_TIMEZONE),
            is_public=bool(data.get("isPublic", False)),
            share_token=ShareToken(share_token) if share_token else None,
        )
