from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo


@dataclass(frozen=True)
class IsoDateTime:
    """日時(ISO 8601形式)

    常にタイムゾーン付きの datetime を保持する。
    タイムゾーンなしの入力は、生成時に tz の指定がなければ UTC とみなす。
    """

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=timezone.utc))

    @classmethod
    def from_string(cls, s: str, tz: tzinfo | None = None) -> IsoDateTime:
        """ISO 8601 形式の文字列から生成（日付のみの場合は 00:00 とする）

        オフセットを持たない値は tz のローカル時刻として解釈する。
        """
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid ISO 8601 datetime: {s}") from e
        if dt.tzinfo is None and tz is not None:
            dt = dt.replace(tzinfo=tz)
        return cls(value=dt)

    @classmethod
    def parse(cls, raw: object, tz: tzinfo | None = None) -> IsoDateTime:
        """str / date / datetime のいずれからでも生成する"""
        if isinstance(raw, IsoDateTime):
            return raw
        if isinstance(raw, datetime):
            if raw.tzinfo is None and tz is not None:
                raw = raw.replace(tzinfo=tz)
            return cls(value=raw)
        if isinstance(raw, date):
            return cls(value=datetime.combine(raw, time.min, tzinfo=tz))
        if isinstance(raw, str):
            return cls.from_string(raw.strip(), tz)
        raise ValueError(f"Invalid ISO 8601 datetime: {raw!r}")

    @classmethod
    def now(cls) -> IsoDateTime:
        return cls(value=datetime.now(timezone.utc))

    def __str__(self) -> str:
        return self.value.isoformat()

    def is_before(self, other: IsoDateTime) -> bool:
        """他の日時より前かどうか"""
        return self.value < other.value

    def is_after(self, other: IsoDateTime) -> bool:
        """他の日時より後かどうか"""
        return self.value > other.value
