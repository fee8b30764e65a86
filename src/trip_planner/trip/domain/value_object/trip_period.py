from dataclasses import dataclass
from zoneinfo import ZoneInfo

from trip_planner.shared.domain.value_object import IsoDateTime

MIN_TRIP_DAYS = 1
MAX_TRIP_DAYS = 365


@dataclass(frozen=True)
class TripPeriod:
    """旅行期間（開始日時 + 終了日時）

    日数は旅行のタイムゾーンでの暦日で数え、開始日を含む。
    同日の旅行は 1 日。
    """

    start: IsoDateTime
    end: IsoDateTime

    def is_reversed(self) -> bool:
        """終了が開始より前かどうか"""
        return self.end.is_before(self.start)

    def days(self, timezone: str = "UTC") -> int:
        zone = ZoneInfo(timezone)
        start_date = self.start.value.astimezone(zone).date()
        end_date = self.end.value.astimezone(zone).date()
        return (end_date - start_date).days + 1

    def is_within_bounds(self, timezone: str = "UTC") -> bool:
        return MIN_TRIP_DAYS <= self.days(timezone) <= MAX_TRIP_DAYS
