from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, TypeVar

from trip_planner.shared.domain.value_object import Currency, Money, UserId
from trip_planner.trip.domain.enum import ActivityType
from trip_planner.trip.domain.enum import ValidationErrorKind as Kind
from trip_planner.trip.domain.exception import TripValidationException
from trip_planner.trip.domain.value_object import Activity, Coordinates, Cost, Location

from .trip_validator import (
    TITLE_MAX_LENGTH,
    parse_optional_datetime,
    validate_description,
)
from .validated import ValidatedActivity, ValidatedDay

T = TypeVar("T")


class ItineraryValidator:
    """Day / Activity ペイロードのバリデーション"""

    def validate_day(self, payload: Mapping[str, Any]) -> ValidatedDay:
        date = parse_optional_datetime("date", payload.get("date"))
        if date is None:
            raise TripValidationException("date", Kind.DATE_REQUIRED)
        return ValidatedDay(date=date, title=_validate_day_title(payload.get("title")))

    def validate_activity(
        self,
        payload: Mapping[str, Any],
        existing: Activity | None = None,
    ) -> ValidatedActivity:
        """アクティビティを検証する

        existing を渡した場合はマージパッチとして扱い、
        payload に含まれないフィールドは既存の値を引き継ぐ。
        """
        base = ValidatedActivity.from_activity(existing) if existing else None

        def pick(key: str, validate: Callable[[object], T]) -> T:
            if key in payload or base is None:
                return validate(payload.get(key))
            return getattr(base, key)

        activity = ValidatedActivity(
            title=pick("title", _validate_activity_title),
            type=pick("type", _validate_activity_type),
            description=pick("description", _optional_text("description")),
            start_time=pick("start_time", lambda v: parse_optional_datetime("start_time", v)),
            end_time=pick("end_time", lambda v: parse_optional_datetime("end_time", v)),
            location=pick("location", _validate_location),
            cost=pick("cost", _validate_cost),
            notes=pick("notes", _optional_text("notes")),
        )

        if (
            activity.start_time is not None
            and activity.end_time is not None
            and activity.end_time.is_before(activity.start_time)
        ):
            raise TripValidationException("end_time", Kind.INVALID_TIME_RANGE)
        return activity


def _validate_day_title(raw: object) -> str | None:
    if raw is None:
        return None
    title = str(raw).strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise TripValidationException("title", Kind.TITLE_TOO_LONG)
    return title or None


def _validate_activity_title(raw: object) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise TripValidationException("title", Kind.TITLE_REQUIRED)
    title = raw.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise TripValidationException("title", Kind.TITLE_TOO_LONG)
    return title


def _validate_activity_type(raw: object) -> ActivityType:
    try:
        return ActivityType(raw)
    except ValueError as e:
        raise TripValidationException("type", Kind.INVALID_ACTIVITY) from e


def _optional_text(field: str) -> Callable[[object], str | None]:
    def validate(raw: object) -> str | None:
        return validate_description(field, raw) or None

    return validate


def _validate_location(raw: object) -> Location | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise TripValidationException("location", Kind.INVALID_ACTIVITY)
    try:
        coordinates = raw.get("coordinates")
        return Location(
            name=str(raw["name"]).strip(),
            address=raw.get("address") or None,
            coordinates=Coordinates(
                lat=Decimal(str(coordinates["lat"])),
                lng=Decimal(str(coordinates["lng"])),
            )
            if coordinates
            else None,
        )
    except (KeyError, TypeError, ValueError, InvalidOperation) as e:
        raise TripValidationException("location", Kind.INVALID_ACTIVITY) from e


def _validate_cost(raw: object) -> Cost | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise TripValidationException("cost", Kind.INVALID_ACTIVITY)
    try:
        currency = Currency(raw.get("currency", "USD"))
    except (TypeError, ValueError) as e:
        raise TripValidationException("cost.currency", Kind.INVALID_CURRENCY) from e
    try:
        price = Money(amount=Decimal(str(raw["amount"])), currency=currency)
        paid_by = UserId(raw["paid_by"]) if raw.get("paid_by") else None
        split_between = tuple(UserId(u) for u in raw.get("split_between") or [])
    except (KeyError, TypeError, ValueError, AttributeError, InvalidOperation) as e:
        raise TripValidationException("cost", Kind.INVALID_ACTIVITY) from e
    return Cost(price=price, paid_by=paid_by, split_between=split_between)
