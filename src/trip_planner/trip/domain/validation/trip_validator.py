from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import tzinfo
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from trip_planner.shared.domain.value_object import Currency, IsoDateTime, UserId
from trip_planner.trip.domain.enum import ParticipantRole
from trip_planner.trip.domain.enum import ValidationErrorKind as Kind
from trip_planner.trip.domain.exception import TripValidationException
from trip_planner.trip.domain.value_object import TripPeriod, TripSettings

from .validated import ParticipantEntry, ValidatedPatch, ValidatedTrip

if TYPE_CHECKING:
    from trip_planner.trip.domain.entity import Trip

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 5000

PATCHABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "start_date",
        "end_date",
        "cover_image_url",
        "settings",
        "participants",
        "created_by",
    }
)


class TripValidator:
    """旅行ペイロードのバリデーション

    純粋な検査のみを行い、ストアには一切触れない。
    成功時は正規化済みの値（trim 済み文字列、デフォルト補完済みの設定）を返し、
    失敗時は TripValidationException（フィールド名 + 種類）を送出する。

    HTML やクォートを含む文字列は拒否しない。無害化は描画・保存側の責務で、
    ここでは他の文字列と同じ長さ・形式のルールだけを適用する。
    """

    def validate_create(self, payload: Mapping[str, Any]) -> ValidatedTrip:
        title = validate_title(payload.get("title"))
        description = validate_description("description", payload.get("description"))
        settings = _validate_settings(payload.get("settings") or {}, TripSettings.default())
        period = _validate_period(
            TripPeriod(
                start=_parse_date("start_date", payload.get("start_date"), settings.timezone),
                end=_parse_date("end_date", payload.get("end_date"), settings.timezone),
            ),
            settings.timezone,
            field="end_date",
        )
        return ValidatedTrip(
            title=title,
            description=description,
            period=period,
            settings=settings,
            cover_image_url=_validate_cover_image_url(payload.get("cover_image_url")),
        )

    def validate_update(self, existing: Trip, patch: Mapping[str, Any]) -> ValidatedPatch:
        unknown = sorted(set(patch) - PATCHABLE_FIELDS)
        if unknown:
            raise TripValidationException(unknown[0], Kind.FIELD_NOT_PATCHABLE)

        # オーナーと参加者の不変条件はロールに関係なく拒否する
        if "created_by" in patch and str(patch["created_by"]) != str(existing.created_by):
            raise TripValidationException("created_by", Kind.OWNER_IMMUTABLE)

        changes: dict[str, Any] = {}
        if "participants" in patch:
            changes["participants"] = _validate_participants(existing, patch["participants"])
        if "title" in patch:
            changes["title"] = validate_title(patch["title"])
        if "description" in patch:
            changes["description"] = validate_description("description", patch["description"])
        if "cover_image_url" in patch:
            changes["cover_image_url"] = _validate_cover_image_url(patch["cover_image_url"])

        settings = existing.settings
        if "settings" in patch:
            settings = _validate_settings(patch["settings"] or {}, existing.settings)
            changes["settings"] = settings

        dates_patched = "start_date" in patch or "end_date" in patch
        if dates_patched or settings.timezone != existing.settings.timezone:
            period = TripPeriod(
                start=_parse_date("start_date", patch["start_date"], settings.timezone)
                if "start_date" in patch
                else existing.period.start,
                end=_parse_date("end_date", patch["end_date"], settings.timezone)
                if "end_date" in patch
                else existing.period.end,
            )
            if "end_date" in patch:
                field = "end_date"
            elif "start_date" in patch:
                field = "start_date"
            else:
                field = "settings.timezone"
            changes["period"] = _validate_period(period, settings.timezone, field=field)

        return ValidatedPatch(changes=changes)


def validate_title(raw: object, field: str = "title") -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise TripValidationException(field, Kind.TITLE_REQUIRED)
    title = raw.strip()
    if len(title) < TITLE_MIN_LENGTH:
        raise TripValidationException(field, Kind.TITLE_TOO_SHORT)
    if len(title) > TITLE_MAX_LENGTH:
        raise TripValidationException(field, Kind.TITLE_TOO_LONG)
    return title


def validate_description(field: str, raw: object) -> str:
    if raw is None:
        return ""
    description = str(raw).strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise TripValidationException(field, Kind.DESCRIPTION_TOO_LONG)
    return description


def parse_optional_datetime(
    field: str, raw: object, tz: tzinfo | None = None
) -> IsoDateTime | None:
    if raw is None or raw == "":
        return None
    try:
        return IsoDateTime.parse(raw, tz)
    except ValueError as e:
        raise TripValidationException(field, Kind.INVALID_DATE, str(e)) from e


def _parse_date(field: str, raw: object, timezone: str) -> IsoDateTime:
    """日付のみ・オフセットなしの値は旅行のタイムゾーンの時刻として解釈する"""
    value = parse_optional_datetime(field, raw, ZoneInfo(timezone))
    if value is None:
        raise TripValidationException(field, Kind.DATE_REQUIRED)
    return value


def _validate_period(period: TripPeriod, timezone: str, field: str) -> TripPeriod:
    if period.is_reversed():
        raise TripValidationException(field, Kind.INVALID_DATE_RANGE)
    if not period.is_within_bounds(timezone):
        raise TripValidationException(
            field,
            Kind.DURATION_OUT_OF_BOUNDS,
            f"Trip duration must be 1-365 days, got {period.days(timezone)}",
        )
    return period


def _validate_settings(raw: Mapping[str, Any], base: TripSettings) -> TripSettings:
    """設定を既存値（作成時はデフォルト値）にマージする"""
    currency = base.currency
    if "currency" in raw:
        try:
            currency = Currency(raw["currency"])
        except (TypeError, ValueError) as e:
            raise TripValidationException("settings.currency", Kind.INVALID_CURRENCY) from e

    timezone = base.timezone
    if "timezone" in raw:
        timezone = raw["timezone"]
        try:
            ZoneInfo(timezone)
        except (TypeError, ValueError, ZoneInfoNotFoundError) as e:
            raise TripValidationException("settings.timezone", Kind.INVALID_TIMEZONE) from e

    is_public = base.is_public
    if "is_public" in raw:
        # "false" などの文字列を真偽値として解釈しない
        if not isinstance(raw["is_public"], bool):
            raise TripValidationException("settings.is_public", Kind.INVALID_VISIBILITY)
        is_public = raw["is_public"]

    # 共有トークンは入力からは受け付けない（公開のままなら既存のものを引き継ぐ）
    return TripSettings(
        currency=currency,
        timezone=timezone,
        is_public=is_public,
        share_token=base.share_token if is_public else None,
    )


def _validate_cover_image_url(raw: object) -> str | None:
    if raw is None:
        return None
    url = str(raw).strip()
    return url or None


def _validate_participants(existing: Trip, raw: object) -> tuple[ParticipantEntry, ...]:
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        raise TripValidationException("participants", Kind.INVALID_PARTICIPANT)
    if len(raw) == 0:
        raise TripValidationException("participants", Kind.PARTICIPANTS_EMPTY)

    current = {p.user_id: p for p in existing.participants}
    entries: list[ParticipantEntry] = []
    seen: set[UserId] = set()
    for item in raw:
        entry = _to_participant_entry(item, current)
        if entry.user_id in seen:
            raise TripValidationException("participants", Kind.DUPLICATE_PARTICIPANT)
        seen.add(entry.user_id)
        entries.append(entry)

    owners = [e for e in entries if e.role == ParticipantRole.OWNER]
    if len(owners) != 1 or owners[0].user_id != existing.created_by:
        raise TripValidationException("participants", Kind.OWNER_IMMUTABLE)
    return tuple(entries)


def _to_participant_entry(item: object, current: Mapping) -> ParticipantEntry:
    if not isinstance(item, Mapping):
        raise TripValidationException("participants", Kind.INVALID_PARTICIPANT)
    try:
        user_id = UserId(item["user_id"])
        role = ParticipantRole(item["role"])
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise TripValidationException("participants", Kind.INVALID_PARTICIPANT) from e

    known = current.get(user_id)
    return ParticipantEntry(
        user_id=user_id,
        phone_number=str(item.get("phone_number") or (known.phone_number if known else "")),
        display_name=str(item.get("display_name") or (known.display_name if known else "")),
        role=role,
        joined_at=known.joined_at if known else None,
    )
