from enum import Enum


class ValidationErrorKind(str, Enum):
    """バリデーション失敗の種類

    呼び出し側がユーザー向けメッセージに変換できるよう、
    汎用メッセージではなく種類で失敗を表す。
    """

    TITLE_REQUIRED = "TitleRequired"
    TITLE_TOO_SHORT = "TitleTooShort"
    TITLE_TOO_LONG = "TitleTooLong"
    DESCRIPTION_TOO_LONG = "DescriptionTooLong"
    DATE_REQUIRED = "DateRequired"
    INVALID_DATE = "InvalidDate"
    INVALID_DATE_RANGE = "InvalidDateRange"
    DURATION_OUT_OF_BOUNDS = "DurationOutOfBounds"
    OWNER_IMMUTABLE = "OwnerImmutable"
    PARTICIPANTS_EMPTY = "ParticipantsEmpty"
    INVALID_PARTICIPANT = "InvalidParticipant"
    DUPLICATE_PARTICIPANT = "DuplicateParticipant"
    INVALID_CURRENCY = "InvalidCurrency"
    INVALID_TIMEZONE = "InvalidTimezone"
    INVALID_VISIBILITY = "InvalidVisibility"
    FIELD_NOT_PATCHABLE = "FieldNotPatchable"
    INVALID_ACTIVITY = "InvalidActivity"
    INVALID_TIME_RANGE = "InvalidTimeRange"
