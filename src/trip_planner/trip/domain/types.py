"""入力データ構造（プリミティブ型）

Handler 層でリクエストを解析した後、アプリケーション層へ渡す形。
日時は ISO 8601 文字列 / date / datetime のいずれも受け付ける。
"""

from typing import Any, TypedDict


class SettingsInput(TypedDict, total=False):
    currency: str
    timezone: str
    is_public: bool


class CreateTripInput(TypedDict, total=False):
    title: str
    description: str
    start_date: Any
    end_date: Any
    cover_image_url: str
    settings: SettingsInput


class ParticipantInput(TypedDict, total=False):
    user_id: str
    phone_number: str
    display_name: str
    role: str


class UpdateTripInput(TypedDict, total=False):
    """マージパッチ（指定したフィールドのみ変更される）"""

    title: str
    description: str
    start_date: Any
    end_date: Any
    cover_image_url: str | None
    settings: SettingsInput
    participants: list[ParticipantInput]
    created_by: str


class DayInput(TypedDict, total=False):
    date: Any
    title: str | None


class LocationInput(TypedDict, total=False):
    name: str
    address: str
    coordinates: dict


class CostInput(TypedDict, total=False):
    amount: Any
    currency: str
    paid_by: str
    split_between: list[str]


class ActivityInput(TypedDict, total=False):
    title: str
    type: str
    description: str | None
    start_time: Any
    end_time: Any
    location: LocationInput | None
    cost: CostInput | None
    notes: str | None
