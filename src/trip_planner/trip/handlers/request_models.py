from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase の JSON を snake_case の属性で受け取る基底モデル"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_input(self) -> dict:
        """指定されたフィールドだけを snake_case の辞書にする（マージパッチ用）"""
        return self.model_dump(exclude_unset=True)


class SettingsRequest(CamelModel):
    currency: str | None = Field(default=None, description="通貨コード（ISO 4217）")
    timezone: str | None = Field(default=None, description="IANA タイムゾーン名")
    is_public: bool | None = None


class CreateTripRequest(CamelModel):
    """旅行作成リクエスト

    値の妥当性（長さ・日付範囲など）はドメインのバリデーションで判定する。
    """

    title: str | None = None
    description: str | None = None
    start_date: Any = Field(default=None, examples=["2025-05-01"])
    end_date: Any = Field(default=None, examples=["2025-05-03"])
    cover_image_url: str | None = None
    settings: SettingsRequest | None = None


class ParticipantRequest(CamelModel):
    user_id: str
    role: str
    phone_number: str | None = None
    display_name: str | None = None


class UpdateTripRequest(CamelModel):
    """旅行更新リクエスト（マージパッチ）

    未定義のフィールドも受け取り、変更不可フィールドとしてドメイン側で拒否する。
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    title: str | None = None
    description: str | None = None
    start_date: Any = None
    end_date: Any = None
    cover_image_url: str | None = None
    settings: SettingsRequest | None = None
    participants: list[ParticipantRequest] | None = None
    created_by: str | None = None


class AddParticipantRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    role: str = Field(..., examples=["organizer", "participant", "viewer"])


class ChangeRoleRequest(CamelModel):
    role: str


class DayRequest(CamelModel):
    date: Any = None
    title: str | None = None


class CoordinatesRequest(CamelModel):
    lat: Any
    lng: Any


class LocationRequest(CamelModel):
    name: str
    address: str | None = None
    coordinates: CoordinatesRequest | None = None


class CostRequest(CamelModel):
    amount: Any
    currency: str | None = None
    paid_by: str | None = None
    split_between: list[str] | None = None


class ActivityRequest(CamelModel):
    title: str | None = None
    type: str | None = None
    description: str | None = None
    start_time: Any = None
    end_time: Any = None
    location: LocationRequest | None = None
    cost: CostRequest | None = None
    notes: str | None = None


class RegisterUserRequest(CamelModel):
    display_name: str = Field(..., min_length=1, max_length=255)


class UpdateProfileRequest(CamelModel):
    """プロフィール更新リクエスト（指定された項目だけを変更する）"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    display_name: str | None = Field(default=None, min_length=1, max_length=255)
    phone_number: str | None = Field(default=None, min_length=1, max_length=32)

    @model_validator(mode="after")
    def require_any_field(self) -> "UpdateProfileRequest":
        if self.display_name is None and self.phone_number is None:
            raise ValueError("displayName or phoneNumber is required")
        return self
