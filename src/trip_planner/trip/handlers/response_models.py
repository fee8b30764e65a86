from typing import Any

from pydantic import BaseModel

from trip_planner.trip.domain.entity import Trip


class TripSummaryData(BaseModel):
    """旅行一覧の1件分"""

    tripId: str
    title: str
    startDate: str
    endDate: str
    coverImageUrl: str | None = None
    participantCount: int
    isPublic: bool


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: Any


class ErrorResponse(BaseModel):
    """エラーレスポンスモデル"""

    status: str = "error"
    error_code: str
    message: str
    details: dict | None = None


def to_response(trip: Trip) -> dict:
    """Trip エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(data=trip.to_dict()).model_dump()


def to_summary(trip: Trip) -> TripSummaryData:
    return TripSummaryData(
        tripId=str(trip.id),
        title=trip.title,
        startDate=str(trip.period.start),
        endDate=str(trip.period.end),
        coverImageUrl=trip.cover_image_url,
        participantCount=len(trip.participants),
        isPublic=trip.settings.is_public,
    )


def to_list_response(trips: list[Trip]) -> dict:
    summaries = [to_summary(trip).model_dump(exclude_none=True) for trip in trips]
    return SuccessResponse(data={"trips": summaries, "count": len(summaries)}).model_dump()


_PRIVATE_ACTIVITY_KEYS = ("createdBy", "updatedBy")
_PRIVATE_COST_KEYS = ("paidBy", "splitBetween")


def _public_activity(activity: dict) -> dict:
    data = {k: v for k, v in activity.items() if k not in _PRIVATE_ACTIVITY_KEYS}
    if "cost" in data:
        data["cost"] = {k: v for k, v in data["cost"].items() if k not in _PRIVATE_COST_KEYS}
    return data


def to_shared_response(trip: Trip) -> dict:
    """共有リンク経由の閲覧者向けレスポンス

    電話番号とユーザーIDは返さず、参加者は表示名とロールだけを公開する。
    """
    data = trip.to_dict()
    data.pop("createdBy", None)
    data["participants"] = [
        {"displayName": p["displayName"], "role": p["role"], "joinedAt": p["joinedAt"]}
        for p in data["participants"]
    ]
    data["days"] = [
        {**day, "activities": [_public_activity(a) for a in day["activities"]]}
        for day in data["days"]
    ]
    return SuccessResponse(data=data).model_dump()
