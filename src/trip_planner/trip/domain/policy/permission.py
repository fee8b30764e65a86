from collections.abc import Iterable

from trip_planner.trip.domain.enum import ParticipantRole, TripAction
from trip_planner.trip.domain.exception import (
    PermissionDeniedException,
    UnknownActionException,
    UnknownRoleException,
)

# (ロール, 操作) → 許可/拒否 の固定表
PERMISSION_MATRIX: dict[ParticipantRole, frozenset[TripAction]] = {
    ParticipantRole.OWNER: frozenset(
        {
            TripAction.UPDATE_TITLE,
            TripAction.DELETE_TRIP,
            TripAction.ADD_PARTICIPANT,
            TripAction.VIEW_TRIP,
        }
    ),
    ParticipantRole.ORGANIZER: frozenset(
        {
            TripAction.UPDATE_TITLE,
            TripAction.ADD_PARTICIPANT,
            TripAction.VIEW_TRIP,
        }
    ),
    ParticipantRole.PARTICIPANT: frozenset({TripAction.VIEW_TRIP}),
    ParticipantRole.VIEWER: frozenset({TripAction.VIEW_TRIP}),
}

# 変更されたフィールド → 必要な操作
FIELD_ACTIONS: dict[str, TripAction] = {
    "title": TripAction.UPDATE_TITLE,
    "description": TripAction.UPDATE_TITLE,
    "period": TripAction.UPDATE_TITLE,
    "cover_image_url": TripAction.UPDATE_TITLE,
    "settings": TripAction.UPDATE_TITLE,
    "days": TripAction.UPDATE_TITLE,
    "participants": TripAction.ADD_PARTICIPANT,
}


def _to_role(role: ParticipantRole | str) -> ParticipantRole:
    if isinstance(role, ParticipantRole):
        return role
    try:
        return ParticipantRole(role)
    except ValueError as e:
        raise UnknownRoleException(f"Unknown role: {role!r}") from e


def _to_action(action: TripAction | str) -> TripAction:
    if isinstance(action, TripAction):
        return action
    try:
        return TripAction(action)
    except ValueError as e:
        raise UnknownActionException(f"Unknown action: {action!r}") from e


def is_allowed(role: ParticipantRole | str, action: TripAction | str) -> bool:
    """ロールに対して操作が許可されているかを返す

    定義外のロール・操作はプログラミングエラーとして例外を送出する。
    """
    return _to_action(action) in PERMISSION_MATRIX[_to_role(role)]


def assert_allowed(role: ParticipantRole | str | None, action: TripAction | str) -> None:
    """許可されていなければ PermissionDeniedException を送出する

    role が None（旅行の参加者でない）の場合は常に拒否する。
    """
    resolved_action = _to_action(action)
    if role is None:
        raise PermissionDeniedException(None, resolved_action)
    resolved_role = _to_role(role)
    if not is_allowed(resolved_role, resolved_action):
        raise PermissionDeniedException(resolved_role, resolved_action)


def actions_for_fields(fields: Iterable[str]) -> list[TripAction]:
    """変更されたフィールドから必要な操作を導出する（判定順を固定するため定義順で返す）"""
    required = {FIELD_ACTIONS[f] for f in fields}
    return [action for action in TripAction if action in required]
