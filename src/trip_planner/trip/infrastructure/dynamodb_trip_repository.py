import time
from typing import Any, Callable

from trip_planner.shared.config import get_config
from trip_planner.shared.domain import (
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
    TransactionConflictException,
    TripId,
    UserId,
)
from trip_planner.shared.infrastructure import (
    TransactWriter,
    get_dynamodb_client,
    get_dynamodb_resource,
)
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.exception import ShareTokenCollisionException
from trip_planner.trip.domain.repository import TripChangeSet, TripRepository
from trip_planner.trip.domain.value_object import ShareToken
from trip_planner.user.infrastructure import user_key

TRIP_SK = "METADATA"
SHARE_TOKEN_SK = "SHARE_TOKEN"
BATCH_GET_LIMIT = 100
BATCH_GET_MAX_ROUNDS = 6
BATCH_GET_BACKOFF_SECONDS = 0.05
BATCH_GET_BACKOFF_CAP_SECONDS = 1.0

_KEY_ATTRIBUTES = ("PK", "SK", "entity_type")


def trip_key(trip_id: TripId | str) -> dict:
    return {"PK": f"TRIP#{trip_id}", "SK": TRIP_SK}


def share_token_key(token: ShareToken | str) -> dict:
    return {"PK": f"SHARE_TOKEN#{token}", "SK": SHARE_TOKEN_SK}


class DynamoDBTripRepository(TripRepository):
    """DynamoDBを使用した TripRepository の具象実装

    読み込みは Table リソース、書き込みは低レベルクライアントの
    TransactWriteItems で行う。1トランザクションに含められるのは
    100アイテムまでのため、参加者数もこの範囲に収まる必要がある。
    """

    def __init__(
        self,
        table: Any | None = None,
        client: Any | None = None,
        table_name: str | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.table_name = table_name or get_config().table_name
        self.table = table if table is not None else get_dynamodb_resource().Table(self.table_name)
        self.client = client if client is not None else get_dynamodb_client()
        self._sleep = sleep

    def find_by_id(self, trip_id: TripId) -> Trip | None:
        response = self.table.get_item(Key=trip_key(trip_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_ids(self, trip_ids: frozenset[TripId]) -> list[Trip]:
        keys = [trip_key(trip_id) for trip_id in sorted(trip_ids, key=str)]
        return [self._to_entity(item) for item in self._batch_get(keys)]

    def find_by_share_token(self, token: ShareToken) -> Trip | None:
        response = self.table.get_item(Key=share_token_key(token), ConsistentRead=True)
        reservation = response.get("Item")
        if not reservation:
            return None
        trip = self.find_by_id(TripId(value=reservation["tripId"]))
        if trip is None or trip.share_token != token:
            return None
        return trip

    def share_token_exists(self, token: ShareToken) -> bool:
        response = self.table.get_item(Key=share_token_key(token), ConsistentRead=True)
        return "Item" in response

    def save(self, trip: Trip) -> None:
        writer = TransactWriter(self.table_name)
        writer.put(
            self._to_item(trip),
            condition="attribute_not_exists(PK)",
            on_condition_failed=lambda: DuplicateResourceException(
                f"Trip already exists: {trip.id}"
            ),
        )
        if trip.share_token is not None:
            self._reserve_token(writer, trip, trip.share_token)
        self._add_to_index(writer, trip.created_by, trip.id)
        writer.commit(self.client)

    def update(self, trip: Trip, change_set: TripChangeSet) -> None:
        writer = TransactWriter(self.table_name)
        writer.put(
            self._to_item(trip),
            condition="#version = :expected_version",
            names={"#version": "version"},
            values={":expected_version": trip.stored_version},
            on_condition_failed=lambda: OptimisticLockException(
                f"Trip was modified concurrently: {trip.id}"
            ),
        )
        if change_set.reserved_token is not None:
            self._reserve_token(writer, trip, change_set.reserved_token)
        if change_set.released_token is not None:
            self._release_token(writer, trip, change_set.released_token)
        for user_id in sorted(change_set.added_user_ids, key=str):
            self._add_to_index(writer, user_id, trip.id)
        for user_id in sorted(self._existing_users(change_set.removed_user_ids), key=str):
            self._remove_from_index(writer, user_id, trip.id)
        writer.commit(self.client)

    def delete(self, trip: Trip) -> None:
        writer = TransactWriter(self.table_name)
        writer.delete(
            trip_key(trip.id),
            condition="#version = :expected_version",
            names={"#version": "version"},
            values={":expected_version": trip.stored_version},
            on_condition_failed=lambda: OptimisticLockException(
                f"Trip was modified concurrently: {trip.id}"
            ),
        )
        if trip.share_token is not None:
            self._release_token(writer, trip, trip.share_token)
        for user_id in sorted(self._existing_users(trip.participant_ids()), key=str):
            self._remove_from_index(writer, user_id, trip.id)
        writer.commit(self.client)

    def _reserve_token(self, writer: TransactWriter, trip: Trip, token: ShareToken) -> None:
        writer.put(
            {
                **share_token_key(token),
                "entity_type": "SHARE_TOKEN",
                "shareToken": str(token),
                "tripId": str(trip.id),
            },
            condition="attribute_not_exists(PK)",
            on_condition_failed=lambda: ShareTokenCollisionException(
                f"Share token already reserved: {token}"
            ),
        )

    def _release_token(self, writer: TransactWriter, trip: Trip, token: ShareToken) -> None:
        # 他の旅行の予約は消さない
        writer.delete(
            share_token_key(token),
            condition="attribute_not_exists(PK) OR tripId = :trip_id",
            values={":trip_id": str(trip.id)},
            on_condition_failed=lambda: OptimisticLockException(
                f"Share token {token} is reserved by another trip"
            ),
        )

    def _add_to_index(self, writer: TransactWriter, user_id: UserId, trip_id: TripId) -> None:
        writer.update(
            user_key(user_id),
            update_expression="ADD tripIds :trip_ids",
            condition="attribute_exists(PK)",
            values={":trip_ids": {str(trip_id)}},
            on_condition_failed=lambda: ResourceNotFoundException("user", str(user_id)),
        )

    def _remove_from_index(
        self, writer: TransactWriter, user_id: UserId, trip_id: TripId
    ) -> None:
        writer.update(
            user_key(user_id),
            update_expression="DELETE tripIds :trip_ids",
            condition="attribute_exists(PK)",
            values={":trip_ids": {str(trip_id)}},
            on_condition_failed=lambda: ResourceNotFoundException("user", str(user_id)),
        )

    def _existing_users(self, user_ids: frozenset[UserId]) -> frozenset[UserId]:
        """ユーザードキュメントが存在するものだけを返す

        tripIds からの削除は存在するユーザーにだけ行う。
        存在しないキーへの UpdateItem は空のユーザーアイテムを作ってしまうため。
        """
        if not user_ids:
            return frozenset()
        keys = [user_key(user_id) for user_id in sorted(user_ids, key=str)]
        found = {item["PK"] for item in self._batch_get(keys, projection="PK")}
        return frozenset(u for u in user_ids if user_key(u)["PK"] in found)

    def _batch_get(self, keys: list[dict], projection: str | None = None) -> list[dict]:
        """BatchGetItem で100件ずつ読み込む

        UnprocessedKeys は指数バックオフを挟んで再要求し、
        BATCH_GET_MAX_ROUNDS 回で読み切れなければ諦める。
        """
        items: list[dict] = []
        for start in range(0, len(keys), BATCH_GET_LIMIT):
            keys_and_attributes: dict = {
                "Keys": keys[start : start + BATCH_GET_LIMIT],
                "ConsistentRead": True,
            }
            if projection:
                keys_and_attributes["ProjectionExpression"] = projection
            request = {self.table_name: keys_and_attributes}
            for round_ in range(BATCH_GET_MAX_ROUNDS):
                if round_ > 0:
                    self._sleep(
                        min(
                            BATCH_GET_BACKOFF_SECONDS * 2 ** (round_ - 1),
                            BATCH_GET_BACKOFF_CAP_SECONDS,
                        )
                    )
                response = self.table.meta.client.batch_get_item(RequestItems=request)
                items.extend(response.get("Responses", {}).get(self.table_name, []))
                request = response.get("UnprocessedKeys") or {}
                if not request:
                    break
            else:
                raise TransactionConflictException(
                    f"Could not read all items after {BATCH_GET_MAX_ROUNDS} rounds"
                )
        return items

    def _to_item(self, trip: Trip) -> dict:
        return {**trip_key(trip.id), "entity_type": "TRIP", **trip.to_dict()}

    def _to_entity(self, item: dict) -> Trip:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Trip.from_dict({k: v for k, v in item.items() if k not in _KEY_ATTRIBUTES})
