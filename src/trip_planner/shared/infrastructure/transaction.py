from dataclasses import dataclass, field
from typing import Any, Callable

from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from trip_planner.shared.domain.exception import (
    DomainException,
    OptimisticLockException,
)

_serializer = TypeSerializer()


def _serialize(values: dict) -> dict:
    return {k: _serializer.serialize(v) for k, v in values.items()}


@dataclass
class TransactWriter:
    """TransactWriteItems の組み立てと、キャンセル理由のドメイン例外への変換

    各操作に「条件チェック失敗時に送出する例外」を紐づけておき、
    CancellationReasons の位置から対応する例外を選ぶ。
    """

    table_name: str
    _items: list[dict] = field(default_factory=list)
    _on_condition_failed: list[Callable[[], DomainException]] = field(
        default_factory=list
    )

    def put(
        self,
        item: dict,
        condition: str,
        on_condition_failed: Callable[[], DomainException],
        names: dict | None = None,
        values: dict | None = None,
    ) -> None:
        operation: dict[str, Any] = {
            "TableName": self.table_name,
            "Item": _serialize(item),
            "ConditionExpression": condition,
        }
        self._add("Put", operation, on_condition_failed, names, values)

    def update(
        self,
        key: dict,
        update_expression: str,
        condition: str,
        on_condition_failed: Callable[[], DomainException],
        names: dict | None = None,
        values: dict | None = None,
    ) -> None:
        operation: dict[str, Any] = {
            "TableName": self.table_name,
            "Key": _serialize(key),
            "UpdateExpression": update_expression,
            "ConditionExpression": condition,
        }
        self._add("Update", operation, on_condition_failed, names, values)

    def delete(
        self,
        key: dict,
        on_condition_failed: Callable[[], DomainException],
        condition: str | None = None,
        names: dict | None = None,
        values: dict | None = None,
    ) -> None:
        operation: dict[str, Any] = {"TableName": self.table_name, "Key": _serialize(key)}
        if condition:
            operation["ConditionExpression"] = condition
        self._add("Delete", operation, on_condition_failed, names, values)

    def _add(
        self,
        kind: str,
        operation: dict,
        on_condition_failed: Callable[[], DomainException],
        names: dict | None,
        values: dict | None,
    ) -> None:
        if names:
            operation["ExpressionAttributeNames"] = names
        if values:
            operation["ExpressionAttributeValues"] = _serialize(values)
        self._items.append({kind: operation})
        self._on_condition_failed.append(on_condition_failed)

    @property
    def items(self) -> list[dict]:
        return list(self._items)

    def commit(self, client: Any) -> None:
        """全操作を1つのトランザクションで書き込む

        Raises:
            各操作に紐づけた例外: 条件チェックに失敗した
            OptimisticLockException: 他のトランザクションと競合した
        """
        try:
            client.transact_write_items(TransactItems=self._items)
        except ClientError as e:
            if e.response["Error"]["Code"] != "TransactionCanceledException":
                raise
            error = self._translate(e.response.get("CancellationReasons", []))
            if error is None:
                raise
            raise error from e

    def _translate(self, reasons: list[dict]) -> DomainException | None:
        codes = [reason.get("Code", "None") for reason in reasons]
        for index, code in enumerate(codes):
            if code == "ConditionalCheckFailed" and index < len(self._on_condition_failed):
                return self._on_condition_failed[index]()
        if "TransactionConflict" in codes:
            return OptimisticLockException("Transaction conflicted with a concurrent write")
        return None
