from typing import Any

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from trip_planner.shared.config import get_config
from trip_planner.shared.domain import (
    DuplicateResourceException,
    ResourceNotFoundException,
    UserId,
)
from trip_planner.shared.infrastructure import get_dynamodb_resource
from trip_planner.user.domain.entity import User
from trip_planner.user.domain.repository import UserRepository

PROFILE_SK = "PROFILE"


def user_key(user_id: UserId | str) -> dict:
    return {"PK": f"USER#{user_id}", "SK": PROFILE_SK}


class DynamoDBUserRepository(UserRepository):
    """DynamoDBを使用した UserRepository の具象実装

    tripIds は文字列セット（SS）として保持する。
    空集合は保存できないため、旅行がない場合は属性自体を持たない。
    """

    def __init__(self, table: Any | None = None) -> None:
        self.table = table if table is not None else get_dynamodb_resource().Table(get_config().table_name)

    def find_by_id(self, user_id: UserId) -> User | None:
        response = self.table.get_item(Key=user_key(user_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return User.from_dict(item)

    def save(self, user: User) -> None:
        item = {**user_key(user.id), "entity_type": "USER", **user.to_dict()}
        if user.trip_ids:
            item["tripIds"] = set(item["tripIds"])
        else:
            del item["tripIds"]
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(f"User already exists: {user.id}") from e
            raise

    def update_profile(self, user: User) -> None:
        try:
            self.table.update_item(
                Key=user_key(user.id),
                UpdateExpression="SET displayName = :name, phoneNumber = :phone, updatedAt = :now",
                ConditionExpression=Attr("PK").exists(),
                ExpressionAttributeValues={
                    ":name": user.display_name,
                    ":phone": user.phone_number,
                    ":now": str(user.updated_at),
                },
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ResourceNotFoundException("user", str(user.id)) from e
            raise
