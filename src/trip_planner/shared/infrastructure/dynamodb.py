"""DynamoDB クライアント（Lambda のウォームスタート間で再利用する）"""

from functools import lru_cache
from typing import Any

import boto3

from trip_planner.shared.config import get_config


@lru_cache(maxsize=1)
def get_dynamodb_resource() -> Any:
    config = get_config()
    return boto3.resource(
        "dynamodb",
        region_name=config.aws_region,
        endpoint_url=config.dynamodb_endpoint,
    )


@lru_cache(maxsize=1)
def get_dynamodb_client() -> Any:
    config = get_config()
    return boto3.client(
        "dynamodb",
        region_name=config.aws_region,
        endpoint_url=config.dynamodb_endpoint,
    )
