from os import environ

from pydantic import BaseModel, ConfigDict, Field


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    table_name: str
    dynamodb_endpoint: str | None = None
    share_token_max_attempts: int = Field(default=5, ge=1)
    transaction_max_attempts: int = Field(default=3, ge=1)
    environment: str


_cached_config: Config | None = None


def _reset_config() -> None:
    """キャッシュした設定を破棄する（テスト専用）"""
    global _cached_config
    _cached_config = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        table_name=environ.get("TABLE_NAME", "TripTable"),
        dynamodb_endpoint=environ.get("DYNAMODB_ENDPOINT"),
        share_token_max_attempts=int(environ.get("SHARE_TOKEN_MAX_ATTEMPTS", "5")),
        transaction_max_attempts=int(environ.get("TRANSACTION_MAX_ATTEMPTS", "3")),
        environment=environ.get("ENVIRONMENT", "local"),
    )
    return _cached_config
