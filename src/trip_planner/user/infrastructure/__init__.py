from .dynamodb_user_repository import DynamoDBUserRepository, user_key

__all__ = ["DynamoDBUserRepository", "user_key"]
