from .dynamodb_trip_repository import DynamoDBTripRepository, share_token_key, trip_key

__all__ = ["DynamoDBTripRepository", "share_token_key", "trip_key"]
