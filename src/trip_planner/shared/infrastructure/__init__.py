from .dynamodb import get_dynamodb_client, get_dynamodb_resource
from .transaction import TransactWriter

__all__ = ["TransactWriter", "get_dynamodb_client", "get_dynamodb_resource"]
