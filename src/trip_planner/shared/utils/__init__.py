from .http_response import api_response
from .logger import get_logger
from .retry import retry_on_conflict

__all__ = ["api_response", "get_logger", "retry_on_conflict"]
