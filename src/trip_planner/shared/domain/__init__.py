from .entity import AggregateRoot, Entity
from .exception import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
    TransactionConflictException,
)
from .repository import Repository
from .value_object import Currency, IsoDateTime, Money, TripId, UserId

__all__ = [
    "Entity",
    "AggregateRoot",
    "Repository",
    "DomainException",
    "ResourceNotFoundException",
    "BusinessRuleViolationException",
    "DuplicateResourceException",
    "OptimisticLockException",
    "TransactionConflictException",
    "TripId",
    "UserId",
    "Currency",
    "Money",
    "IsoDateTime",
]
