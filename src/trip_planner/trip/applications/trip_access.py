from typing import Callable

from aws_lambda_powertools import Logger

from trip_planner.shared.domain import ResourceNotFoundException, TripId
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.enum import ParticipantRole, TripAction
from trip_planner.trip.domain.exception import (
    ShareTokenCollisionException,
    TokenAllocationExhaustedException,
)
from trip_planner.trip.domain.policy import assert_allowed
from trip_planner.trip.domain.repository import TripRepository
from trip_planner.trip.domain.service import ShareTokenIssuer
from trip_planner.trip.domain.value_object import Actor


def load_trip(repository: TripRepository, trip_id: TripId) -> Trip:
    trip = repository.find_by_id(trip_id)
    if trip is None:
        raise ResourceNotFoundException("trip", str(trip_id))
    return trip


def authorize(role: ParticipantRole | None, actions: list[TripAction]) -> None:
    """必要な操作を順に判定する（最初に拒否された操作で例外）"""
    for action in actions:
        assert_allowed(role, action)


def role_of(trip: Trip, actor: Actor) -> ParticipantRole | None:
    return trip.role_of(actor.user_id)


def commit_with_share_token(
    trip: Trip,
    issuer: ShareTokenIssuer,
    repository: TripRepository,
    persist: Callable[[], None],
    logger: Logger,
) -> None:
    """必要なら共有トークンを採番してから persist を呼ぶ

    コミット時に予約が衝突した場合は、新しいトークンで
    採番からトランザクションまでをやり直す。
    """
    needs_token = trip.needs_share_token()
    for attempt in range(1, issuer.max_attempts + 1):
        if needs_token:
            trip.assign_share_token(issuer.issue(repository.share_token_exists))
        try:
            persist()
            return
        except ShareTokenCollisionException:
            if not needs_token:
                raise
            logger.warning(
                "Share token collided at commit, reissuing",
                extra={"trip_id": str(trip.id), "attempt": attempt},
            )

    raise TokenAllocationExhaustedException(
        f"Could not reserve a unique share token after {issuer.max_attempts} attempts"
    )
