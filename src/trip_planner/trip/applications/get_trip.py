from trip_planner.shared.domain import IsoDateTime, ResourceNotFoundException, TripId, UserId
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.enum import TripAction
from trip_planner.trip.domain.repository import TripRepository
from trip_planner.trip.domain.value_object import Actor, ShareToken
from trip_planner.user.domain.repository import UserRepository

from .trip_access import authorize, load_trip, role_of


class GetTripService:
    """旅行参照のユースケース"""

    def __init__(self, repository: TripRepository, user_repository: UserRepository) -> None:
        self._repository = repository
        self._user_repository = user_repository

    def get(self, trip_id: TripId, actor: Actor) -> Trip:
        trip = load_trip(self._repository, trip_id)
        authorize(role_of(trip, actor), [TripAction.VIEW_TRIP])
        return trip

    def get_shared(self, share_token: str) -> Trip:
        """共有トークンで公開旅行を取得する（認証不要）

        形式不正・未知のトークン・非公開の旅行はすべて NotFound とし、区別しない。
        """
        try:
            token = ShareToken(share_token)
        except ValueError as e:
            raise ResourceNotFoundException("trip", share_token) from e
        trip = self._repository.find_by_share_token(token)
        if trip is None or not trip.settings.is_public:
            raise ResourceNotFoundException("trip", share_token)
        return trip

    def list_for_user(self, user_id: UserId) -> list[Trip]:
        """ユーザーの参加する旅行を開始日の新しい順で返す"""
        trips = self._repository.find_by_ids(self._user_trip_ids(user_id))
        return sorted(trips, key=lambda t: t.period.start.value, reverse=True)

    def list_upcoming(self, user_id: UserId, now: IsoDateTime | None = None) -> list[Trip]:
        """これから始まる旅行を開始日の近い順で返す"""
        now = now or IsoDateTime.now()
        trips = self._repository.find_by_ids(self._user_trip_ids(user_id))
        upcoming = [t for t in trips if t.period.start.is_after(now)]
        return sorted(upcoming, key=lambda t: t.period.start.value)

    def _user_trip_ids(self, user_id: UserId) -> frozenset[TripId]:
        user = self._user_repository.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", str(user_id))
        return user.trip_ids
