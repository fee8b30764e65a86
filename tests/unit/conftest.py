import copy
import json
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from trip_planner.shared.config import _reset_config
from trip_planner.shared.domain import (
    DuplicateResourceException,
    IsoDateTime,
    OptimisticLockException,
    ResourceNotFoundException,
    TripId,
    UserId,
)
from trip_planner.trip.applications import (
    CreateTripService,
    DeleteTripService,
    GetTripService,
    ManageItineraryService,
    ManageParticipantsService,
    UpdateTripService,
)
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.enum import ParticipantRole
from trip_planner.trip.domain.exception import ShareTokenCollisionException
from trip_planner.trip.domain.factory import TripFactory
from trip_planner.trip.domain.repository import TripChangeSet, TripRepository
from trip_planner.trip.domain.service import ShareTokenIssuer
from trip_planner.trip.domain.value_object import (
    Actor,
    Participant,
    ShareToken,
    TripPeriod,
    TripSettings,
)
from trip_planner.user.domain.entity import User
from trip_planner.user.domain.repository import UserRepository

FIXED_NOW = IsoDateTime(value=datetime(2025, 4, 1, 9, 0, tzinfo=timezone.utc))


class InMemoryStore:
    """DynamoDB テーブルの代わりに使うストア（トランザクションはロックで直列化する）"""

    def __init__(self) -> None:
        self.trips: dict[str, dict] = {}
        self.users: dict[str, dict] = {}
        self.tokens: dict[str, str] = {}
        self.lock = threading.Lock()

    def trip_ids_of(self, user_id: str) -> set[str]:
        return self.users[user_id]["tripIds"]


class InMemoryTripRepository(TripRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.update_calls = 0
        self.conflicts_to_raise = 0

    def find_by_id(self, trip_id: TripId) -> Trip | None:
        document = self.store.trips.get(str(trip_id))
        if document is None:
            return None
        return Trip.from_dict(copy.deepcopy(document))

    def find_by_ids(self, trip_ids: frozenset[TripId]) -> list[Trip]:
        trips = [self.find_by_id(trip_id) for trip_id in trip_ids]
        return [trip for trip in trips if trip is not None]

    def find_by_share_token(self, token: ShareToken) -> Trip | None:
        trip_id = self.store.tokens.get(str(token))
        return self.find_by_id(TripId(value=trip_id)) if trip_id else None

    def share_token_exists(self, token: ShareToken) -> bool:
        return str(token) in self.store.tokens

    def save(self, trip: Trip) -> None:
        with self.store.lock:
            trip_id = str(trip.id)
            if trip_id in self.store.trips:
                raise DuplicateResourceException(f"Trip already exists: {trip_id}")
            if trip.share_token is not None and str(trip.share_token) in self.store.tokens:
                raise ShareTokenCollisionException(str(trip.share_token))
            self._require_users([trip.created_by])

            self.store.trips[trip_id] = copy.deepcopy(trip.to_dict())
            if trip.share_token is not None:
                self.store.tokens[str(trip.share_token)] = trip_id
            self.store.trip_ids_of(str(trip.created_by)).add(trip_id)

    def update(self, trip: Trip, change_set: TripChangeSet) -> None:
        with self.store.lock:
            self.update_calls += 1
            if self.conflicts_to_raise > 0:
                self.conflicts_to_raise -= 1
                raise OptimisticLockException("Simulated conflict")

            trip_id = str(trip.id)
            stored = self.store.trips.get(trip_id)
            if stored is None or stored["version"] != trip.stored_version:
                raise OptimisticLockException(f"Version mismatch: {trip_id}")
            reserved = change_set.reserved_token
            if reserved is not None and str(reserved) in self.store.tokens:
                raise ShareTokenCollisionException(str(reserved))
            self._require_users(change_set.added_user_ids)

            self.store.trips[trip_id] = copy.deepcopy(trip.to_dict())
            if reserved is not None:
                self.store.tokens[str(reserved)] = trip_id
            if change_set.released_token is not None:
                self.store.tokens.pop(str(change_set.released_token), None)
            for user_id in change_set.added_user_ids:
                self.store.trip_ids_of(str(user_id)).add(trip_id)
            for user_id in change_set.removed_user_ids:
                if str(user_id) in self.store.users:
                    self.store.trip_ids_of(str(user_id)).discard(trip_id)

    def delete(self, trip: Trip) -> None:
        with self.store.lock:
            trip_id = str(trip.id)
            stored = self.store.trips.get(trip_id)
            if stored is None or stored["version"] != trip.stored_version:
                raise OptimisticLockException(f"Version mismatch: {trip_id}")
            del self.store.trips[trip_id]
            if trip.share_token is not None:
                self.store.tokens.pop(str(trip.share_token), None)
            for user_id in trip.participant_ids():
                if str(user_id) in self.store.users:
                    self.store.trip_ids_of(str(user_id)).discard(trip_id)

    def _require_users(self, user_ids) -> None:
        for user_id in user_ids:
            if str(user_id) not in self.store.users:
                raise ResourceNotFoundException("user", str(user_id))


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def find_by_id(self, user_id: UserId) -> User | None:
        document = self.store.users.get(str(user_id))
        if document is None:
            return None
        return User.from_dict({**document, "tripIds": sorted(document["tripIds"])})

    def save(self, user: User) -> None:
        with self.store.lock:
            if str(user.id) in self.store.users:
                raise DuplicateResourceException(f"User already exists: {user.id}")
            document = user.to_dict()
            document["tripIds"] = set(document["tripIds"])
            self.store.users[str(user.id)] = document

    def update_profile(self, user: User) -> None:
        with self.store.lock:
            document = self.store.users.get(str(user.id))
            if document is None:
                raise ResourceNotFoundException("user", str(user.id))
            document["displayName"] = user.display_name
            document["phoneNumber"] = user.phone_number
            document["updatedAt"] = str(user.updated_at)


@dataclass
class LambdaContext:
    function_name: str = "test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture(autouse=True)
def reset_config():
    """環境変数から読み込んだ設定のキャッシュをテストごとに破棄する"""
    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def lambda_context():
    return LambdaContext()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def trip_repository(store):
    return InMemoryTripRepository(store)


@pytest.fixture
def user_repository(store):
    return InMemoryUserRepository(store)


@pytest.fixture
def register_user(user_repository):
    """ストアにユーザーを登録し、その Actor を返す Factory fixture"""

    def _factory(
        user_id: str = "user-owner",
        phone_number: str = "+819000000000",
        display_name: str = "Owner",
    ) -> Actor:
        user_repository.save(
            User(
                id=UserId(user_id),
                phone_number=phone_number,
                display_name=display_name,
                created_at=FIXED_NOW,
                updated_at=FIXED_NOW,
            )
        )
        return Actor.of(user_id, phone_number, display_name)

    return _factory


@pytest.fixture
def trip_payload():
    """作成用ペイロードを生成する Factory fixture"""

    def _factory(**overrides) -> dict:
        payload = {
            "title": "Kyoto Weekend",
            "description": "Temples and food",
            "start_date": "2025-05-01",
            "end_date": "2025-05-03",
        }
        payload.update(overrides)
        return payload

    return _factory


@pytest.fixture
def create_trip():
    """Trip を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        trip_id: str = "trip-123",
        title: str = "Kyoto Weekend",
        owner_id: str = "user-owner",
        members: dict[str, ParticipantRole] | None = None,
        start: str = "2025-05-01",
        end: str = "2025-05-03",
        settings: TripSettings | None = None,
        version: int = 1,
    ) -> Trip:
        participants = [
            Participant(
                user_id=UserId(owner_id),
                phone_number="+819000000000",
                display_name="Owner",
                role=ParticipantRole.OWNER,
                joined_at=FIXED_NOW,
            )
        ]
        for user_id, role in (members or {}).items():
            participants.append(
                Participant(
                    user_id=UserId(user_id),
                    phone_number="+819011111111",
                    display_name=user_id,
                    role=role,
                    joined_at=FIXED_NOW,
                )
            )
        return Trip(
            id=TripId(value=trip_id),
            title=title,
            period=TripPeriod(
                start=IsoDateTime.from_string(start),
                end=IsoDateTime.from_string(end),
            ),
            participants=participants,
            created_by=UserId(owner_id),
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
            settings=settings or TripSettings.default(),
            version=version,
        )

    return _factory


@pytest.fixture
def create_service(trip_repository, clock):
    return CreateTripService(
        repository=trip_repository,
        factory=TripFactory(),
        issuer=ShareTokenIssuer(max_attempts=5),
        max_attempts=3,
        clock=clock,
    )


@pytest.fixture
def update_service(trip_repository, clock):
    return UpdateTripService(
        repository=trip_repository,
        issuer=ShareTokenIssuer(max_attempts=5),
        max_attempts=3,
        clock=clock,
    )


@pytest.fixture
def delete_service(trip_repository):
    return DeleteTripService(repository=trip_repository, max_attempts=3)


@pytest.fixture
def get_service(trip_repository, user_repository):
    return GetTripService(repository=trip_repository, user_repository=user_repository)


@pytest.fixture
def participants_service(update_service, user_repository):
    return ManageParticipantsService(
        update_service=update_service, user_repository=user_repository
    )


@pytest.fixture
def itinerary_service(trip_repository, clock):
    ids = iter(f"id-{n}" for n in range(1, 100))
    return ManageItineraryService(
        repository=trip_repository,
        max_attempts=3,
        clock=clock,
        id_generator=lambda: next(ids),
    )


@pytest.fixture
def owner(register_user):
    return register_user("user-owner", display_name="Owner")


@pytest.fixture
def saved_trip(create_service, owner, trip_payload):
    """オーナーが作成済みの旅行"""
    return create_service.create(owner, trip_payload())


@pytest.fixture
def trip_with_members(saved_trip, register_user, update_service, owner):
    """organizer / participant / viewer を含む旅行"""
    members = {
        "user-organizer": "organizer",
        "user-participant": "participant",
        "user-viewer": "viewer",
    }
    entries = [{"user_id": "user-owner", "role": "owner"}]
    for user_id, role in members.items():
        register_user(user_id, display_name=user_id)
        entries.append({"user_id": user_id, "role": role})
    return update_service.update(saved_trip.id, {"participants": entries}, owner)


@pytest.fixture
def api_event():
    """API Gateway HTTP API (v2) のイベントを生成する Factory fixture"""

    def _factory(
        route_key: str,
        path_parameters: dict | None = None,
        body: dict | str | None = None,
        query: dict | None = None,
        user_id: str | None = "user-owner",
    ) -> dict:
        method, path = route_key.split(" ", 1)
        request_context: dict = {
            "http": {"method": method, "path": path},
            "requestId": "request-1",
            "stage": "$default",
        }
        if user_id is not None:
            request_context["authorizer"] = {
                "jwt": {
                    "claims": {
                        "sub": user_id,
                        "phone_number": "+819000000000",
                        "name": "Owner",
                    },
                    "scopes": None,
                }
            }
        return {
            "version": "2.0",
            "routeKey": route_key,
            "rawPath": path,
            "rawQueryString": "",
            "headers": {"content-type": "application/json"},
            "requestContext": request_context,
            "pathParameters": path_parameters,
            "queryStringParameters": query,
            "body": json.dumps(body) if isinstance(body, dict) else body,
            "isBase64Encoded": False,
        }

    return _factory
