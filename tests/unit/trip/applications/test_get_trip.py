import pytest

from trip_planner.shared.domain import IsoDateTime, ResourceNotFoundException, UserId
from trip_planner.trip.domain.exception import PermissionDeniedException
from trip_planner.trip.domain.value_object import Actor


class TestGetTripService:
    @pytest.mark.parametrize(
        "user_id", ["user-owner", "user-organizer", "user-participant", "user-viewer"]
    )
    def test_every_role_can_view(self, get_service, trip_with_members, user_id):
        trip = get_service.get(trip_with_members.id, Actor.of(user_id, "", user_id))

        assert trip.id == trip_with_members.id

    def test_non_participant_cannot_view(self, get_service, saved_trip):
        with pytest.raises(PermissionDeniedException):
            get_service.get(saved_trip.id, Actor.of("stranger", "", "Stranger"))

    def test_get_shared_returns_public_trip(self, get_service, update_service, saved_trip, owner):
        public = update_service.update(saved_trip.id, {"settings": {"is_public": True}}, owner)

        trip = get_service.get_shared(str(public.share_token))

        assert trip.id == saved_trip.id

    @pytest.mark.parametrize("token", ["AAAAAAAAAAAAAAAA", "short", "not a token at all!"])
    def test_get_shared_unknown_or_malformed_token_is_not_found(self, get_service, token):
        with pytest.raises(ResourceNotFoundException):
            get_service.get_shared(token)

    def test_get_shared_after_made_private_is_not_found(
        self, get_service, update_service, saved_trip, owner
    ):
        public = update_service.update(saved_trip.id, {"settings": {"is_public": True}}, owner)
        update_service.update(saved_trip.id, {"settings": {"is_public": False}}, owner)

        with pytest.raises(ResourceNotFoundException):
            get_service.get_shared(str(public.share_token))

    def test_list_for_user_newest_start_first(
        self, get_service, create_service, owner, trip_payload
    ):
        early = create_service.create(owner, trip_payload(start_date="2025-01-01", end_date="2025-01-02"))
        late = create_service.create(owner, trip_payload(start_date="2025-09-01", end_date="2025-09-02"))
        middle = create_service.create(owner, trip_payload(start_date="2025-05-01", end_date="2025-05-02"))

        trips = get_service.list_for_user(owner.user_id)

        assert [t.id for t in trips] == [late.id, middle.id, early.id]

    def test_list_for_user_includes_trips_joined_as_participant(
        self, get_service, trip_with_members
    ):
        trips = get_service.list_for_user(UserId("user-viewer"))

        assert [t.id for t in trips] == [trip_with_members.id]

    def test_list_upcoming_excludes_started_trips(
        self, get_service, create_service, owner, trip_payload
    ):
        create_service.create(owner, trip_payload(start_date="2025-01-01", end_date="2025-01-02"))
        soon = create_service.create(owner, trip_payload(start_date="2025-06-01", end_date="2025-06-02"))
        later = create_service.create(owner, trip_payload(start_date="2025-12-01", end_date="2025-12-02"))

        trips = get_service.list_upcoming(
            owner.user_id, now=IsoDateTime.from_string("2025-04-01T00:00:00Z")
        )

        assert [t.id for t in trips] == [soon.id, later.id]

    def test_list_for_unknown_user_is_not_found(self, get_service):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            get_service.list_for_user(UserId("ghost"))

        assert exc_info.value.entity_kind == "user"
