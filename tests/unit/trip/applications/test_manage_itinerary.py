import pytest

from trip_planner.shared.domain import ResourceNotFoundException
from trip_planner.trip.domain.enum import ActivityType, ValidationErrorKind
from trip_planner.trip.domain.exception import (
    PermissionDeniedException,
    TripValidationException,
)
from trip_planner.trip.domain.value_object import Actor


class TestManageItineraryService:
    def test_add_day(self, itinerary_service, saved_trip, owner, trip_repository):
        day = itinerary_service.add_day(saved_trip.id, owner, {"date": "2025-05-01", "title": "Arrival"})

        stored = trip_repository.find_by_id(saved_trip.id)
        assert day.day_id == "id-1"
        assert [d.day_id for d in stored.days] == ["id-1"]
        assert stored.days[0].title == "Arrival"
        assert stored.version == 2

    def test_add_activity_stamps_author(
        self, itinerary_service, saved_trip, owner, trip_repository, clock
    ):
        day = itinerary_service.add_day(saved_trip.id, owner, {"date": "2025-05-01"})

        activity = itinerary_service.add_activity(
            saved_trip.id,
            owner,
            day.day_id,
            {
                "title": "Fushimi Inari",
                "type": "attraction",
                "cost": {"amount": "500", "currency": "jpy"},
            },
        )

        assert activity.created_by == owner.user_id
        assert activity.updated_at == clock()
        assert activity.type == ActivityType.ATTRACTION
        assert str(activity.cost.price.currency) == "JPY"
        stored = trip_repository.find_by_id(saved_trip.id)
        assert stored.find_activity(day.day_id, activity.activity_id) == activity

    def test_update_activity_merges_fields(self, itinerary_service, saved_trip, owner):
        day = itinerary_service.add_day(saved_trip.id, owner, {"date": "2025-05-01"})
        activity = itinerary_service.add_activity(
            saved_trip.id, owner, day.day_id, {"title": "Lunch", "type": "restaurant", "notes": "Ramen"}
        )

        updated = itinerary_service.update_activity(
            saved_trip.id, owner, day.day_id, activity.activity_id, {"title": "Late Lunch"}
        )

        assert updated.title == "Late Lunch"
        assert updated.notes == "Ramen"
        assert updated.created_at == activity.created_at

    def test_remove_activity_and_day(self, itinerary_service, saved_trip, owner, trip_repository):
        day = itinerary_service.add_day(saved_trip.id, owner, {"date": "2025-05-01"})
        activity = itinerary_service.add_activity(
            saved_trip.id, owner, day.day_id, {"title": "Lunch", "type": "restaurant"}
        )

        itinerary_service.remove_activity(saved_trip.id, owner, day.day_id, activity.activity_id)
        assert trip_repository.find_by_id(saved_trip.id).days[0].activities == ()

        itinerary_service.remove_day(saved_trip.id, owner, day.day_id)
        assert trip_repository.find_by_id(saved_trip.id).days == ()

    def test_unknown_day_is_not_found(self, itinerary_service, saved_trip, owner):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            itinerary_service.add_activity(
                saved_trip.id, owner, "no-such-day", {"title": "Lunch", "type": "restaurant"}
            )

        assert exc_info.value.entity_kind == "day"

    def test_unknown_activity_is_not_found(self, itinerary_service, saved_trip, owner):
        day = itinerary_service.add_day(saved_trip.id, owner, {"date": "2025-05-01"})

        with pytest.raises(ResourceNotFoundException) as exc_info:
            itinerary_service.remove_activity(saved_trip.id, owner, day.day_id, "missing")

        assert exc_info.value.entity_kind == "activity"

    def test_invalid_time_range(self, itinerary_service, saved_trip, owner):
        day = itinerary_service.add_day(saved_trip.id, owner, {"date": "2025-05-01"})

        with pytest.raises(TripValidationException) as exc_info:
            itinerary_service.add_activity(
                saved_trip.id,
                owner,
                day.day_id,
                {
                    "title": "Flight",
                    "type": "flight",
                    "start_time": "2025-05-01T10:00:00Z",
                    "end_time": "2025-05-01T09:00:00Z",
                },
            )

        assert exc_info.value.kind == ValidationErrorKind.INVALID_TIME_RANGE

    @pytest.mark.parametrize("user_id", ["user-participant", "user-viewer"])
    def test_read_only_roles_cannot_edit(self, itinerary_service, trip_with_members, user_id):
        with pytest.raises(PermissionDeniedException):
            itinerary_service.add_day(
                trip_with_members.id, Actor.of(user_id, "", user_id), {"date": "2025-05-01"}
            )

    def test_organizer_can_edit(self, itinerary_service, trip_with_members, trip_repository):
        itinerary_service.add_day(
            trip_with_members.id, Actor.of("user-organizer", "", "Organizer"), {"date": "2025-05-02"}
        )

        assert len(trip_repository.find_by_id(trip_with_members.id).days) == 1

    def test_outsider_is_denied_before_day_lookup(self, itinerary_service, saved_trip):
        """存在しない Day を指定しても、参加者でなければ 403 相当になる"""
        outsider = Actor.of("user-outsider", "", "Outsider")

        with pytest.raises(PermissionDeniedException) as exc_info:
            itinerary_service.remove_day(saved_trip.id, outsider, "missing-day")

        assert exc_info.value.role is None

    def test_viewer_is_denied_before_activity_validation(
        self, itinerary_service, trip_with_members
    ):
        viewer = Actor.of("user-viewer", "", "Viewer")

        with pytest.raises(PermissionDeniedException):
            itinerary_service.add_activity(trip_with_members.id, viewer, "missing-day", {"title": ""})
