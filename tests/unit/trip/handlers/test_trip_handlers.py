import json
from unittest.mock import MagicMock

import pytest

from trip_planner.shared.domain import IsoDateTime, Money, ResourceNotFoundException, TripId, UserId
from trip_planner.trip.domain.enum import ActivityType, ParticipantRole, TripAction
from trip_planner.trip.domain.exception import PermissionDeniedException
from trip_planner.trip.domain.value_object import Activity, Cost, Day
from trip_planner.trip.handlers import (
    create,
    delete,
    get_shared,
    get_trip,
    itinerary,
    list_trips,
    participants,
    update,
)


@pytest.fixture
def mock_service(monkeypatch):
    """ハンドラモジュールのサービスを MagicMock に差し替える"""

    def _patch(module):
        service = MagicMock()
        monkeypatch.setattr(module, "service", service)
        return service

    return _patch


def body_of(response: dict) -> dict:
    return json.loads(response["body"])


class TestCreateHandler:
    def test_creates_trip(self, mock_service, api_event, lambda_context, create_trip):
        service = mock_service(create)
        service.create.return_value = create_trip()
        event = api_event(
            "POST /trips",
            body={
                "title": "Kyoto Weekend",
                "startDate": "2025-05-01",
                "endDate": "2025-05-03",
                "settings": {"isPublic": True},
            },
        )

        response = create.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 201
        assert body_of(response)["data"]["tripId"] == "trip-123"
        actor, payload = service.create.call_args[0]
        assert actor.user_id == UserId("user-owner")
        assert payload == {
            "title": "Kyoto Weekend",
            "start_date": "2025-05-01",
            "end_date": "2025-05-03",
            "settings": {"is_public": True},
        }

    def test_missing_claims_is_unauthorized(self, mock_service, api_event, lambda_context):
        service = mock_service(create)
        event = api_event("POST /trips", body={"title": "Kyoto"}, user_id=None)

        response = create.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 401
        service.create.assert_not_called()

    def test_malformed_json_is_bad_request(self, mock_service, api_event, lambda_context):
        mock_service(create)
        event = api_event("POST /trips", body="{not json")

        response = create.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400
        assert body_of(response)["error_code"] == "INVALID_REQUEST"


class TestUpdateHandler:
    def test_passes_only_given_fields(self, mock_service, api_event, lambda_context, create_trip):
        service = mock_service(update)
        service.update.return_value = create_trip(title="Osaka Weekend")
        event = api_event(
            "PATCH /trips/{trip_id}",
            path_parameters={"trip_id": "trip-123"},
            body={"title": "Osaka Weekend"},
        )

        response = update.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        trip_id, patch, _actor = service.update.call_args[0]
        assert trip_id == TripId(value="trip-123")
        assert patch == {"title": "Osaka Weekend"}

    def test_permission_denied(self, mock_service, api_event, lambda_context):
        service = mock_service(update)
        service.update.side_effect = PermissionDeniedException(
            ParticipantRole.VIEWER, TripAction.UPDATE_TITLE
        )
        event = api_event(
            "PATCH /trips/{trip_id}",
            path_parameters={"trip_id": "trip-123"},
            body={"title": "Osaka Weekend"},
        )

        response = update.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 403
        assert body_of(response)["details"] == {"role": "viewer", "action": "update_title"}


class TestDeleteHandler:
    def test_deletes_trip(self, mock_service, api_event, lambda_context):
        service = mock_service(delete)
        event = api_event("DELETE /trips/{trip_id}", path_parameters={"trip_id": "trip-123"})

        response = delete.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert body_of(response)["data"] == {"tripId": "trip-123"}
        service.delete.assert_called_once()

    def test_missing_path_parameter(self, mock_service, api_event, lambda_context):
        service = mock_service(delete)
        event = api_event("DELETE /trips/{trip_id}")

        response = delete.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400
        service.delete.assert_not_called()


class TestReadHandlers:
    def test_get_trip_not_found(self, mock_service, api_event, lambda_context):
        service = mock_service(get_trip)
        service.get.side_effect = ResourceNotFoundException("trip", "trip-404")
        event = api_event("GET /trips/{trip_id}", path_parameters={"trip_id": "trip-404"})

        response = get_trip.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 404
        assert body_of(response)["details"] == {"entity": "trip", "id": "trip-404"}

    def test_get_shared_needs_no_claims(self, mock_service, api_event, lambda_context, create_trip):
        service = mock_service(get_shared)
        service.get_shared.return_value = create_trip()
        event = api_event(
            "GET /shared/{share_token}",
            path_parameters={"share_token": "abcdefghijklmnop"},
            user_id=None,
        )

        response = get_shared.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        service.get_shared.assert_called_once_with("abcdefghijklmnop")

    def test_get_shared_hides_contact_details(
        self, mock_service, api_event, lambda_context, create_trip, clock
    ):
        """共有リンクの閲覧者には電話番号とユーザーIDを返さない"""
        trip = create_trip(members={"user-friend": ParticipantRole.VIEWER})
        now = clock()
        trip.add_day(Day(day_id="day-1", date=IsoDateTime.from_string("2025-05-01")), now)
        activity = Activity(
            activity_id="act-1",
            title="Dinner",
            type=ActivityType.RESTAURANT,
            created_by=UserId("user-owner"),
            created_at=now,
            updated_by=UserId("user-friend"),
            updated_at=now,
            cost=Cost(
                price=Money.of("3000", "JPY"),
                paid_by=UserId("user-owner"),
                split_between=(UserId("user-owner"), UserId("user-friend")),
            ),
        )
        trip.add_activity("day-1", activity, now)
        mock_service(get_shared).get_shared.return_value = trip
        event = api_event(
            "GET /shared/{share_token}",
            path_parameters={"share_token": "abcdefghijklmnop"},
            user_id=None,
        )

        response = get_shared.lambda_handler(event, lambda_context)

        assert "phoneNumber" not in response["body"]
        assert "user-owner" not in response["body"]
        data = body_of(response)["data"]
        assert all("userId" not in p for p in data["participants"])
        assert data["participants"][1]["displayName"] == "user-friend"
        assert "updatedBy" not in data["days"][0]["activities"][0]
        assert [p["role"] for p in data["participants"]] == ["owner", "viewer"]
        assert data["days"][0]["activities"][0]["cost"] == {"amount": "3000", "currency": "JPY"}

    def test_list_trips(self, mock_service, api_event, lambda_context, create_trip):
        service = mock_service(list_trips)
        service.list_for_user.return_value = [create_trip("trip-1"), create_trip("trip-2")]
        event = api_event("GET /trips")

        response = list_trips.lambda_handler(event, lambda_context)

        data = body_of(response)["data"]
        assert data["count"] == 2
        assert [t["tripId"] for t in data["trips"]] == ["trip-1", "trip-2"]
        assert data["trips"][0]["participantCount"] == 1
        service.list_upcoming.assert_not_called()

    def test_list_upcoming_trips(self, mock_service, api_event, lambda_context):
        service = mock_service(list_trips)
        service.list_upcoming.return_value = []
        event = api_event("GET /trips", query={"upcoming": "true"})

        response = list_trips.lambda_handler(event, lambda_context)

        assert body_of(response)["data"] == {"trips": [], "count": 0}
        service.list_upcoming.assert_called_once_with(UserId("user-owner"))


class TestParticipantsHandler:
    def test_add_participant(self, mock_service, api_event, lambda_context, create_trip):
        service = mock_service(participants)
        service.add.return_value = create_trip(members={"user-guest": ParticipantRole.VIEWER})
        event = api_event(
            "POST /trips/{trip_id}/participants",
            path_parameters={"trip_id": "trip-123"},
            body={"userId": "user-guest", "role": "viewer"},
        )

        response = participants.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        trip_id, _actor, user_id, role = service.add.call_args[0]
        assert (trip_id, user_id, role) == (TripId(value="trip-123"), UserId("user-guest"), "viewer")

    def test_change_role(self, mock_service, api_event, lambda_context, create_trip):
        service = mock_service(participants)
        service.change_role.return_value = create_trip()
        event = api_event(
            "PATCH /trips/{trip_id}/participants/{user_id}",
            path_parameters={"trip_id": "trip-123", "user_id": "user-guest"},
            body={"role": "organizer"},
        )

        participants.lambda_handler(event, lambda_context)

        _trip_id, _actor, user_id, role = service.change_role.call_args[0]
        assert (user_id, role) == (UserId("user-guest"), "organizer")

    def test_add_without_user_id_is_rejected(self, mock_service, api_event, lambda_context):
        service = mock_service(participants)
        event = api_event(
            "POST /trips/{trip_id}/participants",
            path_parameters={"trip_id": "trip-123"},
            body={"role": "viewer"},
        )

        response = participants.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400
        service.add.assert_not_called()

    def test_unknown_route(self, mock_service, api_event, lambda_context):
        mock_service(participants)
        event = api_event(
            "PUT /trips/{trip_id}/participants", path_parameters={"trip_id": "trip-123"}
        )

        response = participants.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400


class TestItineraryHandler:
    def test_add_activity(self, mock_service, api_event, lambda_context):
        service = mock_service(itinerary)
        service.add_activity.return_value.to_dict.return_value = {"activityId": "a-1"}
        event = api_event(
            "POST /trips/{trip_id}/days/{day_id}/activities",
            path_parameters={"trip_id": "trip-123", "day_id": "d-1"},
            body={"title": "Kinkaku-ji", "type": "attraction", "startTime": "2025-05-01T10:00:00"},
        )

        response = itinerary.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 201
        assert body_of(response)["data"] == {"activityId": "a-1"}
        _trip_id, _actor, day_id, payload = service.add_activity.call_args[0]
        assert day_id == "d-1"
        assert payload == {
            "title": "Kinkaku-ji",
            "type": "attraction",
            "start_time": "2025-05-01T10:00:00",
        }

    def test_remove_day(self, mock_service, api_event, lambda_context):
        service = mock_service(itinerary)
        event = api_event(
            "DELETE /trips/{trip_id}/days/{day_id}",
            path_parameters={"trip_id": "trip-123", "day_id": "d-1"},
        )

        response = itinerary.lambda_handler(event, lambda_context)

        assert body_of(response)["data"] == {"dayId": "d-1"}
        service.remove_day.assert_called_once()
