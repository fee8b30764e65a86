from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.domain import TripId
from trip_planner.shared.utils import api_response
from trip_planner.trip.applications.manage_itinerary import ManageItineraryService
from trip_planner.trip.domain.value_object import Actor
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import (
    BadRequestError,
    actor_from_event,
    json_body,
    path_parameter,
)
from trip_planner.trip.handlers.request_models import ActivityRequest, DayRequest
from trip_planner.trip.handlers.response_models import SuccessResponse
from trip_planner.trip.infrastructure import DynamoDBTripRepository

logger = Logger()

service = ManageItineraryService(repository=DynamoDBTripRepository())


def _add_day(event: APIGatewayProxyEventV2, trip_id: TripId, actor: Actor) -> tuple[int, dict]:
    request = DayRequest.model_validate(json_body(event))
    day = service.add_day(trip_id, actor, request.to_input())
    return 201, day.to_dict()


def _remove_day(
    event: APIGatewayProxyEventV2, trip_id: TripId, actor: Actor
) -> tuple[int, dict]:
    day_id = path_parameter(event, "day_id")
    service.remove_day(trip_id, actor, day_id)
    return 200, {"dayId": day_id}


def _add_activity(
    event: APIGatewayProxyEventV2, trip_id: TripId, actor: Actor
) -> tuple[int, dict]:
    request = ActivityRequest.model_validate(json_body(event))
    activity = service.add_activity(
        trip_id, actor, path_parameter(event, "day_id"), request.to_input()
    )
    return 201, activity.to_dict()


def _update_activity(
    event: APIGatewayProxyEventV2, trip_id: TripId, actor: Actor
) -> tuple[int, dict]:
    request = ActivityRequest.model_validate(json_body(event))
    activity = service.update_activity(
        trip_id,
        actor,
        path_parameter(event, "day_id"),
        path_parameter(event, "activity_id"),
        request.to_input(),
    )
    return 200, activity.to_dict()


def _remove_activity(
    event: APIGatewayProxyEventV2, trip_id: TripId, actor: Actor
) -> tuple[int, dict]:
    activity_id = path_parameter(event, "activity_id")
    service.remove_activity(trip_id, actor, path_parameter(event, "day_id"), activity_id)
    return 200, {"activityId": activity_id}


# API Gateway のルートキー → 処理
_ROUTES = {
    "POST /trips/{trip_id}/days": _add_day,
    "DELETE /trips/{trip_id}/days/{day_id}": _remove_day,
    "POST /trips/{trip_id}/days/{day_id}/activities": _add_activity,
    "PATCH /trips/{trip_id}/days/{day_id}/activities/{activity_id}": _update_activity,
    "DELETE /trips/{trip_id}/days/{day_id}/activities/{activity_id}": _remove_activity,
}


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """旅程（Day / Activity）管理 Lambda Handler"""
    route = _ROUTES.get(event.route_key)
    if route is None:
        raise BadRequestError(f"Unsupported route: {event.route_key}")

    trip_id = TripId(value=path_parameter(event, "trip_id"))
    logger.info("Received itinerary request", extra={"trip_id": str(trip_id), "route": event.route_key})
    status_code, data = route(event, trip_id, actor_from_event(event))
    return api_response(status_code, SuccessResponse(data=data).model_dump())
