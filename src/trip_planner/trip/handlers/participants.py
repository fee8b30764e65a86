from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.domain import TripId, UserId
from trip_planner.shared.utils import api_response
from trip_planner.trip.applications.manage_participants import ManageParticipantsService
from trip_planner.trip.applications.update_trip import UpdateTripService
from trip_planner.trip.domain.entity import Trip
from trip_planner.trip.domain.value_object import Actor
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import (
    BadRequestError,
    actor_from_event,
    json_body,
    path_parameter,
)
from trip_planner.trip.handlers.request_models import AddParticipantRequest, ChangeRoleRequest
from trip_planner.trip.handlers.response_models import to_response
from trip_planner.trip.infrastructure import DynamoDBTripRepository
from trip_planner.user.infrastructure import DynamoDBUserRepository

logger = Logger()

service = ManageParticipantsService(
    update_service=UpdateTripService(repository=DynamoDBTripRepository()),
    user_repository=DynamoDBUserRepository(),
)


def _add(event: APIGatewayProxyEventV2, trip_id: TripId, actor: Actor) -> Trip:
    request = AddParticipantRequest.model_validate(json_body(event))
    return service.add(trip_id, actor, UserId(request.user_id), request.role)


def _remove(event: APIGatewayProxyEventV2, trip_id: TripId, actor: Actor) -> Trip:
    return service.remove(trip_id, actor, UserId(path_parameter(event, "user_id")))


def _change_role(event: APIGatewayProxyEventV2, trip_id: TripId, actor: Actor) -> Trip:
    request = ChangeRoleRequest.model_validate(json_body(event))
    return service.change_role(
        trip_id, actor, UserId(path_parameter(event, "user_id")), request.role
    )


# API Gateway のルートキー → 処理
_ROUTES = {
    "POST /trips/{trip_id}/participants": _add,
    "DELETE /trips/{trip_id}/participants/{user_id}": _remove,
    "PATCH /trips/{trip_id}/participants/{user_id}": _change_role,
}


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """参加者管理 Lambda Handler"""
    route = _ROUTES.get(event.route_key)
    if route is None:
        raise BadRequestError(f"Unsupported route: {event.route_key}")

    trip_id = TripId(value=path_parameter(event, "trip_id"))
    logger.info(
        "Received participant request",
        extra={"trip_id": str(trip_id), "route": event.route_key},
    )
    trip = route(event, trip_id, actor_from_event(event))
    return api_response(200, to_response(trip))
