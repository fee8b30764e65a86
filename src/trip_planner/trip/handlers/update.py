from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.domain import TripId
from trip_planner.shared.utils import api_response
from trip_planner.trip.applications.update_trip import UpdateTripService
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import actor_from_event, json_body, path_parameter
from trip_planner.trip.handlers.request_models import UpdateTripRequest
from trip_planner.trip.handlers.response_models import to_response
from trip_planner.trip.infrastructure import DynamoDBTripRepository

logger = Logger()

repository = DynamoDBTripRepository()
service = UpdateTripService(repository=repository)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """旅行更新 Lambda Handler（マージパッチ）"""
    trip_id = TripId(value=path_parameter(event, "trip_id"))
    logger.info("Received update trip request", extra={"trip_id": str(trip_id)})

    actor = actor_from_event(event)
    request = UpdateTripRequest.model_validate(json_body(event))
    trip = service.update(trip_id, request.to_input(), actor)
    return api_response(200, to_response(trip))
