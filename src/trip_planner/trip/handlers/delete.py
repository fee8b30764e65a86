from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.domain import TripId
from trip_planner.shared.utils import api_response
from trip_planner.trip.applications.delete_trip import DeleteTripService
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import actor_from_event, path_parameter
from trip_planner.trip.handlers.response_models import SuccessResponse
from trip_planner.trip.infrastructure import DynamoDBTripRepository

logger = Logger()

repository = DynamoDBTripRepository()
service = DeleteTripService(repository=repository)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """旅行削除 Lambda Handler"""
    trip_id = TripId(value=path_parameter(event, "trip_id"))
    logger.info("Received delete trip request", extra={"trip_id": str(trip_id)})

    service.delete(trip_id, actor_from_event(event))
    return api_response(200, SuccessResponse(data={"tripId": str(trip_id)}).model_dump())
