from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.domain import TripId
from trip_planner.shared.utils import api_response
from trip_planner.trip.applications.get_trip import GetTripService
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import actor_from_event, path_parameter
from trip_planner.trip.handlers.response_models import to_response
from trip_planner.trip.infrastructure import DynamoDBTripRepository
from trip_planner.user.infrastructure import DynamoDBUserRepository

logger = Logger()

service = GetTripService(
    repository=DynamoDBTripRepository(), user_repository=DynamoDBUserRepository()
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """旅行詳細取得 Lambda Handler"""
    trip_id = TripId(value=path_parameter(event, "trip_id"))
    logger.info("Fetching trip details", extra={"trip_id": str(trip_id)})

    trip = service.get(trip_id, actor_from_event(event))
    return api_response(200, to_response(trip))
