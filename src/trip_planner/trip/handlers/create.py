from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.utils import api_response
from trip_planner.trip.applications.create_trip import CreateTripService
from trip_planner.trip.domain.factory import TripFactory
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import actor_from_event, json_body
from trip_planner.trip.handlers.request_models import CreateTripRequest
from trip_planner.trip.handlers.response_models import to_response
from trip_planner.trip.infrastructure import DynamoDBTripRepository

logger = Logger()

repository = DynamoDBTripRepository()
factory = TripFactory()
service = CreateTripService(repository=repository, factory=factory)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """旅行作成 Lambda Handler"""
    logger.info("Received create trip request")

    actor = actor_from_event(event)
    request = CreateTripRequest.model_validate(json_body(event))
    trip = service.create(actor, request.to_input())
    return api_response(201, to_response(trip))
