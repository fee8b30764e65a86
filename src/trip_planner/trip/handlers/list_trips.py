from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.utils import api_response
from trip_planner.trip.applications.get_trip import GetTripService
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import actor_from_event
from trip_planner.trip.handlers.response_models import to_list_response
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
    """参加中の旅行一覧取得 Lambda Handler

    ?upcoming=true の場合はこれから始まる旅行のみ、開始日の近い順で返す。
    """
    actor = actor_from_event(event)
    upcoming = (event.query_string_parameters or {}).get("upcoming") == "true"
    logger.info("Listing trips", extra={"user_id": str(actor.user_id), "upcoming": upcoming})

    if upcoming:
        trips = service.list_upcoming(actor.user_id)
    else:
        trips = service.list_for_user(actor.user_id)
    return api_response(200, to_list_response(trips))
