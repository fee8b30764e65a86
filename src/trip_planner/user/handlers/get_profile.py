from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.utils import api_response
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import actor_from_event
from trip_planner.trip.handlers.response_models import SuccessResponse
from trip_planner.user.applications.get_user import GetUserService
from trip_planner.user.infrastructure import DynamoDBUserRepository

logger = Logger()

service = GetUserService(repository=DynamoDBUserRepository())


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """自分のプロフィール取得 Lambda Handler"""
    actor = actor_from_event(event)
    logger.info("Fetching user profile", extra={"user_id": str(actor.user_id)})

    user = service.get(actor.user_id)
    return api_response(200, SuccessResponse(data=user.to_dict()).model_dump())
