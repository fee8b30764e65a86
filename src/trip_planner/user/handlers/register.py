from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.utils import api_response
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import actor_from_event, json_body
from trip_planner.trip.handlers.request_models import RegisterUserRequest
from trip_planner.trip.handlers.response_models import SuccessResponse
from trip_planner.user.applications.register_user import RegisterUserService
from trip_planner.user.infrastructure import DynamoDBUserRepository

logger = Logger()

repository = DynamoDBUserRepository()
service = RegisterUserService(repository=repository)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """ユーザー登録 Lambda Handler（初回サインイン時に呼ばれる）"""
    actor = actor_from_event(event)
    request = RegisterUserRequest.model_validate(json_body(event))
    logger.info("Registering user", extra={"user_id": str(actor.user_id)})

    user = service.register(str(actor.user_id), actor.phone_number, request.display_name)
    return api_response(201, SuccessResponse(data=user.to_dict()).model_dump())
