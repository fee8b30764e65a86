from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from trip_planner.shared.utils import api_response
from trip_planner.trip.applications import SyncParticipantProfileService
from trip_planner.trip.handlers.errors import handle_errors
from trip_planner.trip.handlers.identity import actor_from_event, json_body
from trip_planner.trip.handlers.request_models import UpdateProfileRequest
from trip_planner.trip.handlers.response_models import SuccessResponse
from trip_planner.trip.infrastructure import DynamoDBTripRepository
from trip_planner.user.applications.update_profile import UpdateUserProfileService
from trip_planner.user.infrastructure import DynamoDBUserRepository

logger = Logger()

service = UpdateUserProfileService(
    repository=DynamoDBUserRepository(),
    participant_sync=SyncParticipantProfileService(repository=DynamoDBTripRepository()),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors(logger)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """プロフィール更新 Lambda Handler（参加中の旅行の参加者情報にも反映する）"""
    actor = actor_from_event(event)
    request = UpdateProfileRequest.model_validate(json_body(event))
    logger.info("Updating user profile", extra={"user_id": str(actor.user_id)})

    user = service.update(
        actor.user_id,
        display_name=request.display_name,
        phone_number=request.phone_number,
    )
    return api_response(200, SuccessResponse(data=user.to_dict()).model_dump())
