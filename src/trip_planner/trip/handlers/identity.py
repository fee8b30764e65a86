from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEventV2

from trip_planner.trip.domain.value_object import Actor


class UnauthorizedError(Exception):
    """認証情報（JWT クレーム）がリクエストに含まれていない"""


class BadRequestError(Exception):
    """パスパラメータなど、リクエストの形式が不正"""


def actor_from_event(event: APIGatewayProxyEventV2) -> Actor:
    """JWT オーソライザーのクレームから操作ユーザーを組み立てる

    認証は API Gateway で完了している前提で、クレームはそのまま信頼する。
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    claims = (authorizer.get("jwt") or {}).get("claims") or {}
    user_id = claims.get("sub")
    if not user_id:
        raise UnauthorizedError("Missing subject claim")
    return Actor.of(
        user_id=user_id,
        phone_number=claims.get("phone_number", ""),
        display_name=claims.get("name", ""),
    )


def path_parameter(event: APIGatewayProxyEventV2, name: str) -> str:
    value = (event.path_parameters or {}).get(name)
    if not value:
        raise BadRequestError(f"{name} is required")
    return value


def json_body(event: APIGatewayProxyEventV2) -> dict:
    if not event.body:
        return {}
    return event.json_body
