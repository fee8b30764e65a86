import json
from unittest.mock import MagicMock

from trip_planner.shared.domain import DuplicateResourceException
from trip_planner.user.domain.entity import User
from trip_planner.user.handlers import register


class TestRegisterHandler:
    def test_registers_caller(self, monkeypatch, api_event, lambda_context, clock):
        service = MagicMock()
        service.register.return_value = User.from_dict(
            {
                "userId": "user-owner",
                "phoneNumber": "+819000000000",
                "displayName": "Owner",
                "createdAt": str(clock()),
                "updatedAt": str(clock()),
            }
        )
        monkeypatch.setattr(register, "service", service)
        event = api_event("POST /users", body={"displayName": "Owner"})

        response = register.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 201
        assert json.loads(response["body"])["data"]["userId"] == "user-owner"
        service.register.assert_called_once_with("user-owner", "+819000000000", "Owner")

    def test_already_registered(self, monkeypatch, api_event, lambda_context):
        service = MagicMock()
        service.register.side_effect = DuplicateResourceException("exists")
        monkeypatch.setattr(register, "service", service)
        event = api_event("POST /users", body={"displayName": "Owner"})

        response = register.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 409
