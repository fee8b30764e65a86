from trip_planner.shared.domain import ResourceNotFoundException, UserId
from trip_planner.user.domain.entity import User
from trip_planner.user.domain.repository import UserRepository


class GetUserService:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def get(self, user_id: UserId) -> User:
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", str(user_id))
        return user
