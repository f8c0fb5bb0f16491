from fitsocial.db import db
from fitsocial.models.types import UserId
from fitsocial.models.user import User


class UserQuery:
    @staticmethod
    async def find_one_by_id(user_id: UserId) -> User | None:
        """Find a user by id."""
        async with db() as table:
            return table.get(user_id)

    @staticmethod
    async def find_all() -> list[User]:
        """Find all users, in registration order."""
        async with db() as table:
            return list(table.values())
