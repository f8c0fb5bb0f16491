from typing import NoReturn

from starlette import status

from fitsocial.exceptions.api_error import APIError
from fitsocial.models.types import UserId


class UserExceptionsMixin:
    def user_not_found(self, user_id: UserId) -> NoReturn:
        raise APIError(status.HTTP_404_NOT_FOUND, detail=f'User {user_id} not found')

    def user_self_follow(self) -> NoReturn:
        raise APIError(status.HTTP_400_BAD_REQUEST, detail='Users cannot follow themselves')
