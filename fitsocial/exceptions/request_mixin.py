from typing import NoReturn

from starlette import status

from fitsocial.exceptions.api_error import APIError


class RequestExceptionsMixin:
    def follower_id_required(self) -> NoReturn:
        raise APIError(status.HTTP_400_BAD_REQUEST, detail='Follower ID is required')
