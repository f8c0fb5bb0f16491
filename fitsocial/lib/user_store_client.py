import logging
from typing import Any

import cython
from httpx import AsyncClient, HTTPError, Response
from msgspec import DecodeError

from fitsocial.config import API_URL, USERS_PATH
from fitsocial.exceptions.user_store_error import UserStoreError
from fitsocial.models.follow import FollowAction, FollowResult
from fitsocial.models.types import UserId
from fitsocial.models.user import User
from fitsocial.utils import HTTP, JSON_DECODE


class UserStoreClient:
    """Client of the remote user store, the source of truth for users and follows."""

    __slots__ = ('_base_url', '_http')

    def __init__(self, http: AsyncClient = HTTP, base_url: str = API_URL) -> None:
        self._http = http
        self._base_url = base_url.rstrip('/')

    async def list_users(self) -> tuple[User, ...]:
        r = await self._request('GET', USERS_PATH)
        return _decode(r, tuple[User, ...])

    async def get_user(self, user_id: UserId) -> User:
        r = await self._request('GET', f'{USERS_PATH}/{user_id}')
        return _decode(r, User)

    async def follow_user(self, target_id: UserId, viewer_id: UserId) -> FollowResult:
        """Make the viewer follow the target."""
        return await self._follow_request('follow', target_id, viewer_id)

    async def unfollow_user(self, target_id: UserId, viewer_id: UserId) -> FollowResult:
        """Make the viewer stop following the target."""
        return await self._follow_request('unfollow', target_id, viewer_id)

    async def _follow_request(
        self, action: FollowAction, target_id: UserId, viewer_id: UserId
    ) -> FollowResult:
        r = await self._request(
            'POST',
            f'{USERS_PATH}/{target_id}/{action}',
            json={'followerId': viewer_id},
        )
        result = _decode(r, FollowResult)
        if not result.success:
            raise UserStoreError(r.status_code, f'Failed to {action} user')
        return result

    async def _request(self, method: str, path: str, **kwargs: Any) -> Response:
        try:
            r = await self._http.request(method, self._base_url + path, **kwargs)
        except HTTPError as e:
            logging.info('User store request %s %s failed', method, path, exc_info=True)
            raise UserStoreError(None, str(e) or type(e).__name__) from e

        if not r.is_success:
            raise UserStoreError(r.status_code, _error_detail(r))
        return r


def _decode(r: Response, type_: Any) -> Any:
    try:
        return JSON_DECODE(r.content, type=type_)
    except DecodeError as e:
        raise UserStoreError(r.status_code, f'Invalid response: {e}') from e


@cython.cfunc
def _error_detail(r: Response) -> str:
    """Get the error message of a failed response, preferring the JSON detail."""
    try:
        body = JSON_DECODE(r.content)
    except DecodeError:
        body = None

    if isinstance(body, dict):
        for field in ('detail', 'error'):
            value = body.get(field)
            if isinstance(value, str) and value:
                return value

    return r.text or r.reason_phrase
