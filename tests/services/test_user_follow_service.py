import pytest
from fastapi import HTTPException
from starlette import status

from fitsocial.db import db_reset
from fitsocial.models.types import UserId
from fitsocial.models.user import User
from fitsocial.queries.user_query import UserQuery
from fitsocial.services.user_follow_service import UserFollowService


def _user(user_id: str, **kwargs) -> User:
    return User(
        id=UserId(user_id),
        name=user_id,
        username=user_id,
        email=f'{user_id}@example.com',
        **kwargs,
    )


async def test_follow_keeps_both_sides_consistent():
    await db_reset([
        _user('v1'),
        _user('t1', followers=(UserId('v2'),)),
        _user('v2', following=(UserId('t1'),)),
    ])

    await UserFollowService.follow(UserId('v1'), UserId('t1'))

    v1 = await UserQuery.find_one_by_id(UserId('v1'))
    t1 = await UserQuery.find_one_by_id(UserId('t1'))
    assert v1 is not None and t1 is not None
    assert v1.following == ('t1',)
    assert t1.followers == ('v2', 'v1')
    assert v1.followers == ()
    assert t1.following == ()


async def test_unfollow_idempotent():
    await db_reset([_user('v1'), _user('t1')])

    await UserFollowService.unfollow(UserId('v1'), UserId('t1'))
    await UserFollowService.follow(UserId('v1'), UserId('t1'))
    await UserFollowService.unfollow(UserId('v1'), UserId('t1'))
    await UserFollowService.unfollow(UserId('v1'), UserId('t1'))

    assert await UserQuery.find_one_by_id(UserId('v1')) == _user('v1')
    assert await UserQuery.find_one_by_id(UserId('t1')) == _user('t1')


async def test_follow_missing_user():
    await db_reset([_user('v1')])

    with pytest.raises(HTTPException) as e:
        await UserFollowService.follow(UserId('v1'), UserId('t1'))
    assert e.value.status_code == status.HTTP_404_NOT_FOUND

    # nothing is written when the target is missing
    assert await UserQuery.find_one_by_id(UserId('v1')) == _user('v1')


async def test_self_follow_rejected():
    await db_reset([_user('v1')])

    with pytest.raises(HTTPException) as e:
        await UserFollowService.follow(UserId('v1'), UserId('v1'))
    assert e.value.status_code == status.HTTP_400_BAD_REQUEST
