from typing import Annotated

from fastapi import APIRouter, Body, Path

from fitsocial.exceptions import raise_for
from fitsocial.models.follow import FollowResult
from fitsocial.models.types import UserId
from fitsocial.queries.user_query import UserQuery
from fitsocial.responses.msgspec_response import MsgspecResponse
from fitsocial.services.user_follow_service import UserFollowService

router = APIRouter(prefix='/api/users', default_response_class=MsgspecResponse)

_FollowerIdBody = Annotated[UserId | None, Body(alias='followerId', embed=True)]


@router.get('')
async def list_users():
    return MsgspecResponse(await UserQuery.find_all())


@router.get('/{user_id}')
async def get_user(user_id: Annotated[UserId, Path(min_length=1)]):
    user = await UserQuery.find_one_by_id(user_id)
    if user is None:
        raise_for.user_not_found(user_id)
    return MsgspecResponse(user)


@router.post('/{user_id}/follow')
async def follow(
    user_id: Annotated[UserId, Path(min_length=1)],
    follower_id: _FollowerIdBody = None,
):
    """Make the follower follow the user."""
    if not follower_id:
        raise_for.follower_id_required()
    await UserFollowService.follow(follower_id, user_id)
    return MsgspecResponse(FollowResult(success=True))


@router.post('/{user_id}/unfollow')
async def unfollow(
    user_id: Annotated[UserId, Path(min_length=1)],
    follower_id: _FollowerIdBody = None,
):
    """Make the follower stop following the user."""
    if not follower_id:
        raise_for.follower_id_required()
    await UserFollowService.unfollow(follower_id, user_id)
    return MsgspecResponse(FollowResult(success=True))
