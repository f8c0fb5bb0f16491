import logging

import cython
from msgspec.structs import replace

from fitsocial.db import db
from fitsocial.exceptions import raise_for
from fitsocial.models.types import UserId
from fitsocial.models.user import User


class UserFollowService:
    @staticmethod
    async def follow(follower_id: UserId, target_user_id: UserId) -> None:
        """
        Follow a user.
        - Prevents self-follow
        - Updates both the follower and the followee
        - Idempotent (no duplicates if already following)
        """
        if follower_id == target_user_id:
            raise_for.user_self_follow()

        async with db(True) as table:
            follower, target = _find_pair(table, follower_id, target_user_id)

            if target_user_id not in follower.following:
                table[follower_id] = replace(
                    follower, following=(*follower.following, target_user_id)
                )
            if follower_id not in target.followers:
                table[target_user_id] = replace(
                    target, followers=(*target.followers, follower_id)
                )

        logging.debug('User %s followed user %s', follower_id, target_user_id)

    @staticmethod
    async def unfollow(follower_id: UserId, target_user_id: UserId) -> None:
        """
        Unfollow a user.
        - Idempotent (no error if not following)
        """
        async with db(True) as table:
            follower, target = _find_pair(table, follower_id, target_user_id)

            table[follower_id] = replace(
                follower,
                following=tuple(i for i in follower.following if i != target_user_id),
            )
            table[target_user_id] = replace(
                target,
                followers=tuple(i for i in target.followers if i != follower_id),
            )

        logging.debug('User %s unfollowed user %s', follower_id, target_user_id)


@cython.cfunc
def _find_pair(
    table: dict[UserId, User], follower_id: UserId, target_user_id: UserId
) -> tuple[User, User]:
    follower = table.get(follower_id)
    if follower is None:
        raise_for.user_not_found(follower_id)
    target = table.get(target_user_id)
    if target is None:
        raise_for.user_not_found(target_user_id)
    return follower, target
