import logging
from typing import Literal

import cython
from msgspec.structs import replace

from fitsocial.exceptions.follow_sync_error import (
    FollowPendingError,
    IdentityUnresolvedError,
    SelfFollowError,
)
from fitsocial.lib.cache_keys import USER_KEYS, KeyAliases
from fitsocial.lib.optimistic import optimistic
from fitsocial.lib.user_store_client import UserStoreClient
from fitsocial.lib.view_cache import ViewCache
from fitsocial.models.follow import FollowAction
from fitsocial.models.types import UserId
from fitsocial.models.user import User
from fitsocial.services.user_view_service import UserViewService


class FollowSyncService:
    """
    Keeps every cached view of a follow relationship consistent across the remote mutation.

    The cache is patched before the request is sent, so readers see the new state right away.
    On success the touched keys are invalidated and converge to the server state on the next read.
    On failure every touched key is restored to the entry it held before the patch,
    and the error is re-raised to the caller.
    """

    __slots__ = ('_aliases', '_cache', '_client', '_pending', '_views')

    def __init__(
        self,
        cache: ViewCache,
        client: UserStoreClient,
        *,
        aliases: KeyAliases = USER_KEYS,
    ) -> None:
        self._cache = cache
        self._client = client
        self._aliases = aliases
        self._views = UserViewService(cache, client, aliases=aliases)
        self._pending: set[tuple[UserId, UserId]] = set()

    def is_pending(self, viewer_id: UserId, target_id: UserId) -> bool:
        return (viewer_id, target_id) in self._pending

    async def toggle_follow(self, viewer_id: UserId | None, target_id: UserId) -> None:
        """Follow the target if the viewer does not follow it yet, unfollow it otherwise."""
        if not viewer_id:
            raise IdentityUnresolvedError('Viewer identity must be resolved before following')
        if not target_id:
            raise IdentityUnresolvedError('Target user id is required')
        if viewer_id == target_id:
            raise SelfFollowError(f'User {viewer_id} cannot follow themselves')

        pair = (viewer_id, target_id)
        if pair in self._pending:
            raise FollowPendingError(f'Follow of {target_id} by {viewer_id} is already in progress')

        self._pending.add(pair)
        try:
            await self._toggle(viewer_id, target_id)
        finally:
            self._pending.discard(pair)

    async def _toggle(self, viewer_id: UserId, target_id: UserId) -> None:
        following = self._views.is_following(viewer_id, target_id)
        action: FollowAction = 'unfollow' if following else 'follow'
        keys = self._aliases.keys_for(viewer_id, target_id)

        try:
            async with optimistic(self._cache, keys):
                self._patch(viewer_id, target_id, add=not following)
                logging.debug('Optimistic %s of %s by %s', action, target_id, viewer_id)

                if following:
                    await self._client.unfollow_user(target_id, viewer_id)
                else:
                    await self._client.follow_user(target_id, viewer_id)
        except Exception:
            logging.info('Rolled back %s of %s by %s', action, target_id, viewer_id, exc_info=True)
            raise

        logging.debug('Committed %s of %s by %s', action, target_id, viewer_id)

    def _patch(self, viewer_id: UserId, target_id: UserId, *, add: bool) -> None:
        """Apply the relationship change to every cached copy of the viewer and the target."""
        cache = self._cache
        aliases = self._aliases

        for key in aliases.entity_keys(viewer_id):
            viewer: User | None = cache.get(key)
            if viewer is not None:
                cache.set(key, _with_member(viewer, 'following', target_id, add))

        for key in aliases.entity_keys(target_id):
            target: User | None = cache.get(key)
            if target is not None:
                cache.set(key, _with_member(target, 'followers', viewer_id, add))

        for key in aliases.list_keys:
            users: tuple[User, ...] | None = cache.get(key)
            if users is None:
                continue

            changed: cython.bint = False
            patched: list[User] = []
            for user in users:
                if user.id == viewer_id:
                    user = _with_member(user, 'following', target_id, add)
                    changed = True
                elif user.id == target_id:
                    user = _with_member(user, 'followers', viewer_id, add)
                    changed = True
                patched.append(user)

            if changed:
                cache.set(key, tuple(patched))


@cython.cfunc
def _with_member(
    user: User,
    field: Literal['followers', 'following'],
    member: UserId,
    add: cython.bint,
) -> User:
    """Get a copy of the user with the member added to or removed from the id list."""
    current: tuple[UserId, ...] = getattr(user, field)
    if add:
        if member in current:
            return user
        return replace(user, **{field: (*current, member)})
    return replace(user, **{field: tuple(i for i in current if i != member)})
