from fitsocial.lib.cache_keys import USER_KEYS, KeyAliases
from fitsocial.lib.user_store_client import UserStoreClient
from fitsocial.lib.view_cache import ViewCache
from fitsocial.models.types import UserId
from fitsocial.models.user import User


class UserViewService:
    """Read path of the user views, filling the view cache from the remote store."""

    __slots__ = ('_aliases', '_cache', '_client')

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

    async def get_user(self, user_id: UserId) -> User:
        """
        Get a user, fetching it when missing or stale.
        The fetched value is mirrored into the other aliases that need it,
        unless the fetch was cancelled and the primary key does not hold it fresh.
        """
        cache = self._cache
        primary, *others = self._aliases.entity_keys(user_id)
        user: User = await cache.fetch(primary, lambda: self._client.get_user(user_id))
        if cache.get(primary) is not user or cache.is_stale(primary):
            return user
        for key in others:
            if cache.is_stale(key):
                cache.set(key, user)
        return user

    async def list_users(self) -> tuple[User, ...]:
        """Get all users, fetching the list when missing or stale."""
        return await self._cache.fetch(
            self._aliases.list_keys[0], self._client.list_users
        )

    def is_following(self, viewer_id: UserId, target_id: UserId) -> bool:
        """
        Check from cached data whether the viewer follows the target.
        Looks at the viewer aliases first, then at the viewer rows of cached lists.
        """
        cache = self._cache
        for key in self._aliases.entity_keys(viewer_id):
            viewer: User | None = cache.get(key)
            if viewer is not None:
                return target_id in viewer.following

        for key in self._aliases.list_keys:
            users: tuple[User, ...] | None = cache.get(key)
            if users is None:
                continue
            for user in users:
                if user.id == viewer_id:
                    return target_id in user.following

        return False
