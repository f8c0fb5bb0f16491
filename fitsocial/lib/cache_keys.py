from collections.abc import Callable, Hashable

from fitsocial.config import USERS_PATH
from fitsocial.models.types import CacheKey


class KeyAliases:
    """
    Registry of the cache keys under which one kind of entity is stored.
    Each alias family maps an entity id to one concrete key;
    list keys hold collections that may contain any entity of the kind.
    """

    __slots__ = ('_families', 'list_keys')

    def __init__(
        self,
        *families: Callable[[Hashable], CacheKey],
        list_keys: tuple[CacheKey, ...] = (),
    ) -> None:
        if not families:
            raise ValueError('At least one alias family is required')
        self._families = families
        self.list_keys = list_keys

    def entity_keys(self, entity_id: Hashable) -> tuple[CacheKey, ...]:
        """Get every key that may hold a copy of the entity, in family order."""
        return tuple(family(entity_id) for family in self._families)

    def primary_key(self, entity_id: Hashable) -> CacheKey:
        return self._families[0](entity_id)

    def keys_for(self, *entity_ids: Hashable) -> tuple[CacheKey, ...]:
        """
        Get the keys of all the given entities followed by the list keys.

        >>> USER_KEYS.keys_for('u1')
        (('/api/users', 'u1'), '/api/users/u1', ('/api/users',))
        """
        result: dict[CacheKey, None] = {}
        for entity_id in entity_ids:
            result.update(dict.fromkeys(self.entity_keys(entity_id)))
        result.update(dict.fromkeys(self.list_keys))
        return tuple(result)


USER_KEYS = KeyAliases(
    lambda user_id: (USERS_PATH, user_id),
    lambda user_id: f'{USERS_PATH}/{user_id}',
    list_keys=((USERS_PATH,),),
)
