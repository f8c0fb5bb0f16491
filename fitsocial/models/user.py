from datetime import datetime

import msgspec

from fitsocial.models.types import UserId


class User(msgspec.Struct, frozen=True, rename='camel', kw_only=True):
    id: UserId
    name: str
    username: str
    email: str
    avatar: str | None = None
    bio: str | None = None
    fitness_goals: tuple[str, ...] = ()
    followers: tuple[UserId, ...] = ()
    following: tuple[UserId, ...] = ()
    is_verified: bool = False
    created_at: datetime | None = None
