import logging
from asyncio import Lock
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import datetime

from fitsocial.models.types import UserId
from fitsocial.models.user import User

type UserTable = dict[UserId, User]

_USERS: UserTable = {}
_WRITE_LOCK = Lock()


@asynccontextmanager
async def db(write: bool = False, /) -> AsyncIterator[UserTable]:
    """
    Get the user table.
    Writers are serialized; every write must replace whole rows.
    """
    if not write:
        yield _USERS
        return

    async with _WRITE_LOCK:
        yield _USERS


async def db_reset(users: Iterable[User] = ()) -> None:
    """Replace the user table contents."""
    async with db(True) as table:
        table.clear()
        table.update((user.id, user) for user in users)
        logging.debug('User table reset with %d users', len(table))


def demo_users() -> list[User]:
    """Sample accounts with a consistent follow graph."""
    return [
        User(
            id=UserId('user1'),
            name='Sarah Mitchell',
            username='sarahfitness',
            email='sarah@example.com',
            bio='Fitness enthusiast, personal trainer and nutrition coach',
            fitness_goals=('Weight Loss', 'Strength Training'),
            followers=(UserId('user2'), UserId('user3'), UserId('user4')),
            following=(UserId('user2'), UserId('user3')),
            is_verified=True,
            created_at=datetime(2024, 1, 15),
        ),
        User(
            id=UserId('user2'),
            name='Mike Rodriguez',
            username='mikestrong',
            email='mike@example.com',
            bio='Nutritionist and meal prep expert',
            fitness_goals=('Muscle Building', 'Nutrition'),
            followers=(UserId('user1'), UserId('user3'), UserId('user4')),
            following=(UserId('user1'), UserId('user3')),
            is_verified=True,
            created_at=datetime(2024, 1, 10),
        ),
        User(
            id=UserId('user3'),
            name='Emma Thompson',
            username='emmatransform',
            email='emma@example.com',
            bio='Transformation coach',
            fitness_goals=('Weight Loss', 'Body Recomposition'),
            followers=(UserId('user1'), UserId('user2')),
            following=(UserId('user1'), UserId('user2'), UserId('user4')),
            created_at=datetime(2024, 1, 20),
        ),
        User(
            id=UserId('user4'),
            name='Jessica Chen',
            username='jessyoga',
            email='jessica@example.com',
            bio='Yoga instructor and HIIT specialist',
            fitness_goals=('Flexibility', 'Cardio Fitness'),
            followers=(UserId('user3'),),
            following=(UserId('user1'), UserId('user2')),
            created_at=datetime(2024, 1, 25),
        ),
    ]
