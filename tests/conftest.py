from collections.abc import Collection

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fitsocial.db import db_reset, demo_users
from fitsocial.lib.user_store_client import UserStoreClient
from fitsocial.lib.view_cache import ViewCache
from fitsocial.main import main
from fitsocial.utils import HTTP_EVENT_HOOKS

BASE_URL = 'http://127.0.0.1:8000'


def pytest_collection_modifyitems(config: pytest.Config, items: Collection[pytest.Item]):
    # run all tests in the session in the same event loop
    # https://pytest-asyncio.readthedocs.io/en/latest/how-to-guides/run_session_tests_in_same_loop.html
    session_scope_marker = pytest.mark.asyncio(loop_scope='session')
    for item in items:
        if pytest_asyncio.is_async_test(item):
            item.add_marker(session_scope_marker, append=False)


@pytest_asyncio.fixture
async def users():
    await db_reset(demo_users())


@pytest.fixture
def transport() -> ASGITransport:
    return ASGITransport(main)  # pyright: ignore[reportArgumentType]


@pytest_asyncio.fixture
async def client(transport: ASGITransport, users):
    async with AsyncClient(
        base_url=BASE_URL,
        transport=transport,
        event_hooks=HTTP_EVENT_HOOKS,
    ) as client:
        yield client


@pytest.fixture
def store(client: AsyncClient) -> UserStoreClient:
    return UserStoreClient(client, BASE_URL)


@pytest.fixture
def cache() -> ViewCache:
    return ViewCache(64)
