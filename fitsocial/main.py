import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

import fitsocial.lib.sentry  # noqa: F401
from fitsocial.config import ENV, NAME, SEED_DEMO_USERS, VERSION
from fitsocial.controllers.users import router as users_router
from fitsocial.db import db_reset, demo_users

# log when in test environment
if ENV != 'prod':
    logging.info('Running in %s environment', ENV)


@asynccontextmanager
async def lifespan(_):
    if SEED_DEMO_USERS:
        await db_reset(demo_users())
    yield


main = FastAPI(
    debug=ENV != 'prod',
    title=NAME,
    version=VERSION,
    lifespan=lifespan,
)

main.include_router(users_router)
