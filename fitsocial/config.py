from datetime import timedelta
from logging.config import dictConfig
from typing import Annotated, Literal

from githead import githead
from pydantic import BeforeValidator, Field

from fitsocial.lib.pydantic_settings_integration import pydantic_settings_integration


def _strip_validator(chars: str, /) -> BeforeValidator:
    """Create a validator that strips the given characters from the input text."""

    def validate(v):
        return str(v).strip(chars)

    return BeforeValidator(validate)


type _StripSlash = Annotated[str, _strip_validator('/')]

# -------------------- System Configuration --------------------

ENV: Literal['dev', 'test', 'prod'] = 'prod'
LOG_LEVEL: Literal['DEBUG', 'INFO', 'WARNING'] | None = None

# -------------------- Remote User Store --------------------

API_URL: _StripSlash = 'http://127.0.0.1:8000'
HTTP_TIMEOUT = timedelta(seconds=20)

# Populate the in-memory user table with demo accounts on startup
SEED_DEMO_USERS = True

# -------------------- View Cache --------------------

VIEW_CACHE_MAX_ENTRIES: int = Field(1024, gt=0)

pydantic_settings_integration(__name__, globals())

# -------------------- Constant or derived configuration --------------------

try:
    VERSION = 'git#' + githead()[:7]
except FileNotFoundError:
    VERSION = 'dev'  # pyright: ignore [reportConstantRedefinition]

NAME = 'fitsocial'
USER_AGENT = f'{NAME}/{VERSION}'

USERS_PATH = '/api/users'

if LOG_LEVEL is None:
    LOG_LEVEL = 'INFO' if ENV == 'prod' else 'DEBUG'  # pyright: ignore[reportConstantRedefinition]

# -------------------- Logging configuration --------------------

dictConfig({
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            '()': 'uvicorn.logging.DefaultFormatter',
            'fmt': '%(levelprefix)s | %(asctime)s | %(name)s %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'default': {
            'formatter': 'default',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        'root': {'handlers': ['default'], 'level': LOG_LEVEL},
        **{
            # reduce logging verbosity of some modules
            module: {'handlers': [], 'level': 'INFO'}
            for module in (
                'hpack',
                'httpx',
                'httpcore',
                'multipart',
                'python_multipart',
            )
        },
    },
})
