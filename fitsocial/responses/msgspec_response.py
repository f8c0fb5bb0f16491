from typing import Any, override

from fastapi import Response

from fitsocial.utils import JSON_ENCODE


class MsgspecResponse(Response):
    """JSON response encoded with msgspec, for struct and plain payloads."""

    media_type = 'application/json'

    @override
    def render(self, content: Any) -> bytes:
        return JSON_ENCODE(content)
