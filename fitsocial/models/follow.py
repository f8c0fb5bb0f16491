from typing import Literal

import msgspec

FollowAction = Literal['follow', 'unfollow']


class FollowResult(msgspec.Struct):
    success: bool
