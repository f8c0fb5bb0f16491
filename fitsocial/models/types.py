from typing import NewType

UserId = NewType('UserId', str)

# ('/api/users', user_id) and '/api/users/{user_id}' address the same resource
type CacheKey = tuple[str, ...] | str
