class IdentityUnresolvedError(ValueError):
    """The viewer or the target of a follow toggle is not known."""


class SelfFollowError(ValueError):
    pass


class FollowPendingError(RuntimeError):
    """A follow toggle for the same viewer and target is already in flight."""
