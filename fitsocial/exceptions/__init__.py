from fitsocial.exceptions.request_mixin import RequestExceptionsMixin
from fitsocial.exceptions.user_mixin import UserExceptionsMixin


class Exceptions(
    RequestExceptionsMixin,
    UserExceptionsMixin,
): ...


raise_for = Exceptions()
