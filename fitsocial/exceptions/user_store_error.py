class UserStoreError(Exception):
    """The remote user store rejected a request or could not be reached."""

    def __init__(self, status_code: int | None, detail: str) -> None:
        super().__init__(
            f'{status_code}: {detail}' if status_code is not None else detail
        )
        self.status_code = status_code
        self.detail = detail
