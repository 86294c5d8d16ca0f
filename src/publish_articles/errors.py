class AuthorizationError(Exception):
    """The caller matched no authorization tier. Fatal for the whole request."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
