class MovieStoreError(Exception):
    status_code = 500
    message = "Movie store operation failed"

    def __init__(self, message: str | None = None, error: str | None = None):
        self.message = message or self.message
        self.error = error
        super().__init__(self.message)

class MovieNotFoundError(MovieStoreError):
    status_code = 404
    message = "Movie not found"

class StoreOperationError(MovieStoreError):
    message = "Error accessing movies"

class StoreUnavailableError(MovieStoreError):
    message = "Database connection unavailable"
