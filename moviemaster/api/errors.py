from fastapi import Request
from fastapi.responses import JSONResponse
from moviemaster.models.error import APIError
from moviemaster.core.exceptions import MovieStoreError

async def movie_store_error_handler(request: Request, exc: Exception):
    assert isinstance(exc, MovieStoreError)

    # Not-found bodies carry only the message.
    return JSONResponse(
        status_code=exc.status_code,
        content=APIError(
            message=exc.message,
            error=exc.error
        ).model_dump(exclude_none=True)
    )
