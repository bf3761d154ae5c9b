from fastapi import Request

from moviemaster.core.movie_service import MovieService


def get_movie_service(request: Request) -> MovieService:
    """
    Every movie request first makes sure the shared connection is up. Once it
    is, this is a flag check; until then each request retries, and a failed
    attempt is logged and surfaces from the store call as a 500.
    """
    request.app.state.connection.ensure_connected()
    return request.app.state.movie_service
