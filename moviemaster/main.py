import logging
from contextlib import asynccontextmanager
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from moviemaster.api.errors import movie_store_error_handler
from moviemaster.api.routes import health, movies
from moviemaster.core.config import Settings
from moviemaster.core.database import MongoConnection
from moviemaster.core.exceptions import MovieStoreError
from moviemaster.core.movie_service import MovieService

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    connection: Optional[MongoConnection] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    # No-op when the server or test runner already configured the root logger.
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    connection = connection or MongoConnection(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings
        app.state.connection = connection
        app.state.movie_service = MovieService(connection)

        if not settings.lazy_connect:
            connection.ensure_connected()
        try:
            yield
        finally:
            connection.close()

    app = FastAPI(
        title="MovieMaster Pro",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = perf_counter()
        response = await call_next(request)
        took_ms = (perf_counter() - start_time) * 1000
        logger.info(
            "%s %s %s %.2fms",
            request.method,
            request.url.path,
            response.status_code,
            took_ms,
        )
        return response

    app.include_router(health.router, tags=["health"])
    app.include_router(movies.router, prefix="/movies", tags=["movies"])
    app.add_exception_handler(MovieStoreError, movie_store_error_handler)

    return app


settings = Settings.from_env()
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
