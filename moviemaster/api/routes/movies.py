from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from moviemaster.api.deps import get_movie_service
from moviemaster.core.movie_service import MovieService
from moviemaster.models.error import APIError
from moviemaster.models.movie import movie_to_json

NOT_FOUND = {404: {"model": APIError}}
STORE_ERROR = {500: {"model": APIError}}

router = APIRouter(responses=STORE_ERROR)

# Fixed paths must be registered before /{movie_id}.

@router.get("/top-rated")
def top_rated(service: MovieService = Depends(get_movie_service)) -> List[Dict[str, Any]]:
    return [movie_to_json(d) for d in service.top_rated()]

@router.get("/recent")
def recent(service: MovieService = Depends(get_movie_service)) -> List[Dict[str, Any]]:
    return [movie_to_json(d) for d in service.recent()]

@router.get("/user/{email}")
def by_user(email: str, service: MovieService = Depends(get_movie_service)) -> List[Dict[str, Any]]:
    return [movie_to_json(d) for d in service.by_user(email)]

@router.get("/{movie_id}", responses=NOT_FOUND)
def get_movie(movie_id: str, service: MovieService = Depends(get_movie_service)) -> Dict[str, Any]:
    return movie_to_json(service.get(movie_id))

@router.get("")
def list_movies(service: MovieService = Depends(get_movie_service)) -> List[Dict[str, Any]]:
    return [movie_to_json(d) for d in service.list_all()]

# Bodies are taken as raw JSON and cast by the service, so an absent body
# or a value the movie fields cannot hold never turns into a 422.
@router.post("")
def create_movie(
    payload: Any = Body(None),
    service: MovieService = Depends(get_movie_service),
) -> Dict[str, Any]:
    return movie_to_json(service.create(payload))

@router.put("/{movie_id}", responses=NOT_FOUND)
def update_movie(
    movie_id: str,
    payload: Any = Body(None),
    service: MovieService = Depends(get_movie_service),
) -> Dict[str, Any]:
    return movie_to_json(service.update(movie_id, payload))

@router.delete("/{movie_id}", responses=NOT_FOUND)
def delete_movie(movie_id: str, service: MovieService = Depends(get_movie_service)) -> Dict[str, Any]:
    deleted = service.delete(movie_id)
    return {
        "message": "Movie deleted successfully",
        "deletedMovie": movie_to_json(deleted),
    }
