from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends

from filmorate_api.api.http_utils import handle_runtime_errors
from filmorate_api.dependencies import get_reference_service
from filmorate_api.models.reference import Genre, Rating
from filmorate_api.services.reference_service import ReferenceService

router = APIRouter(prefix="/api/v1", tags=["reference"])


@router.get("/genres", response_model=List[Genre], status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_genres(svc: ReferenceService = Depends(get_reference_service)):
    return await svc.list_genres()


@router.get("/genres/{genre_id}",
            response_model=Genre,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def get_genre(
    genre_id: int,
    svc: ReferenceService = Depends(get_reference_service),
):
    return await svc.get_genre(genre_id)


@router.get("/mpa", response_model=List[Rating], status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_ratings(
        svc: ReferenceService = Depends(get_reference_service)):
    return await svc.list_ratings()


@router.get("/mpa/{rating_id}",
            response_model=Rating,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def get_rating(
    rating_id: int,
    svc: ReferenceService = Depends(get_reference_service),
):
    return await svc.get_rating(rating_id)
