from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Query, Response

from filmorate_api.api.http_utils import handle_runtime_errors
from filmorate_api.core.config import settings
from filmorate_api.dependencies import get_films_service
from filmorate_api.models.films import (
    Film,
    FilmCreateRequest,
    FilmUpdateRequest,
)
from filmorate_api.models.reference import Genre
from filmorate_api.services.films_service import FilmsService

router = APIRouter(prefix="/api/v1/films", tags=["films"])


@router.get("", response_model=List[Film], status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_films(svc: FilmsService = Depends(get_films_service)):
    return await svc.list_films()


@router.post("", response_model=Film, status_code=HTTPStatus.CREATED)
@handle_runtime_errors()
async def create_film(
    body: FilmCreateRequest,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.create_film(body)


@router.put("", response_model=Film, status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def update_film(
    body: FilmUpdateRequest,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.update_film(body)


@router.delete("", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def clear_films(svc: FilmsService = Depends(get_films_service)):
    await svc.clear_films()
    return Response(status_code=HTTPStatus.NO_CONTENT)


# declared before /{film_id} so "popular" is never parsed as an id
@router.get("/popular", response_model=List[Film], status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def popular_films(
    count: int = Query(settings.popular_default_count),
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.popular(count)


@router.get("/{film_id}", response_model=Film, status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def get_film(
    film_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.get_film(film_id)


@router.delete("/{film_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def delete_film(
    film_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    await svc.delete_film(film_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/{film_id}/genres",
            response_model=List[Genre],
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def film_genres(
    film_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.genres_of(film_id)


@router.get("/{film_id}/likes",
            response_model=List[int],
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def film_likes(
    film_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.likes_of(film_id)


@router.put("/{film_id}/like/{user_id}",
            response_model=Film,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def add_like(
    film_id: int,
    user_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.add_like(film_id, user_id)


@router.delete("/{film_id}/like/{user_id}",
               response_model=Film,
               status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def remove_like(
    film_id: int,
    user_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.remove_like(film_id, user_id)
