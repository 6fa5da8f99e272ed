from fastapi import Depends, Request

from filmorate_api.services.films_service import FilmsService
from filmorate_api.services.reference_service import ReferenceService
from filmorate_api.services.repositories.base import Repositories
from filmorate_api.services.users_service import UsersService


def get_repositories(request: Request) -> Repositories:
    # built once in the app lifespan
    return request.app.state.repositories


def get_users_service(
        repos: Repositories = Depends(get_repositories),
) -> UsersService:
    return UsersService(repos)


def get_films_service(
        repos: Repositories = Depends(get_repositories),
) -> FilmsService:
    return FilmsService(repos)


def get_reference_service(
        repos: Repositories = Depends(get_repositories),
) -> ReferenceService:
    return ReferenceService(repos)
