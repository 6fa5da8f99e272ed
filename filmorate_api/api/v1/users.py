from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Response

from filmorate_api.api.http_utils import handle_runtime_errors
from filmorate_api.dependencies import get_users_service
from filmorate_api.models.users import (
    FriendshipState,
    User,
    UserCreateRequest,
    UserUpdateRequest,
)
from filmorate_api.services.users_service import UsersService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=List[User], status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_users(svc: UsersService = Depends(get_users_service)):
    return await svc.list_users()


@router.post("", response_model=User, status_code=HTTPStatus.CREATED)
@handle_runtime_errors()
async def create_user(
    body: UserCreateRequest,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.create_user(body)


@router.put("", response_model=User, status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def update_user(
    body: UserUpdateRequest,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.update_user(body)


@router.delete("", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def clear_users(svc: UsersService = Depends(get_users_service)):
    await svc.clear_users()
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/{user_id}", response_model=User, status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def get_user(
    user_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.get_user(user_id)


@router.delete("/{user_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def delete_user(
    user_id: int,
    svc: UsersService = Depends(get_users_service),
):
    await svc.delete_user(user_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


# ----- friends -----

@router.get("/{user_id}/friends",
            response_model=List[User],
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_friends(
    user_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.list_friends(user_id)


@router.get("/{user_id}/friends/common/{other_id}",
            response_model=List[User],
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def common_friends(
    user_id: int,
    other_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.common_friends(user_id, other_id)


@router.get("/{user_id}/friends/{friend_id}",
            response_model=FriendshipState,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def get_friendship(
    user_id: int,
    friend_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.get_friendship(user_id, friend_id)


@router.put("/{user_id}/friends/{friend_id}",
            response_model=User,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def add_friend(
    user_id: int,
    friend_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.add_friend(user_id, friend_id)


@router.delete("/{user_id}/friends/{friend_id}",
               response_model=User,
               status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def remove_friend(
    user_id: int,
    friend_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.remove_friend(user_id, friend_id)
