"""Service layer for users and their directed friendships."""

from __future__ import annotations

import logging
from typing import List

from filmorate_api.models.users import (
    FriendshipState,
    User,
    UserCreateRequest,
    UserUpdateRequest,
)
from filmorate_api.services import validation
from filmorate_api.services.errors import NotFound, storage_errors
from filmorate_api.services.repositories.base import Repositories

logger = logging.getLogger(__name__)


class UsersService:
    """User CRUD plus friendship edges.

    A friendship is a directed edge user -> friend. Adding A -> B never
    creates B -> A and removing A -> B never touches B -> A; a mutual
    friendship is simply the case where both edges exist.
    """

    def __init__(self, repos: Repositories) -> None:
        """Initialize with the shared repository bundle."""
        self.repos = repos
        self.users = repos.users
        self.friendships = repos.friendships

    # ---------- helpers ----------

    async def _require(self, user_id: int) -> User:
        with storage_errors('user_get'):
            row = await self.users.get(user_id)
        if row is None:
            logger.warning('user_not_found', extra={'user_id': user_id})
            raise NotFound('user', user_id)
        return User(**row)

    async def _load_many(self, ids: List[int]) -> List[User]:
        with storage_errors('user_get'):
            return [User(**row) for row in await self.users.get_many(ids)]

    # ---------- READ ----------

    async def list_users(self) -> List[User]:
        with storage_errors('user_list'):
            return [User(**row) for row in await self.users.list_all()]

    async def get_user(self, user_id: int) -> User:
        return await self._require(user_id)

    async def exists(self, user_id: int) -> bool:
        with storage_errors('user_get'):
            return await self.users.exists(user_id)

    # ---------- CREATE / UPDATE ----------

    async def create_user(self, data: UserCreateRequest) -> User:
        """Validate every field, default the name to the login, store."""
        validation.check_email(data.email)
        validation.check_login(data.login)
        validation.check_birthday(data.birthday)
        row = {
            'email': data.email,
            'login': data.login,
            'name': validation.display_name(data.name, data.login),
            'birthday': data.birthday,
        }
        with storage_errors('user_create'):
            stored = await self.users.insert(row)
        logger.info('user_created', extra={'user_id': stored['id']})
        return User(**stored)

    async def update_user(self, data: UserUpdateRequest) -> User:
        """Apply only the supplied fields.

        A blank `name` resets the display name to the (possibly new) login.
        """
        current = await self._require(data.id)

        fields = {}
        if data.email is not None:
            validation.check_email(data.email)
            fields['email'] = data.email
        if data.login is not None:
            validation.check_login(data.login)
            fields['login'] = data.login
        if data.name is not None:
            login = fields.get('login', current.login)
            fields['name'] = validation.display_name(data.name, login)
        if data.birthday is not None:
            validation.check_birthday(data.birthday)
            fields['birthday'] = data.birthday

        with storage_errors('user_update'):
            stored = await self.users.update(data.id, fields)
        if stored is None:
            # deleted between the existence check and the write
            raise NotFound('user', data.id)
        logger.info('user_updated', extra={'user_id': data.id,
                                           'fields': sorted(fields)})
        return User(**stored)

    # ---------- DELETE ----------

    async def delete_user(self, user_id: int) -> None:
        """Drop the user's likes and friendship edges, then the user."""
        await self._require(user_id)

        async def cascade(session) -> bool:
            await self.repos.likes.delete_by_user(user_id, session=session)
            await self.friendships.delete_by_user(user_id, session=session)
            return await self.users.delete(user_id, session=session)

        with storage_errors('user_delete'):
            deleted = await self.repos.run_in_transaction(cascade)
        if not deleted:
            raise NotFound('user', user_id)
        logger.info('user_deleted', extra={'user_id': user_id})

    async def clear_users(self) -> None:
        async def wipe(session) -> None:
            await self.repos.likes.clear(session=session)
            await self.friendships.clear(session=session)
            await self.users.clear(session=session)

        with storage_errors('user_clear'):
            await self.repos.run_in_transaction(wipe)
        logger.info('users_cleared')

    # ---------- FRIENDS ----------

    async def add_friend(self, user_id: int, friend_id: int) -> User:
        """Create the edge user -> friend; repeating it changes nothing."""
        validation.check_not_self(user_id, friend_id)
        user = await self._require(user_id)
        await self._require(friend_id)
        with storage_errors('friend_add'):
            created = await self.friendships.add(user_id, friend_id)
        logger.info('friend_added', extra={'user_id': user_id,
                                           'friend_id': friend_id,
                                           'inserted': created})
        return user

    async def remove_friend(self, user_id: int, friend_id: int) -> User:
        """Delete the edge user -> friend if present."""
        user = await self._require(user_id)
        await self._require(friend_id)
        with storage_errors('friend_remove'):
            removed = await self.friendships.remove(user_id, friend_id)
        logger.info('friend_removed', extra={'user_id': user_id,
                                             'friend_id': friend_id,
                                             'removed': removed})
        return user

    async def list_friends(self, user_id: int) -> List[User]:
        await self._require(user_id)
        with storage_errors('friend_list'):
            ids = await self.friendships.friend_ids(user_id)
        return await self._load_many(ids)

    async def common_friends(self, user_id: int, other_id: int) -> List[User]:
        """Users both `user_id` and `other_id` have an edge to."""
        await self._require(user_id)
        await self._require(other_id)
        with storage_errors('friend_list'):
            mine = set(await self.friendships.friend_ids(user_id))
            theirs = set(await self.friendships.friend_ids(other_id))
        return await self._load_many(sorted(mine & theirs))

    async def get_friendship(
            self, user_id: int, friend_id: int) -> FriendshipState:
        await self._require(user_id)
        await self._require(friend_id)
        with storage_errors('friend_get'):
            forward = await self.friendships.get(user_id, friend_id)
            backward = await self.friendships.get(friend_id, user_id)
        active = bool(forward and forward.get('status'))
        return FriendshipState(
            user_id=user_id,
            friend_id=friend_id,
            active=active,
            mutual=active and bool(backward and backward.get('status')),
        )
