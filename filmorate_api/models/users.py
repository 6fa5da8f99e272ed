from datetime import date
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    id: int
    email: str
    login: str
    name: str
    birthday: date


class UserCreateRequest(BaseModel):
    # validated by the service so that blanks surface as 400, not 422
    email: Optional[str] = None
    login: Optional[str] = None
    name: Optional[str] = None
    birthday: Optional[date] = None


class UserUpdateRequest(UserCreateRequest):
    """Partial update: fields left as None keep their stored value."""
    id: int


class FriendshipState(BaseModel):
    user_id: int
    friend_id: int
    active: bool   # user_id -> friend_id edge exists
    mutual: bool   # friend_id -> user_id exists as well
