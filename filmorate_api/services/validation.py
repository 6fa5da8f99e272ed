"""Field rules shared by create (all fields) and partial update (given ones)."""

from __future__ import annotations

import logging
from datetime import date
from typing import NoReturn, Optional

from filmorate_api.services.errors import ValidationFailed

logger = logging.getLogger(__name__)

MIN_RELEASE_DATE = date(1895, 12, 28)
MAX_DESCRIPTION_LENGTH = 200


def _reject(field: str, message: str) -> NoReturn:
    logger.warning('validation_failed', extra={'field': field})
    raise ValidationFailed(message)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


# ----- users -----

def check_email(email: Optional[str]) -> None:
    if _is_blank(email):
        _reject('email', 'email must not be blank')
    if '@' not in email:
        _reject('email', "email must contain '@'")


def check_login(login: Optional[str]) -> None:
    if _is_blank(login):
        _reject('login', 'login must not be blank')
    if any(ch.isspace() for ch in login):
        _reject('login', 'login must not contain whitespace')


def check_birthday(birthday: Optional[date]) -> None:
    if birthday is None:
        _reject('birthday', 'birthday must be set')
    if birthday > date.today():
        _reject('birthday', 'birthday must not be in the future')


def display_name(name: Optional[str], login: str) -> str:
    """Blank or missing display names fall back to the login."""
    return login if _is_blank(name) else name


# ----- films -----

def check_film_name(name: Optional[str]) -> None:
    if _is_blank(name):
        _reject('name', 'film name must not be blank')


def check_description(description: Optional[str]) -> None:
    if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
        _reject(
            'description',
            f'description must be at most {MAX_DESCRIPTION_LENGTH} characters',
        )


def check_release_date(release_date: Optional[date]) -> None:
    if release_date is None:
        _reject('release_date', 'release date must be set')
    if release_date < MIN_RELEASE_DATE:
        _reject(
            'release_date',
            f'release date must not be before {MIN_RELEASE_DATE.isoformat()}',
        )


def check_duration(duration: Optional[int]) -> None:
    if duration is None:
        _reject('duration', 'duration must be set')
    if duration <= 0:
        _reject('duration', 'duration must be a positive number')


def check_count(count: int) -> None:
    if count <= 0:
        _reject('count', 'count must be a positive number')


def check_not_self(user_id: int, friend_id: int) -> None:
    if user_id == friend_id:
        _reject('friend_id', 'a user cannot befriend themselves')
