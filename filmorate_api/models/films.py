from datetime import date
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from filmorate_api.models.reference import Genre, Rating


class RatingRef(BaseModel):
    id: int


class GenreRef(BaseModel):
    id: int


class Film(BaseModel):
    """Film as clients see it: `releaseDate` and `mpa` on the wire."""
    id: int
    name: str
    description: Optional[str] = None
    release_date: date = Field(
        validation_alias=AliasChoices("release_date", "releaseDate"),
        serialization_alias="releaseDate",
    )
    duration: int
    rating: Optional[Rating] = Field(
        default=None,
        validation_alias=AliasChoices("rating", "mpa"),
        serialization_alias="mpa",
    )
    genres: List[Genre] = []
    likes: List[int] = []


class FilmCreateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    release_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("release_date", "releaseDate"),
    )
    duration: Optional[int] = None
    rating: Optional[RatingRef] = Field(
        default=None,
        validation_alias=AliasChoices("rating", "mpa"),
    )
    genres: Optional[List[GenreRef]] = None


class FilmUpdateRequest(FilmCreateRequest):
    """Partial update; `genres=[]` clears the assignment, None keeps it."""
    id: int
