from pydantic import BaseModel


class Rating(BaseModel):
    id: int
    name: str


class Genre(BaseModel):
    id: int
    name: str
