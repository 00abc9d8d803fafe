from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional, List

from app.modules.profiles.schemas import ProfileResponse


class SearchFilters(BaseModel):
    search: Optional[str] = None
    location: Optional[str] = None
    role: Optional[str] = None
    limit: int = 20
    offset: int = 0


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SearchResult(BaseModel):
    profiles: List[ProfileResponse]
    pagination: Pagination
