import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from taskmaster.config import settings
from taskmaster.errors import ValidationError

T = TypeVar("T")

@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

def page_request(page: int | None = None, limit: int | None = None) -> PageRequest:
    page = 1 if page is None else page
    limit = settings.history_default_limit if limit is None else limit
    if page < 1:
        raise ValidationError("page must be >= 1")
    if limit < 1:
        raise ValidationError("limit must be >= 1")
    if limit > settings.history_max_limit:
        raise ValidationError(f"limit must be <= {settings.history_max_limit}")
    return PageRequest(page=page, limit=limit)

def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)

def has_more(page: int, limit: int, total: int) -> bool:
    return page * limit < total

@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def has_more(self) -> bool:
        return has_more(self.page, self.limit, self.total)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)
