"""Pagination value objects."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be > 0")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total row count across all pages."""

    page: int
    limit: int
    total: int
    data: list[T] = field(default_factory=list)

    @property
    def has_more(self) -> bool:
        return self.page * self.limit < self.total

    @classmethod
    def empty(cls, request: PageRequest) -> "Page[T]":
        return cls(page=request.page, limit=request.limit, total=0, data=[])
