"""
Shared models
"""

from math import ceil
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a larger result set"""

    items: List[T] = Field(default_factory=list)
    total_count: int = 0
    page_index: int = 0
    page_size: int = 50

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.total_pages

    @classmethod
    def from_list(cls, items: List[T], page_index: int = 0, page_size: int = 50) -> "Page[T]":
        """Slice a full list into a page"""
        page_index = max(page_index, 0)
        page_size = max(page_size, 1)
        start = page_index * page_size
        return cls(
            items=items[start : start + page_size],
            total_count=len(items),
            page_index=page_index,
            page_size=page_size,
        )
