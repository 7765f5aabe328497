# election/database/pagination.py

from dataclasses import dataclass, field
from typing import Any, List

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


@dataclass
class PageParams:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT


@dataclass
class PaginatedResult:
    items: List[Any] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return -(-self.total // self.limit)

    def meta(self):
        return {
            'total': self.total,
            'page': self.page,
            'limit': self.limit,
            'totalPages': self.total_pages,
        }


def paginate(query, params: PageParams) -> PaginatedResult:
    """Run a Flask-SQLAlchemy query one page at a time."""
    page = query.paginate(page=params.page, per_page=params.limit, error_out=False, max_per_page=None)
    return PaginatedResult(items=list(page.items), total=page.total or 0, page=params.page, limit=params.limit)
