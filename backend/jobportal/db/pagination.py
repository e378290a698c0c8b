import math
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic.alias_generators import to_snake
from sqlalchemy.orm import Query

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of query results plus totals."""

    items: list[T]
    page: int
    size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_items / self.size)


def sort_column(model: Any, sort_by: Optional[str], default: str) -> Any:
    """
    Resolve a camelCase or snake_case field name to a mapped column.

    Unknown names fall back to ``default`` so clients cannot sort by
    arbitrary attributes.
    """
    name = to_snake(sort_by) if sort_by else default
    if name not in model.__table__.columns:
        name = default
    return getattr(model, name)


def paginate(
    query: Query,
    page: int = 0,
    size: int = 10,
    order_by: Any = None,
    sort_dir: str = "desc",
) -> Page:
    """Apply ordering and offset/limit to ``query``. Pages are zero-based."""
    total = query.order_by(None).count()

    if order_by is not None:
        order_by = order_by.asc() if sort_dir.lower() == "asc" else order_by.desc()
        query = query.order_by(order_by)

    items = query.offset(page * size).limit(size).all()
    return Page(items=items, page=page, size=size, total_items=total)
