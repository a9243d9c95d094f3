# This project was developed with assistance from AI tools.
"""Schema components shared by several response bodies."""

from pydantic import BaseModel


class Pagination(BaseModel):
    """Offset/limit window over a list computed in full for each request."""

    total: int
    offset: int
    limit: int
    has_more: bool

    @classmethod
    def for_window(cls, total: int, offset: int, limit: int) -> "Pagination":
        return cls(total=total, offset=offset, limit=limit, has_more=offset + limit < total)
