"""
ddcompute - Paging

Paging parameters for list operations, and the paged-result fields every list
response carries.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .contracts import WireModel

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 250


class Paging(BaseModel):
    """Page number and size for a list request."""

    model_config = ConfigDict(validate_assignment=True)

    page_number: int = Field(default=DEFAULT_PAGE_NUMBER, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    def first(self) -> None:
        """Move to the first page."""
        self.page_number = 1

    def next(self) -> None:
        """Move to the next page."""
        self.page_number += 1

    def to_query_parameters(self) -> dict[str, int]:
        return {"pageNumber": self.page_number, "pageSize": self.page_size}


def ensure_paging(paging: Optional[Paging]) -> Paging:
    """Return ``paging``, or default paging if none was supplied."""
    return paging if paging is not None else Paging()


class PagedResult(WireModel):
    """Paging information returned with each page of results."""

    page_number: int = Field(default=0, alias="pageNumber")
    page_count: int = Field(default=0, alias="pageCount")
    total_count: int = Field(default=0, alias="totalCount")
    page_size: int = Field(default=0, alias="pageSize")

    def is_empty(self) -> bool:
        return self.page_count == 0
