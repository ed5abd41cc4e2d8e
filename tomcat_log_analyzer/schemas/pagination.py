from typing import TypeVar, Generic, List
from pydantic import BaseModel
from fastapi import Query

from tomcat_log_analyzer.core.config import settings

T = TypeVar("T")


class PageParams:
    """Inject as Depends(PageParams) into endpoints.

    Values are passed through unchecked; the search service rejects
    non-positive page numbers and sizes itself.
    """
    def __init__(
        self,
        page: int = Query(1, description="1-based page number"),
        size: int = Query(settings.SEARCH_DEFAULT_PAGE_SIZE, description="Max records per page"),
    ):
        self.page = page
        self.size = size


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    size: int
