from typing import Optional, Union

from pydantic import BaseModel

from mongodb_path.core.settings import settings


class Pager(BaseModel):
    page: int           # 0-based, always valid for `count`
    height: int
    count: int
    page_count: int

    @property
    def skip(self) -> int:
        return self.page * self.height


def page_count(count: int, height: int) -> int:
    # There is always at least one page, even when count is 0.
    return max(1, -(-count // height))


def get_page(count: int, requested_page: int, height: int) -> int:
    """Clamp `requested_page` into [0, page_count - 1]."""
    if requested_page <= 0:
        return 0
    pages = page_count(count, height)
    if requested_page < pages:
        return requested_page
    return pages - 1


def setup_pager(count: int, requested_page: Union[int, str, None], height: Optional[int] = None) -> Pager:
    """Build a Pager from a raw request value such as a `?page=` query parameter."""
    height = height or settings.ITEMS_PER_PAGE
    try:
        requested = int(requested_page or 0)
    except (TypeError, ValueError):
        requested = 0
    return Pager(
        page=get_page(count, requested, height),
        height=height,
        count=count,
        page_count=page_count(count, height),
    )
