# wish_merchant/api/pagination.py
from typing import Any, Callable, Iterator, List, Optional, TypeVar

from wish_merchant.api.exceptions import FetchCancelledError
from wish_merchant.api.response import WishResponse, classify_response
from wish_merchant.utils.logging import logger

PAGE_SIZE = 50

T = TypeVar("T")

PageCall = Callable[[int, int], WishResponse]


def iter_all(
    call: PageCall,
    factory: Callable[[Any], T],
    page_size: int = PAGE_SIZE,
    should_stop: Optional[Callable[[], bool]] = None,
    label: str = "",
) -> Iterator[T]:
    """Lazily yield every item of a paged list endpoint.

    The first page is always requested. Later pages are requested while the
    previous envelope reports ``has_more``; the offset grows by ``page_size``
    after every page, empty ones included.

    Args:
        call: Performs one page request for ``(offset, page_size)``.
        factory: Turns one raw record into an item.
        page_size: Records per page.
        should_stop: Checked before every page after the first.
        label: Name used in log messages.

    Raises:
        WishResponseError: A page was classified as a failure.
        FetchCancelledError: ``should_stop`` returned True between pages.
    """
    offset = 0
    fetched = 0
    while True:
        response = call(offset, page_size)
        records = classify_response(response)
        count = 0
        if records:
            for raw in records:
                yield factory(raw)
                count += 1
        fetched += count
        logger.debug(f"{label} page at offset {offset}: {count} records, has_more={response.has_more}")
        offset += page_size
        if not response.has_more:
            break
        if should_stop is not None and should_stop():
            logger.warning(f"{label} fetch cancelled at offset {offset} after {fetched} records")
            raise FetchCancelledError(offset, fetched, label or None)


def fetch_all(
    call: PageCall,
    factory: Callable[[Any], T],
    page_size: int = PAGE_SIZE,
    should_stop: Optional[Callable[[], bool]] = None,
    label: str = "",
) -> List[T]:
    """Fetch every page and return the items in server order.

    Any failure aborts the whole fetch; a partial list is never returned.
    """
    items = list(iter_all(call, factory, page_size, should_stop, label))
    logger.info(f"{label} fetched {len(items)} records")
    return items
