"""
Pagination service.

Runs one request/response cycle: decode cursor, resolve sort and filter,
scan, check boundaries, and issue fresh cursors for the directions in which
more records exist. No state is kept between requests; the whole session
travels inside the cursor.
"""

import time

from keypage.config import DEFAULT_CONFIG, PaginationConfig
from keypage.core.boundaries import check_boundaries
from keypage.core.conditions import make_anchor
from keypage.core.cursor import CursorCodec
from keypage.core.dsl import PageRequest, PageResult, PageState
from keypage.core.errors import MalformedCursorError
from keypage.core.resolvers import (
    resolve_direction,
    resolve_filter,
    resolve_page_size,
    resolve_sort,
)
from keypage.core.scan import fetch_page
from keypage.logging import get_logger
from keypage.stores.base import RecordStore

logger = get_logger(__name__)


class PaginationService:
    """
    Keyset pagination over a record store.

    Usage:
        service = PaginationService(store, PaginationConfig(page_size=20))
        first = await service.paginate(PageRequest(sort_field="price"))
        second = await service.paginate(PageRequest(cursor=first.next_cursor))
    """

    def __init__(
        self,
        store: RecordStore,
        config: PaginationConfig | None = None,
        codec: CursorCodec | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            store: Pre-connected record store (used read-only)
            config: Pagination profile (defaults to DEFAULT_CONFIG)
            codec: Cursor codec (defaults to one restoring the store's id type)
        """
        self.store = store
        self.config = config or DEFAULT_CONFIG
        self.codec = codec or CursorCodec(id_parser=store.coerce_id)

    @property
    def id_field(self) -> str:
        return self.store.id_field

    def decode_cursor(self, cursor: str | None) -> PageState | None:
        """Decode a request cursor, if any."""
        if not cursor:
            return None
        try:
            return self.codec.decode(cursor)
        except MalformedCursorError as e:
            logger.warning("Rejected malformed cursor", reason=e.details.get("reason"))
            raise

    async def paginate(self, request: PageRequest) -> PageResult:
        """
        Serve one page.

        Raises:
            MalformedCursorError: If ``request.cursor`` cannot be decoded
        """
        started = time.perf_counter()

        state = self.decode_cursor(request.cursor)
        direction = resolve_direction(request.direction)
        page_size = resolve_page_size(request.page_size, self.config)
        sort = resolve_sort(request, state, self.config)
        filter = resolve_filter(request, state, self.config)
        anchor = state.anchor if state is not None else None

        scan = await fetch_page(
            self.store,
            filter,
            sort,
            direction,
            anchor,
            page_size,
            self.id_field,
        )
        bounds = await check_boundaries(
            self.store,
            filter,
            sort,
            scan.items,
            self.id_field,
            parallel=self.config.parallel_boundary_checks,
        )

        next_cursor = None
        previous_cursor = None
        if bounds.has_next:
            next_cursor = self.codec.encode(
                PageState(
                    filter=filter,
                    sort=sort,
                    anchor=make_anchor(scan.items[-1], sort, self.id_field),
                )
            )
        if bounds.has_previous:
            previous_cursor = self.codec.encode(
                PageState(
                    filter=filter,
                    sort=sort,
                    anchor=make_anchor(scan.items[0], sort, self.id_field),
                )
            )

        logger.debug(
            "Page fetched",
            direction=direction.value,
            page_size=page_size,
            item_count=len(scan.items),
            has_more_scanned=scan.has_more_scanned,
            has_next=bounds.has_next,
            has_previous=bounds.has_previous,
            duration_ms=(time.perf_counter() - started) * 1000,
        )

        return PageResult(
            page_size=page_size,
            direction=direction,
            sort=sort,
            filter=filter,
            items=scan.items,
            has_next=bounds.has_next,
            has_previous=bounds.has_previous,
            next_cursor=next_cursor,
            previous_cursor=previous_cursor,
        )
