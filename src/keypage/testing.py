"""
Testing utilities for keypage.

Provides a seeded product catalog and a helper that walks a whole traversal.
"""

import random
from typing import Any

from keypage.core.dsl import NavDirection, PageRequest, PageResult
from keypage.service import PaginationService


def make_products(
    count: int = 100,
    seed: int | None = 0,
    start_id: int = 1,
) -> list[dict[str, Any]]:
    """
    Generate a deterministic product catalog.

    Odd positions are electronics, even positions books; every third product
    is in stock; prices are uniform in [0, 100).
    """
    rng = random.Random(seed)
    return [
        {
            "id": start_id + i,
            "name": f"Product {i}",
            "category": "electronics" if i % 2 else "books",
            "price": round(rng.random() * 100, 2),
            "in_stock": i % 3 == 0,
        }
        for i in range(count)
    ]


async def walk(
    service: PaginationService,
    request: PageRequest,
    direction: NavDirection = NavDirection.NEXT,
    max_pages: int = 10_000,
) -> list[PageResult]:
    """
    Follow cursors in one direction until the traversal ends.

    The first page is served from ``request``; every following page is
    requested with the cursor only, plus the page size of ``request``.
    """
    pages = [await service.paginate(request)]
    while len(pages) < max_pages:
        last = pages[-1]
        cursor = last.next_cursor if direction == NavDirection.NEXT else last.previous_cursor
        if cursor is None:
            break
        pages.append(
            await service.paginate(
                PageRequest(
                    cursor=cursor,
                    direction=direction.value,
                    page_size=request.page_size,
                )
            )
        )
    return pages
