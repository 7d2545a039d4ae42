"""
FastAPI integration for keypage.

Exposes a pagination service as a GET endpoint taking the same query
parameters as a plain HTTP listing API:

    GET /products?sortField=price&sortDir=desc&category=books&pageSize=20
    GET /products?cursor=<nextCursor>
    GET /products?cursor=<previousCursor>&direction=prev
"""

import inspect
from collections.abc import Callable
from typing import Any
from uuid import uuid4

from keypage.core.dsl import PageRequest
from keypage.core.errors import KeypageError
from keypage.logging import get_logger, log_context
from keypage.service import PaginationService

try:
    from fastapi import APIRouter, Request
    from fastapi.responses import JSONResponse
    HAS_FASTAPI = True
except ImportError:
    HAS_FASTAPI = False

logger = get_logger(__name__)

ServiceFactory = Callable[..., Any]


def page_request_from_query(
    params: Any,
    service: PaginationService,
) -> PageRequest:
    """
    Build a PageRequest from HTTP query parameters.

    The equality parameter is named after the configured filter field and the
    range parameters after the range field, e.g. ``category``, ``priceOp`` and
    ``priceValue`` for the default profile.
    """
    config = service.config
    return PageRequest(
        direction=params.get("direction"),
        cursor=params.get("cursor"),
        sort_field=params.get("sortField"),
        sort_dir=params.get("sortDir"),
        filter_value=params.get(config.filter_field),
        range_op=params.get(f"{config.range_field}Op"),
        range_value=params.get(f"{config.range_field}Value"),
        page_size=params.get("pageSize"),
    )


class PaginationRouter:
    """
    FastAPI router serving keyset-paginated listings.

    Usage:
        from fastapi import FastAPI
        from keypage.integrations.fastapi import PaginationRouter

        app = FastAPI()

        def get_service(request):
            return PaginationService(SQLAlchemyStore(request.state.db, Product))

        app.include_router(
            PaginationRouter(get_service, path="/products").router,
            prefix="/api",
        )
    """

    def __init__(
        self,
        get_service: ServiceFactory,
        path: str = "/items",
        prefix: str = "",
    ) -> None:
        """
        Initialize the router.

        Args:
            get_service: Callable taking the Request and returning a
                PaginationService (or an awaitable of one)
            path: Route path of the listing endpoint
            prefix: Optional path prefix for routes
        """
        if not HAS_FASTAPI:
            raise ImportError(
                "FastAPI is not installed. Install with: pip install 'keypage[fastapi]'"
            )

        self.get_service = get_service
        self.path = path
        self.router = APIRouter(prefix=prefix)

        self._setup_routes()

    def _setup_routes(self) -> None:
        """Set up the API routes."""

        @self.router.get(self.path)
        async def list_page(http_request: Request) -> JSONResponse:
            """Serve one page of records."""
            request_id = http_request.headers.get("x-request-id") or str(uuid4())
            with log_context(request_id=request_id, route=http_request.url.path):
                service = await self._resolve_service(http_request)
                request = page_request_from_query(http_request.query_params, service)
                try:
                    result = await service.paginate(request)
                except KeypageError as e:
                    logger.info("Pagination request rejected", code=e.code)
                    return JSONResponse(
                        status_code=400,
                        content={"error": e.to_dict()},
                        headers={"Cache-Control": "no-store"},
                    )

            return JSONResponse(
                content=result.model_dump(mode="json", by_alias=True),
                headers={"Cache-Control": "no-store"},
            )

    async def _resolve_service(self, request: Request) -> PaginationService:
        """Call the service factory, awaiting it when needed."""
        service = self.get_service(request)
        if inspect.isawaitable(service):
            service = await service
        return service


def create_pagination_router(
    get_service: ServiceFactory,
    path: str = "/items",
    prefix: str = "",
) -> Any:
    """
    Create a FastAPI router for a pagination service.

    Usage:
        app.include_router(create_pagination_router(get_service, "/products", "/api"))
    """
    return PaginationRouter(get_service=get_service, path=path, prefix=prefix).router
