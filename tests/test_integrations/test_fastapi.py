"""
Tests for the FastAPI integration.
"""

import base64

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from keypage.integrations import get_fastapi_integration
from keypage.integrations.fastapi import (
    PaginationRouter,
    create_pagination_router,
    page_request_from_query,
)
from keypage.service import PaginationService
from keypage.stores.memory import InMemoryStore
from keypage.testing import make_products


@pytest.fixture
def service():
    return PaginationService(InMemoryStore(make_products(100), id_type=int))


@pytest.fixture
def client(service):
    app = FastAPI()
    app.include_router(create_pagination_router(lambda request: service, "/products", "/api"))
    return TestClient(app)


class TestPageRequestFromQuery:
    def test_maps_query_parameters(self, service):
        request = page_request_from_query(
            {
                "direction": "prev",
                "cursor": "abc",
                "sortField": "price",
                "sortDir": "desc",
                "category": "books",
                "priceOp": "gte",
                "priceValue": "20",
                "pageSize": "5",
            },
            service,
        )

        assert request.direction == "prev"
        assert request.cursor == "abc"
        assert request.sort_field == "price"
        assert request.sort_dir == "desc"
        assert request.filter_value == "books"
        assert request.range_op == "gte"
        assert request.range_value == "20"
        assert request.page_size == "5"

    def test_missing_parameters(self, service):
        request = page_request_from_query({}, service)
        assert request.cursor is None
        assert request.filter_value is None


class TestPaginationRouter:
    def test_first_page(self, client):
        response = client.get("/api/products", params={"pageSize": 10})

        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-store"
        body = response.json()
        assert [item["id"] for item in body["items"]] == list(range(1, 11))
        assert body["pageSize"] == 10
        assert body["direction"] == "next"
        assert body["sort"] == {"field": "id", "dir": "asc"}
        assert body["filter"] == []
        assert body["hasNext"] is True
        assert body["hasPrevious"] is False
        assert body["nextCursor"]
        assert body["previousCursor"] is None

    def test_follow_cursors(self, client):
        first = client.get("/api/products", params={"pageSize": 10}).json()
        second = client.get(
            "/api/products", params={"cursor": first["nextCursor"], "pageSize": 10}
        ).json()
        back = client.get(
            "/api/products",
            params={"cursor": second["previousCursor"], "direction": "prev", "pageSize": 10},
        ).json()

        assert [item["id"] for item in second["items"]] == list(range(11, 21))
        assert back["items"] == first["items"]

    def test_filters_and_sort(self, client):
        body = client.get(
            "/api/products",
            params={
                "category": "books",
                "priceOp": "lt",
                "priceValue": "50",
                "sortField": "price",
                "sortDir": "desc",
            },
        ).json()

        prices = [item["price"] for item in body["items"]]
        assert prices == sorted(prices, reverse=True)
        assert all(item["category"] == "books" and item["price"] < 50 for item in body["items"])
        assert body["filter"] == [
            {"field": "category", "op": "eq", "value": "books"},
            {"field": "price", "op": "lt", "value": 50},
        ]

    def test_malformed_cursor_is_client_error(self, client):
        response = client.get("/api/products", params={"cursor": "garbage"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MALFORMED_CURSOR"

    def test_undecodable_cursor_value_is_client_error(self, client):
        payload = b'{"sort": {"field": "price"}, "anchor": {"id": 3, "sort_value": {"_dec": "abc"}}}'
        cursor = base64.urlsafe_b64encode(payload).decode().rstrip("=")

        response = client.get("/api/products", params={"cursor": cursor})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MALFORMED_CURSOR"

    def test_async_service_factory(self, service):
        async def get_service(request):
            return service

        app = FastAPI()
        app.include_router(PaginationRouter(get_service, path="/items").router)

        response = TestClient(app).get("/items", params={"pageSize": 3})

        assert [item["id"] for item in response.json()["items"]] == [1, 2, 3]

    def test_lazy_integration_getter(self):
        module = get_fastapi_integration()
        assert module.PaginationRouter is PaginationRouter
