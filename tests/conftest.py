"""Pytest fixtures: a site config and an httpx client backed by fake static assets."""

from typing import Callable, Dict, Union

import httpx
import pytest

from config import SiteConfig

BASE_URL = "http://site.test"

Route = Union[httpx.Response, Callable[[httpx.Request], object]]


def make_client(routes: Dict[str, Route]) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered from ``routes`` (path -> response or handler)."""

    async def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, httpx.Response):
            return route
        result = route(request)
        if not isinstance(result, httpx.Response):
            result = await result
        return result

    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)


@pytest.fixture
def config() -> SiteConfig:
    return SiteConfig(base_url=BASE_URL, whatsapp_number="18095551234")


@pytest.fixture
def catalog():
    return [
        {
            "name": "Classic Burger",
            "category": "burgers",
            "featured": True,
            "popular": True,
            "price": 250,
            "image": "a.jpg",
            "description": "d",
        },
        {
            "name": "Hotdog",
            "category": "hotdogs",
            "featured": False,
            "popular": False,
            "price": 150,
            "image": "b.jpg",
            "description": "e",
        },
    ]


@pytest.fixture
def site_client():
    return make_client
