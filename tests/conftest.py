# ABOUTME: Shared test fixtures for the IPMA tool server test suite.
# ABOUTME: Provides a mock HTTP client that answers by URL path.

from unittest.mock import AsyncMock

import httpx
import pytest

from ipma_mcp.config import IPMA_BASE_URL


@pytest.fixture
def make_client():
    """Factory for a mock httpx.AsyncClient serving `routes` (path -> JSON body).

    A route value that is an httpx.Response is returned as-is; unknown paths get a 404.
    """

    def _make(routes: dict) -> AsyncMock:
        mock = AsyncMock(spec=httpx.AsyncClient)

        async def _get(url: str, *args, **kwargs) -> httpx.Response:
            request = httpx.Request("GET", url)
            path = url.removeprefix(IPMA_BASE_URL)
            if path not in routes:
                return httpx.Response(404, json={"error": "not found"}, request=request)
            body = routes[path]
            if isinstance(body, httpx.Response):
                body.request = request
                return body
            return httpx.Response(200, json=body, request=request)

        mock.get.side_effect = _get
        return mock

    return _make
