# ABOUTME: Dependency container for the tool dispatcher using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient used by every tool to call the IPMA API.

import httpx
from pydantic import BaseModel, ConfigDict

from ipma_mcp.config import HTTP_TIMEOUT, USER_AGENT


class IpmaDeps(BaseModel):
    """Dependencies handed to each tool call by the dispatcher."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient


def create_http_client(timeout: float = HTTP_TIMEOUT) -> httpx.AsyncClient:
    """Create the shared httpx client.

    Requests are issued once; a failed fetch fails the whole tool call.
    """
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        timeout=timeout,
    )
