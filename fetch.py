# fetch.py
import json
import asyncio
import logging
from typing import Any, Optional

import httpx

log = logging.getLogger("uvicorn.error")


class SiteAssetError(Exception):
    """Base class for failures while reading the site's static assets."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ResourceUnavailable(SiteAssetError):
    """Non-success status or a network-level failure."""


class MalformedResponse(SiteAssetError):
    """The body arrived but could not be decoded."""


async def _get(client: httpx.AsyncClient, url: str, *, timeout: Optional[float], retries: int) -> httpx.Response:
    last_err: Optional[ResourceUnavailable] = None
    for attempt in range(retries + 1):
        if attempt:
            await asyncio.sleep(0.25 * attempt)
        try:
            kwargs = {"follow_redirects": True}
            if timeout is not None:
                kwargs["timeout"] = timeout
            resp = await client.get(url, **kwargs)
        except httpx.HTTPError as e:
            last_err = ResourceUnavailable(url, f"Request failed: {e!r}")
            continue
        if not resp.is_success:
            last_err = ResourceUnavailable(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
            continue
        return resp
    raise last_err


async def http_get_text(client: httpx.AsyncClient, url: str, *, timeout: Optional[float] = None, retries: int = 0) -> str:
    resp = await _get(client, url, timeout=timeout, retries=retries)
    return resp.text


async def http_get_json(client: httpx.AsyncClient, url: str, *, timeout: Optional[float] = None, retries: int = 0) -> Any:
    resp = await _get(client, url, timeout=timeout, retries=retries)
    try:
        return resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedResponse(url, f"Invalid JSON: {e}", status_code=resp.status_code) from e
