# components.py
import logging
from typing import Callable, Optional

import httpx
from bs4 import BeautifulSoup

from fetch import SiteAssetError, http_get_text

log = logging.getLogger("uvicorn.error")


async def load_component(
    page: BeautifulSoup,
    selector: str,
    url: str,
    client: httpx.AsyncClient,
    *,
    timeout: Optional[float] = None,
    retries: int = 0,
    on_loaded: Optional[Callable[[str], None]] = None,
) -> None:
    """Fetch an HTML fragment and make it the whole content of ``selector``.

    The fragment is parsed into the page tree, so initializers that run
    afterwards can query the elements it brings in.

    A page without the container is a no-op. Fetch failures are logged and
    swallowed so the caller can always await this to completion.
    """
    container = page.select_one(selector)
    if container is None:
        return

    try:
        html = await http_get_text(client, url, timeout=timeout, retries=retries)
    except SiteAssetError as e:
        log.warning("[System] Error loading %s: %s", url, e)
        return

    fragment = BeautifulSoup(html, "html.parser")
    container.clear()
    container.extend(list(fragment.contents))
    log.info("component loaded: %s <- %s (%d bytes)", selector, url, len(html))
    if on_loaded is not None:
        on_loaded(selector)
