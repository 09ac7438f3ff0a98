# website.py
import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import httpx
from bs4 import BeautifulSoup

from components import load_component
from config import SiteConfig
from interactions import DEFAULT_INITIALIZERS, CollapsibleMenu, PageInitializer
from menu import load_menu_system

log = logging.getLogger("uvicorn.error")


@dataclass
class AppStartup:
    """What ``init_app`` leaves behind: the page plus a handle on the catalog task."""

    page: BeautifulSoup
    menu_task: "asyncio.Task[List[str]]"
    loaded_components: List[str] = field(default_factory=list)

    async def menu_loaded(self) -> List[str]:
        return await self.menu_task


async def init_app(
    page: BeautifulSoup,
    config: SiteConfig,
    client: httpx.AsyncClient,
    *,
    initializers: Sequence[PageInitializer] = DEFAULT_INITIALIZERS,
    collapsible_menu: Optional[CollapsibleMenu] = None,
) -> AppStartup:
    """Startup sequence for one page.

    1. Load every structural fragment concurrently and wait for all of them.
    2. Run the initializers that expect those fragments to be in place.
    3. The catalog is loaded by an independent task started up front; it is
       never awaited here. Use ``AppStartup.menu_loaded()`` to wait for it.
    """
    menu_task = asyncio.create_task(load_menu_system(page, config, client))
    startup = AppStartup(page=page, menu_task=menu_task)

    try:
        results = await asyncio.gather(
            *(
                load_component(
                    page, selector, url, client,
                    timeout=config.fetch_timeout,
                    retries=config.fetch_retries,
                    on_loaded=startup.loaded_components.append,
                )
                for selector, url in config.fragments
            ),
            return_exceptions=True,
        )
        for (selector, _url), res in zip(config.fragments, results):
            if isinstance(res, BaseException):
                log.error("fragment %s failed unexpectedly: %r", selector, res)

        for init in initializers:
            init(page, config)
        if collapsible_menu is not None:
            collapsible_menu.hide()
    except asyncio.CancelledError:
        # Nobody will get the handle, so the catalog task is ours to stop.
        menu_task.cancel()
        raise
    except Exception:
        log.exception("[System] Page startup failed")

    return startup


async def assemble_page(
    shell_html: str,
    config: SiteConfig,
    client: httpx.AsyncClient,
    *,
    initializers: Sequence[PageInitializer] = DEFAULT_INITIALIZERS,
    collapsible_menu: Optional[CollapsibleMenu] = None,
) -> str:
    """Run the full startup sequence on a page shell and return the finished HTML."""
    page = BeautifulSoup(shell_html, "html.parser")
    startup = await init_app(
        page, config, client,
        initializers=initializers,
        collapsible_menu=collapsible_menu,
    )
    rendered = await startup.menu_loaded()
    log.info("BUILD PAGE: fragments=%s menu=%s", startup.loaded_components, rendered)
    return str(page)
