# interactions.py
# Page initializers that run once the structural fragments have settled.
# Every one of them must tolerate a page where its elements are missing.
from typing import Callable, Protocol, Tuple

from bs4 import BeautifulSoup

from config import SiteConfig


class CollapsibleMenu(Protocol):
    def hide(self) -> None: ...


PageInitializer = Callable[[BeautifulSoup, SiteConfig], None]


def init_navbar(page: BeautifulSoup, config: SiteConfig) -> None:
    navbar = page.select_one(".navbar")
    if navbar is None:
        return
    navbar["data-scroll-threshold"] = str(config.scroll_threshold)


def init_animations(page: BeautifulSoup, config: SiteConfig) -> None:
    """Stagger the feature cards so they reveal one after another."""
    for index, card in enumerate(page.select(".feature-card")):
        classes = card.get("class") or []
        if "reveal-card" not in classes:
            card["class"] = list(classes) + ["reveal-card"]
        card["data-delay"] = str(index * config.animation_delay)


DEFAULT_INITIALIZERS: Tuple[PageInitializer, ...] = (init_navbar, init_animations)
