# menu.py
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup
from bs4.element import Tag

from config import SiteConfig
from fetch import SiteAssetError, http_get_json

log = logging.getLogger("uvicorn.error")

MenuItem = Dict[str, Any]

EMPTY_CATEGORY_TEXT = "No hay productos disponibles en esta categoría por el momento."
ORDER_LABEL = "Ordenar"

FEATURED_COLUMN = ["col-md-6", "col-lg-4"]
DEFAULT_COLUMN = ["col-sm-6", "col-lg-3"]


@dataclass(frozen=True)
class RenderTarget:
    role: str
    container_id: str
    matches: Callable[[MenuItem], bool]
    featured: bool = False


# Each target filters the full catalog on its own; unknown categories only show up under "all".
RENDER_TARGETS: Sequence[RenderTarget] = (
    RenderTarget("featured", "featured-container", lambda it: it.get("featured") is True, featured=True),
    RenderTarget("all", "menu-container", lambda it: True),
    RenderTarget("burgers", "burgers-container", lambda it: it.get("category") == "burgers"),
    RenderTarget("sides", "sides-container", lambda it: it.get("category") in ("hotdogs", "sides")),
    RenderTarget("yaroas", "yaroas-container", lambda it: it.get("category") == "yaroas"),
)


def target_for(role: str) -> RenderTarget:
    for target in RENDER_TARGETS:
        if target.role == role:
            return target
    raise KeyError(role)


def filter_items(catalog: Sequence[MenuItem], target: RenderTarget) -> List[MenuItem]:
    return [item for item in catalog if target.matches(item)]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def format_price(price: Any, symbol: str) -> str:
    if price is None:
        return ""
    try:
        return f"{symbol}{float(price):,.2f}"
    except (TypeError, ValueError):
        return f"{symbol}{price}"


def order_link(item: MenuItem, config: SiteConfig) -> str:
    """WhatsApp deep link with the order message pre-filled."""
    message = f"{config.order_greeting}, quisiera ordenar: {_text(item.get('name'))}"
    return f"https://wa.me/{config.whatsapp_number}?text={quote(message, safe='')}"


def _new_tag(soup: BeautifulSoup, name: str, classes: List[str], text: Optional[str] = None, **attrs: str) -> Tag:
    tag = soup.new_tag(name, attrs={"class": classes, **attrs})
    if text is not None:
        tag.string = text
    return tag


def build_card(item: MenuItem, config: SiteConfig, *, featured: bool = False) -> Tag:
    """Build the card column for one catalog item.

    Values are set as tag text and attributes, never spliced as markup, so
    whatever the catalog holds is escaped on output.
    """
    soup = BeautifulSoup("", "html.parser")
    name = _text(item.get("name"))

    column = _new_tag(soup, "div", FEATURED_COLUMN if featured else DEFAULT_COLUMN)
    card = _new_tag(soup, "div", ["card", "menu-card", "h-100", "reveal"])
    column.append(card)

    if item.get("popular") is True:
        card.append(_new_tag(soup, "span", ["badge", "badge-popular"], "Popular"))

    card.append(_new_tag(
        soup, "img", ["card-img-top"],
        src=_text(item.get("image")), alt=name, loading="lazy",
    ))

    body = _new_tag(soup, "div", ["card-body", "d-flex", "flex-column"])
    heading = _new_tag(soup, "div", ["d-flex", "justify-content-between", "align-items-start"])
    heading.append(_new_tag(soup, "h5", ["card-title"], name))
    heading.append(_new_tag(soup, "span", ["price"], format_price(item.get("price"), config.currency_symbol)))
    body.append(heading)
    body.append(_new_tag(soup, "p", ["card-text"], _text(item.get("description"))))
    body.append(_new_tag(
        soup, "a", ["btn", "btn-order", "mt-auto"], ORDER_LABEL,
        href=order_link(item, config), target="_blank", rel="noopener noreferrer",
    ))
    card.append(body)
    return column


def build_empty_placeholder() -> Tag:
    soup = BeautifulSoup("", "html.parser")
    wrapper = _new_tag(soup, "div", ["col-12", "text-center", "menu-empty"])
    wrapper.append(_new_tag(soup, "p", ["text-muted"], EMPTY_CATEGORY_TEXT))
    return wrapper


def render_menu(items: Sequence[MenuItem], container: Tag, config: SiteConfig, *, featured: bool = False) -> None:
    container.clear()
    if not items:
        container.append(build_empty_placeholder())
        return
    for item in items:
        container.append(build_card(item, config, featured=featured))


async def load_menu_system(page: BeautifulSoup, config: SiteConfig, client: httpx.AsyncClient) -> List[str]:
    """Fetch the catalog once and render every render target present on the page.

    Returns the ids of the containers that were rendered. Any failure is
    logged and leaves every container untouched.
    """
    try:
        catalog = await http_get_json(client, config.menu_path, timeout=config.fetch_timeout, retries=config.fetch_retries)
    except SiteAssetError as e:
        log.error("[Menu] Error loading catalog %s: %s", config.menu_path, e)
        return []

    if not isinstance(catalog, list):
        log.error("[Menu] Error loading catalog %s: expected a JSON array, got %s", config.menu_path, type(catalog).__name__)
        return []

    items: List[MenuItem] = []
    for idx, entry in enumerate(catalog):
        if isinstance(entry, dict):
            items.append(entry)
        else:
            log.warning("[Menu] skipping catalog entry %d: not an object", idx)

    rendered: List[str] = []
    for target in RENDER_TARGETS:
        container = page.find(id=target.container_id)
        if container is None:
            continue
        try:
            render_menu(filter_items(items, target), container, config, featured=target.featured)
        except Exception:
            log.exception("[Menu] Failed to render %s", target.container_id)
            continue
        rendered.append(target.container_id)

    log.info("menu rendered: %d items into %s", len(items), rendered or "no containers")
    return rendered
