# config.py
import os
from typing import Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class SiteConfig(BaseModel):
    """Immutable settings for one site: where the static assets live and how cards link out."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field("http://localhost:8000", description="Root of the static site")
    header_path: str = "assets/components/header.html"
    footer_path: str = "assets/components/footer.html"
    menu_path: str = "assets/data/menu.json"

    whatsapp_number: str = Field("18090000000", description="Contact used in order deep links")
    order_greeting: str = "Hola"
    currency_symbol: str = "RD$ "

    scroll_threshold: int = 50
    animation_delay: int = Field(150, description="ms between staggered feature cards")

    fetch_timeout: float = 10.0
    fetch_retries: int = Field(0, ge=0)

    @property
    def fragments(self) -> Tuple[Tuple[str, str], ...]:
        return (
            ("#header-container", self.header_path),
            ("#footer-container", self.footer_path),
        )

    @classmethod
    def from_env(cls) -> "SiteConfig":
        load_dotenv()
        defaults = cls()
        return cls(
            base_url=os.getenv("SITE_BASE_URL", defaults.base_url),
            header_path=os.getenv("SITE_HEADER_PATH", defaults.header_path),
            footer_path=os.getenv("SITE_FOOTER_PATH", defaults.footer_path),
            menu_path=os.getenv("SITE_MENU_PATH", defaults.menu_path),
            whatsapp_number=os.getenv("SITE_WHATSAPP_NUMBER", defaults.whatsapp_number),
            order_greeting=os.getenv("SITE_ORDER_GREETING", defaults.order_greeting),
            currency_symbol=os.getenv("SITE_CURRENCY_SYMBOL", defaults.currency_symbol),
            scroll_threshold=int(os.getenv("SITE_SCROLL_THRESHOLD", str(defaults.scroll_threshold))),
            animation_delay=int(os.getenv("SITE_ANIMATION_DELAY", str(defaults.animation_delay))),
            fetch_timeout=float(os.getenv("SITE_FETCH_TIMEOUT", str(defaults.fetch_timeout))),
            fetch_retries=int(os.getenv("SITE_FETCH_RETRIES", str(defaults.fetch_retries))),
        )
