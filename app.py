# app.py
import re
import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from starlette.middleware.gzip import GZipMiddleware
from httpx import AsyncClient, Limits, Timeout
from contextlib import asynccontextmanager

from config import SiteConfig
from fetch import ResourceUnavailable, http_get_text
from website import assemble_page

# Logging
log = logging.getLogger("uvicorn.error")

PAGE_NAME_PAT = re.compile(r"^[a-z0-9][a-z0-9_-]{0,63}$", re.I)


# ────────────────────────────────────────────────────────────────────────────
# App & shared HTTP client (lifespan)
# ────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    config = SiteConfig.from_env()
    app.state.config = config
    app.state.http = AsyncClient(
        base_url=config.base_url,
        limits=Limits(max_connections=100, max_keepalive_connections=20),
        timeout=Timeout(config.fetch_timeout, connect=5.0),
    )
    log.info("Serving pages from %s (menu=%s)", config.base_url, config.menu_path)
    try:
        yield
    finally:
        await app.state.http.aclose()

app = FastAPI(title="Home Made RD Pages", version="1.0", lifespan=lifespan)

# Compression
app.add_middleware(GZipMiddleware, minimum_size=500)


# ────────────────────────────────────────────────────────────────────────────
# Endpoints
# ────────────────────────────────────────────────────────────────────────────
@app.get("/", include_in_schema=False)
async def root() -> Dict[str, Any]:
    return {
        "ok": True,
        "service": "Home Made RD Pages",
        "version": getattr(app, "version", "unknown"),
        "endpoints": ["/healthz", "/pages/{name}"],
    }

@app.get("/healthz", summary="Liveness probe")
async def healthz():
    return {"ok": True}

@app.get("/pages/{name}", response_class=HTMLResponse, summary="Assemble a page shell with its fragments and menu")
async def page(name: str, request: Request):
    if not PAGE_NAME_PAT.match(name):
        raise HTTPException(404, "Unknown page")

    config: SiteConfig = request.app.state.config
    client: AsyncClient = request.app.state.http
    shell_url = f"{name}.html"
    try:
        shell = await http_get_text(client, shell_url, timeout=config.fetch_timeout, retries=config.fetch_retries)
    except ResourceUnavailable as e:
        if e.status_code == 404:
            raise HTTPException(404, "Unknown page")
        log.error(f"Shell fetch failed for {shell_url}: {e}")
        raise HTTPException(502, "Page shell unavailable")

    html = await assemble_page(shell, config, client)
    return HTMLResponse(html)


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8080)
