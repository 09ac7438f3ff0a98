import httpx
import pytest
from fastapi.testclient import TestClient

from app import app

SHELL = (
    "<html><body>"
    '<div id="header-container"></div>'
    '<div id="menu-container"><p class="loading">Cargando...</p></div>'
    '<div id="footer-container"></div>'
    "</body></html>"
)


@pytest.fixture
def serve(config, site_client, monkeypatch):
    """Run the app against a fake static site described by ``routes``."""
    monkeypatch.setattr("config.load_dotenv", lambda: None)
    started = []

    def _serve(routes):
        tc = TestClient(app)
        tc.__enter__()
        started.append((tc, app.state.http))
        app.state.config = config
        app.state.http = site_client(routes)
        return tc

    yield _serve

    for tc, original in started:
        app.state.http = original
        tc.__exit__(None, None, None)


def test_root_and_health(serve):
    tc = serve({})

    assert tc.get("/healthz").json() == {"ok": True}
    body = tc.get("/").json()
    assert body["ok"] is True
    assert "/pages/{name}" in body["endpoints"]


def test_page_is_assembled(serve, catalog):
    tc = serve({
        "/index.html": httpx.Response(200, text=SHELL),
        "/assets/components/header.html": httpx.Response(200, text="<nav>Home Made RD</nav>"),
        "/assets/components/footer.html": httpx.Response(200, text="<p>Santo Domingo</p>"),
        "/assets/data/menu.json": httpx.Response(200, json=catalog),
    })

    resp = tc.get("/pages/index")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "<nav>Home Made RD</nav>" in resp.text
    assert "<p>Santo Domingo</p>" in resp.text
    assert "Classic Burger" in resp.text and "Hotdog" in resp.text
    assert "Cargando..." not in resp.text


def test_page_survives_missing_fragments_and_catalog(serve):
    tc = serve({"/menu.html": httpx.Response(200, text=SHELL)})

    resp = tc.get("/pages/menu")

    assert resp.status_code == 200
    assert "Cargando..." in resp.text


def test_unknown_page_is_404(serve):
    tc = serve({})

    assert tc.get("/pages/nope").status_code == 404
    assert tc.get("/pages/bad.name").status_code == 404


def test_shell_server_error_is_502(serve):
    tc = serve({"/index.html": httpx.Response(500)})

    assert tc.get("/pages/index").status_code == 502
