"""
Tests for the page routes.

The home page is an SPA shell sent through a canvas Response, so headers
(CSP with the inline-script nonce, security, gzip) come from the page.
"""

import json
import re

import httpx


def extract_state(html: str) -> dict:
    match = re.search(r"window\.__PAGE_STATE__ = \n(.*?)\n;", html, re.DOTALL)
    assert match, "hydration state not found"
    return json.loads(match.group(1))


class TestHealth:
    async def test_health(self, async_client: httpx.AsyncClient):
        response = await async_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestHomePage:
    async def test_root_returns_spa(self, async_client: httpx.AsyncClient):
        """GET / returns 200 with the SPA mount point."""
        response = await async_client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"] == "text/html; charset=UTF-8"
        assert '<div id="app"></div>' in response.text
        assert "<title>Canvas</title>" in response.text

    async def test_security_headers(self, async_client: httpx.AsyncClient):
        response = await async_client.get("/")
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "SAMEORIGIN"
        assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"
        # development default
        assert "strict-transport-security" not in response.headers

    async def test_csp_allows_inline_state_script(self, async_client: httpx.AsyncClient):
        response = await async_client.get("/")
        csp = response.headers["content-security-policy"]
        nonce = re.search(r'<script nonce="([^"]+)">', response.text).group(1)

        assert csp.startswith("default-src 'self'; script-src 'self' ")
        assert f"'nonce-{nonce}'" in csp

    async def test_nonce_differs_per_request(self, async_client: httpx.AsyncClient):
        first = await async_client.get("/")
        second = await async_client.get("/")
        assert first.headers["content-security-policy"] != second.headers["content-security-policy"]

    async def test_gzip_when_accepted(self, async_client: httpx.AsyncClient):
        response = await async_client.get("/", headers={"Accept-Encoding": "gzip"})
        assert response.headers["content-encoding"] == "gzip"
        assert response.headers["vary"] == "Accept-Encoding"
        assert '<div id="app"></div>' in response.text

    async def test_identity_when_gzip_not_accepted(self, async_client: httpx.AsyncClient):
        response = await async_client.get("/", headers={"Accept-Encoding": "identity"})
        assert "content-encoding" not in response.headers
        assert int(response.headers["content-length"]) == len(response.content)

    async def test_embedded_state_matches_api(self, async_client: httpx.AsyncClient):
        html = (await async_client.get("/")).text
        api = (await async_client.get("/api/page")).json()

        state = extract_state(html)
        assert state["title"] == api["title"]
        assert state["canvas"] == api["canvas"]


class TestPageApi:
    async def test_page_payload_shape(self, async_client: httpx.AsyncClient):
        response = await async_client.get("/api/page")
        assert response.status_code == 200
        assert "application/json" in response.headers["content-type"]

        data = response.json()
        assert set(data) == {"title", "locale", "charset", "flags", "meta", "seo", "csp", "canvas"}
        assert data["flags"] & 1  # CSP enabled
        assert data["csp"]["default-src"] == ["'self'"]
        assert data["canvas"]["template"] == "page/default"
        assert [c["name"] for c in data["canvas"]["children"]] == ["header", "main"]


class TestRenderApi:
    async def test_render_posted_page(self, async_client: httpx.AsyncClient):
        payload = {
            "title": "Posted",
            "flags": 2 | 4 | 8,
            "canvas": {
                "template": "page/default",
                "children": [
                    {"name": "hero", "props": {"heading": "Hi"}, "children": [{"name": "cta"}]},
                ],
            },
        }
        response = await async_client.post("/api/render", json=payload)

        assert response.status_code == 200
        assert "<title>Posted</title>" in response.text
        assert '<div data-node="hero"><div data-node="cta"></div></div>' in response.text
        assert response.headers["x-robots-tag"] == "noindex, nofollow"
        assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"
        assert response.headers["pragma"] == "no-cache"
        assert response.headers["expires"] == "0"

    async def test_render_with_csp(self, async_client: httpx.AsyncClient):
        payload = {"flags": 1, "csp": {"default-src": ["'self'"], "block-all-mixed-content": ""}}
        response = await async_client.post("/api/render", json=payload)
        assert response.headers["content-security-policy"] == "default-src 'self'; block-all-mixed-content"

    async def test_render_rejects_unknown_flags(self, async_client: httpx.AsyncClient):
        response = await async_client.post("/api/render", json={"flags": 64})
        assert response.status_code == 422

    async def test_render_rejects_unknown_fields(self, async_client: httpx.AsyncClient):
        response = await async_client.post("/api/render", json={"title": "x", "theme": "dark"})
        assert response.status_code == 422

    async def test_render_rejects_non_canvas_root(self, async_client: httpx.AsyncClient):
        response = await async_client.post("/api/render", json={"canvas": {"name": "div"}})
        assert response.status_code == 422
