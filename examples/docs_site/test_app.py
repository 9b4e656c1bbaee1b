"""Tests for the docs_site example."""

from verso.testing import TestClient


class TestDocsSite:
    async def test_home(self, example_site) -> None:
        async with TestClient(example_site) as client:
            response = await client.get("/")

        assert response.status == 200
        assert response.text.startswith("<!doctype html>")
        assert '<a href="/" aria-current="page">Home</a>' in response.text
        assert "<h1>Verso</h1>" in response.text

    async def test_docs_nested_in_kida_layout(self, example_site) -> None:
        async with TestClient(example_site) as client:
            response = await client.get("/docs")

        assert '<main><article class="docs" data-path="/docs"><h1>Documentation' in response.text
        assert "<li>Layouts</li>" in response.text

    async def test_template_page(self, example_site) -> None:
        async with TestClient(example_site) as client:
            response = await client.get("/docs/install")

        assert "You are reading /docs/install." in response.text
        assert '<a href="/docs/install" aria-current="page">' in response.text

    async def test_stylesheet(self, example_site) -> None:
        async with TestClient(example_site) as client:
            response = await client.get("/styles/site.css")

        assert response.content_type == "text/css"

    async def test_private_module_not_built(self, example_site) -> None:
        async with TestClient(example_site) as client:
            response = await client.get("/_links")

        assert response.status == 404

    async def test_health_handler(self, example_site) -> None:
        async with TestClient(example_site) as client:
            response = await client.get("/healthz")

        assert response.text == "ok"
