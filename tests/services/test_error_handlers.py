"""Global Error Handlers - plain-text statuses for failures escaping the image endpoint.

Tests cover:
    - Domain errors raised inside the image route reach the domain handler
    - Unexpected exceptions reach the catch-all and never leak internals
    - The JSON endpoint keeps its always-200 contract for the same failures
"""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from contributors_image.api.routes import contributors as contributors_routes
from contributors_image.core.errors import NoContributorsError, RenderFailureError
from contributors_image.main import app

ACME = {"owner": "acme", "repo": "widgets"}


@pytest.fixture
async def lenient_client(client):
    """Like `client`, but the catch-all's re-raise does not fail the test."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _fail_rendering(monkeypatch, exc: Exception) -> None:
    async def fail(*args, **kwargs):
        raise exc

    monkeypatch.setattr(contributors_routes, "render_repository_image", fail)


async def test_render_failure_is_plain_text_500(client, monkeypatch, caplog):
    _fail_rendering(monkeypatch, RenderFailureError("png", "surface exploded"))

    with caplog.at_level(logging.ERROR, logger="contributors_image.api.error_handlers"):
        res = await client.get("/api/contributors/image", params=ACME)

    assert res.status_code == 500
    assert res.text == "Failed to generate image"
    assert res.headers["content-type"].startswith("text/plain")
    assert any(
        getattr(r, "error_code", None) == "RENDER_FAILURE" for r in caplog.records
    )


async def test_domain_404_outside_not_found_is_500(client, monkeypatch):
    _fail_rendering(monkeypatch, NoContributorsError("acme", "widgets"))

    res = await client.get("/api/contributors/image", params=ACME)

    assert res.status_code == 500
    assert res.text == "Failed to generate image"


async def test_missing_parameter_logged_as_warning(client, caplog):
    with caplog.at_level(logging.WARNING, logger="contributors_image.api.error_handlers"):
        res = await client.get("/api/contributors/image", params={"owner": "acme"})

    assert res.status_code == 400
    [record] = [r for r in caplog.records if r.name.endswith("error_handlers")]
    assert record.levelno == logging.WARNING
    assert record.error_code == "INVALID_INPUT"


async def test_unexpected_exception_hides_internals(lenient_client, monkeypatch):
    _fail_rendering(monkeypatch, RuntimeError("secret internals"))

    res = await lenient_client.get("/api/contributors/image", params=ACME)

    assert res.status_code == 500
    assert res.text == "Failed to generate image"
    assert "secret" not in res.text


async def test_gallery_failures_stay_in_band(client, monkeypatch):
    async def fail(*args, **kwargs):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(contributors_routes, "build_gallery", fail)

    res = await client.post(
        "/api/contributors", json={"repoUrl": "https://github.com/acme/widgets"},
    )

    assert res.status_code == 200
    assert res.json()["success"] is False
    assert "secret" not in res.text
