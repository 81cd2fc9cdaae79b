"""Embed Code - markdown/HTML snippets for the image endpoint."""

from contributors_image.core.embed_code import compose_embed, resolve_base_url

BASE = "https://contrib.example.com"


def test_embed_contains_three_variants():
    code = compose_embed("acme", "widgets", "https://github.com/acme/widgets", BASE)
    png = f"{BASE}/api/contributors/image?owner=acme&repo=widgets"
    graph = "https://github.com/acme/widgets/graphs/contributors"

    assert f"[![Contributors]({png})]({graph})" in code
    assert f'<a href="{graph}">' in code
    assert f'<img src="{png}" alt="Contributors" />' in code
    assert f"[![Contributors]({png}&format=svg)]({graph})" in code


def test_embed_sections_in_order():
    code = compose_embed("acme", "widgets", "https://github.com/acme/widgets", BASE)
    first = code.index("<!-- Contributors -->")
    html = code.index("<!-- Or as HTML -->")
    svg = code.index("<!-- SVG Version -->")
    assert first < html < svg


def test_trailing_slash_on_repo_url_not_doubled():
    code = compose_embed("acme", "widgets", "https://github.com/acme/widgets/", BASE)
    assert "widgets//graphs" not in code


def test_query_values_are_url_encoded():
    code = compose_embed("a b", "c&d", "https://github.com/x/y", BASE)
    assert "owner=a+b&repo=c%26d" in code


def test_localhost_uses_http():
    assert resolve_base_url("localhost:3000") == "http://localhost:3000"


def test_deployment_host_uses_https():
    assert resolve_base_url("my-app.vercel.app") == "https://my-app.vercel.app"


def test_explicit_scheme_kept_and_slash_stripped():
    assert resolve_base_url("http://10.0.0.5:8000/") == "http://10.0.0.5:8000"
