"""Embed Code - markdown/HTML snippets that transclude the image endpoint.

Invariants:
    - Pure string templating: no network, no rendering
    - Three variants: markdown (PNG), HTML (PNG), markdown (SVG via format=svg)
"""

from urllib.parse import urlencode

IMAGE_ENDPOINT_PATH = "/api/contributors/image"


def resolve_base_url(deploy_url: str) -> str:
    """Turn a deployment host into a base URL (http only for localhost)."""
    deploy_url = deploy_url.strip().rstrip("/")
    if deploy_url.startswith(("http://", "https://")):
        return deploy_url
    protocol = "http" if "localhost" in deploy_url else "https"
    return f"{protocol}://{deploy_url}"


def image_url(base_url: str, owner: str, repo: str, image_format: str | None = None) -> str:
    params = {"owner": owner, "repo": repo}
    if image_format:
        params["format"] = image_format
    return f"{base_url}{IMAGE_ENDPOINT_PATH}?{urlencode(params)}"


def compose_embed(owner: str, repo: str, repo_url: str, base_url: str) -> str:
    """Embed snippets for a repository, pointing at base_url's image endpoint."""
    png_src = image_url(base_url, owner, repo)
    svg_src = image_url(base_url, owner, repo, "svg")
    graph_url = f"{repo_url.rstrip('/')}/graphs/contributors"
    return (
        "<!-- Contributors -->\n"
        f"[![Contributors]({png_src})]({graph_url})\n"
        "\n"
        "<!-- Or as HTML -->\n"
        f'<a href="{graph_url}">\n'
        f'  <img src="{png_src}" alt="Contributors" />\n'
        "</a>\n"
        "\n"
        "<!-- SVG Version -->\n"
        f"[![Contributors]({svg_src})]({graph_url})"
    )
