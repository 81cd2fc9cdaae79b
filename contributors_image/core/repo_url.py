"""Repository URL parsing - owner/repo extraction from pasted GitHub URLs.

Invariants:
    - Accepts scheme-less, .git-suffixed, trailing-slash and deep (/tree/...) URLs
    - Returns None (never raises) for anything that is not a github.com repo URL
"""

import re

from contributors_image.core.domain_types import RepositoryRef

_PATTERNS = (
    re.compile(r"github\.com/([^/]+)/([^/]+?)(?:\.git)?(?:/.*)?$"),
    re.compile(r"github\.com/([^/]+)/([^/]+)"),
)


def parse_github_url(url: str) -> RepositoryRef | None:
    """Extract owner/repo from a GitHub repository URL."""
    url = url.strip()
    for pattern in _PATTERNS:
        match = pattern.search(url)
        if match:
            owner, repo = match.group(1), match.group(2)
            # strip query/fragment from a bare repo segment
            repo = re.split(r"[?#]", repo, maxsplit=1)[0]
            if owner and repo:
                return RepositoryRef(owner=owner, repo=repo)
    return None
