"""Root conftest - shared test configuration."""

import os

# Ensure tests never send a real GitHub token or reach the real API
os.environ["GITHUB_TOKEN"] = ""
os.environ.setdefault("GITHUB_API_URL", "https://api.github.test")
os.environ.setdefault("LOG_FORMAT", "text")
