"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Ensure the scraper package is importable
REPO_ROOT = Path(__file__).resolve().parents[2]
SCRAPER_ROOT = REPO_ROOT / "scraper"
if str(SCRAPER_ROOT) not in sys.path:
    sys.path.insert(0, str(SCRAPER_ROOT))

# Set required environment variables before any imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from rugby_scraper.config import Settings  # noqa: E402

RUGBYPASS_LIVE_HTML = """
<html><body>
<div class="matches">
  <a href="https://www.rugbypass.com/live/ulster-vs-benetton/?g=946485" class="link-box"
     aria-label="View Ulster vs Benetton rugby union game stats and news">Ulster v Benetton</a>
  <a href="/live/leinster-vs-munster/" class="link-box"
     aria-label="View Leinster vs Munster rugby union game stats and news">Leinster v Munster</a>
  <a href="/live/broken/?g=1" class="link-box"
     aria-label="View something rugby union game stats and news">Broken</a>
  <a href="/news/" class="link-box" aria-label="Read the latest news">News</a>
</div>
</body></html>
"""

SUPERSPORT_FIXTURES_HTML = """
<html><body>
<div class="fixture-item">
  <span class="fixture-competition">United Rugby Championship</span>
  <div class="fixture-home"><span class="team-name">Stormers</span></div>
  <div class="fixture-away"><span class="team-name">Bulls</span></div>
  <span class="fixture-time">Sat 30 Nov 17:00</span>
  <span class="fixture-venue">DHL Stadium</span>
</div>
<div class="fixture-item">
  <div class="fixture-home"><span class="team-name">Sharks</span></div>
  <div class="fixture-away"><span class="team-name">Lions</span></div>
  <span class="fixture-time">Sun 1 Dec 15:00</span>
</div>
<div class="fixture-item">
  <div class="fixture-home"><span class="team-name">Nobody</span></div>
</div>
</body></html>
"""

SUPERSPORT_RESULTS_HTML = """
<html><body>
<div class="result-item">
  <span class="result-competition">Currie Cup</span>
  <div class="result-home"><span class="team-name">Griquas</span></div>
  <div class="result-away"><span class="team-name">Pumas</span></div>
  <span class="result-score">27-24</span>
  <span class="result-venue">Kimberley</span>
  <span class="result-date">2024-11-23</span>
</div>
<div class="result-item">
  <div class="result-home"><span class="team-name">Cheetahs</span></div>
  <div class="result-away"><span class="team-name">Leopards</span></div>
  <span class="result-date">2024-11-24</span>
</div>
</body></html>
"""


@pytest.fixture
def make_settings(tmp_path) -> Callable[..., Settings]:
    """Build Settings writing into a temporary data directory."""

    def _make(**overrides) -> Settings:
        settings = Settings(**overrides)
        settings.output_config.data_dir = str(tmp_path / "data")
        return settings

    return _make


@pytest.fixture
def page_transport() -> Callable[[dict[str, tuple[int, str]]], httpx.MockTransport]:
    """MockTransport answering ``(status, body)`` by URL without query string; unknown URLs get a 404."""

    def _make(pages: dict[str, tuple[int, str]]) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
            status, body = pages.get(key, (404, "not found"))
            return httpx.Response(status, text=body)

        return httpx.MockTransport(handler)

    return _make
