"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

import pytest
from edgepurge.core.config import PurgeConfig
from edgepurge.purge.client import CachePurgeClient
from edgepurge.purge.models import PurgeResponse

COMBINED_CSS = "assets/_combinedfiles/combined.min-1a933ce.css"
FRAMEWORK_CSS = "vendor/silverstripe/framework/src/Dev/Install/client/styles/install.css"


class FakePurgeClient(CachePurgeClient):
    """In-memory client recording every call.

    Responses are handed out in order; once exhausted every call succeeds.
    """

    def __init__(self, responses: Iterable[PurgeResponse] = ()) -> None:
        self.responses = list(responses)
        self.file_calls: list[tuple[str, list[str]]] = []
        self.zone_calls: list[str] = []
        self.closed = False

    def _next(self) -> PurgeResponse:
        if self.responses:
            return self.responses.pop(0)
        return PurgeResponse.ok()

    def purge_zone(self, zone_id: str) -> PurgeResponse:
        self.zone_calls.append(zone_id)
        return self._next()

    def purge_files(self, zone_id: str, urls: Sequence[str]) -> PurgeResponse:
        self.file_calls.append((zone_id, list(urls)))
        return self._next()

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakePurgeClient:
    """A client whose calls all succeed."""
    return FakePurgeClient()


@pytest.fixture
def make_client() -> Callable[..., FakePurgeClient]:
    """Factory for clients with scripted responses."""

    def _make(*responses: PurgeResponse) -> FakePurgeClient:
        return FakePurgeClient(responses)

    return _make


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A small website project with themes, bundles and vendor files."""
    base = tmp_path / "site"
    files = {
        COMBINED_CSS: "body{}",
        "assets/_combinedfiles/combined.min-1a933ce.js": "var a;",
        "assets/Uploads/photo.png": "png",
        FRAMEWORK_CSS: "html{}",
        "vendor/acme/widgets/client/widget.js": "var w;",
        "themes/simple/css/layout.css": "div{}",
        "themes/simple/css/LEGACY.CSS": "p{}",
        "themes/simple/javascript/script.js": "var s;",
        "themes/simple/data/menu.json": "{}",
        "themes/simple/images/logo.png": "png",
        "node_modules/lib/index.js": "module.exports={}",
        "README.md": "# site",
        "Makefile": "all:",
    }
    for relative, content in files.items():
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return base


@pytest.fixture
def enabled_config(project_dir: Path) -> PurgeConfig:
    """Enabled configuration pointing at the sample project."""
    return PurgeConfig(
        enabled=True,
        email="ops@example.com",
        auth_key="secret",
        zone_id="zone-123",
        base_url="https://www.example.com",
        base_folder=project_dir,
    )
