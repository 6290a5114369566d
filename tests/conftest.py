"""Shared fixtures: fake release API and isolated configuration."""

from dataclasses import dataclass, field
import functools

import httpx
import pytest
from click.testing import CliRunner

from grd.commands import common
from grd.core.client import ReleaseClient
from grd.core.config import GrdConfig, set_config

GITHUB_RELEASES_URL = "https://api.github.com/repos/VSCodium/vscodium/releases"
DOWNLOAD_BASE = "https://github.com/VSCodium/vscodium/releases/download"


def make_asset(tag: str, name: str, size: int = 1024) -> dict:
    return {
        "name": name,
        "size": size,
        "content_type": "application/octet-stream",
        "browser_download_url": f"{DOWNLOAD_BASE}/{tag}/{name}",
    }


def make_release(
    tag: str,
    asset_names: tuple[str, ...] = (),
    prerelease: bool = False,
    draft: bool = False,
    name: str | None = None,
) -> dict:
    return {
        "tag_name": tag,
        "name": name,
        "prerelease": prerelease,
        "draft": draft,
        "created_at": "2024-01-15T10:00:00Z",
        "html_url": f"https://github.com/VSCodium/vscodium/releases/tag/{tag}",
        "assets": [make_asset(tag, n) for n in asset_names],
    }


VSCODIUM_RELEASES = [
    make_release(
        "1.86.0-insider",
        ("codium_1.86.0_amd64.deb", "codium-1.86.0.x86_64.rpm"),
        prerelease=True,
    ),
    make_release(
        "1.85.2",
        (
            "codium_1.85.2_amd64.deb",
            "codium-1.85.2.x86_64.rpm",
            "VSCodium-linux-x64-1.85.2.tar.gz",
            "VSCodium-linux-x64-1.85.2.tar.gz.sha256",
        ),
        name="VSCodium 1.85.2",
    ),
    make_release("1.85.1", ("codium_1.85.1_amd64.deb",)),
]

DEB_URL = f"{DOWNLOAD_BASE}/1.85.2/codium_1.85.2_amd64.deb"
DEB_CONTENT = b"!<arch>\ndebian-binary" + bytes(range(256)) * 64


@dataclass
class FakeApi:
    """Routes requests by scheme://host/path to canned responses."""

    routes: dict = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        response = self.routes.get(key)
        if response is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(response):
            return response(request)
        # a Response can only be sent once
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )

    @property
    def urls(self) -> list[str]:
        return [f"{r.url.scheme}://{r.url.host}{r.url.path}" for r in self.requests]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, **kwargs) -> ReleaseClient:
        return ReleaseClient(transport=self.transport, **kwargs)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Never read the user's config file or token."""
    monkeypatch.delenv("GRD_TOKEN", raising=False)
    config = GrdConfig()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def api(monkeypatch) -> FakeApi:
    """Fake API that commands talk to instead of the network."""
    fake = FakeApi()
    monkeypatch.setattr(
        common, "ReleaseClient", functools.partial(ReleaseClient, transport=fake.transport)
    )
    return fake


@pytest.fixture
def vscodium_api(api) -> FakeApi:
    api.routes[GITHUB_RELEASES_URL] = httpx.Response(200, json=VSCODIUM_RELEASES)
    api.routes[DEB_URL] = httpx.Response(200, content=DEB_CONTENT)
    return api


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory so downloads land in tmp_path."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
