"""Tests for the release API client."""

import httpx
import pytest

from grd.core.client import ReleaseClient, USER_AGENT
from grd.core.errors import ApiError, NetworkError
from grd.core.providers import parse_repository
from grd.models.repository import Provider

from conftest import GITHUB_RELEASES_URL, VSCODIUM_RELEASES, make_release


def test_github_releases(api):
    api.routes[GITHUB_RELEASES_URL] = httpx.Response(200, json=VSCODIUM_RELEASES)

    with api.client() as client:
        releases = client.list_releases(parse_repository("github.com/VSCodium/vscodium"))

    assert [r.tag_name for r in releases] == ["1.86.0-insider", "1.85.2", "1.85.1"]
    assert releases[0].prerelease
    assert releases[1].name == "VSCodium 1.85.2"
    assert releases[2].name == "1.85.1"
    assert releases[1].assets[0].name == "codium_1.85.2_amd64.deb"
    assert releases[1].assets[0].size == 1024

    request = api.requests[0]
    assert request.headers["User-Agent"] == USER_AGENT
    assert request.headers["Accept"] == "application/vnd.github+json"
    assert request.url.params["per_page"] == "100"
    assert "Authorization" not in request.headers


def test_github_token(api):
    api.routes[GITHUB_RELEASES_URL] = httpx.Response(200, json=[])

    with api.client(token="ghp_secret") as client:
        assert client.list_releases(parse_repository("VSCodium/vscodium")) == []

    assert api.requests[0].headers["Authorization"] == "Bearer ghp_secret"


def test_github_enterprise_url(api):
    url = "https://ghe.example.com/api/v3/repos/team/tool/releases"
    api.routes[url] = httpx.Response(200, json=[make_release("v1")])

    repo = parse_repository("ghe.example.com/team/tool", override=Provider.GITHUB)
    with api.client() as client:
        assert [r.tag_name for r in client.list_releases(repo)] == ["v1"]


def test_gitea_url_with_sub_path(api):
    url = "http://git.example.com/gitea/api/v1/repos/me/tool/releases"
    api.routes[url] = httpx.Response(200, json=[make_release("v0.2.0")])

    repo = parse_repository("http://git.example.com/gitea/me/tool", override="gitea")
    with api.client(token="abc") as client:
        releases = client.list_releases(repo)

    assert [r.tag_name for r in releases] == ["v0.2.0"]
    request = api.requests[0]
    assert request.headers["Authorization"] == "token abc"
    assert request.url.params["limit"] == "50"


def test_drafts_are_skipped(api):
    api.routes[GITHUB_RELEASES_URL] = httpx.Response(
        200, json=[make_release("v2", draft=True), make_release("v1")]
    )
    with api.client() as client:
        releases = client.list_releases(parse_repository("VSCodium/vscodium"))
    assert [r.tag_name for r in releases] == ["v1"]


def test_not_found(api):
    with api.client() as client:
        with pytest.raises(ApiError, match="not found"):
            client.list_releases(parse_repository("VSCodium/vscodium"))


@pytest.mark.parametrize("status", [401, 403])
def test_access_denied(api, status):
    api.routes[GITHUB_RELEASES_URL] = httpx.Response(status, json={"message": "rate limit"})
    with api.client() as client:
        with pytest.raises(ApiError, match="rate limit"):
            client.list_releases(parse_repository("VSCodium/vscodium"))


def test_server_error(api):
    api.routes[GITHUB_RELEASES_URL] = httpx.Response(502)
    with api.client() as client:
        with pytest.raises(ApiError, match="502"):
            client.list_releases(parse_repository("VSCodium/vscodium"))


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json={"message": "not a list"}),
        httpx.Response(200, json=[{"name": "missing tag"}]),
        httpx.Response(200, json=["just a string"]),
        httpx.Response(200, json=[{"tag_name": "v1", "assets": [{"name": "no url"}]}]),
    ],
)
def test_unusable_body(api, response):
    api.routes[GITHUB_RELEASES_URL] = response
    with api.client() as client:
        with pytest.raises(ApiError):
            client.list_releases(parse_repository("VSCodium/vscodium"))


def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with ReleaseClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(NetworkError, match="connection refused"):
            client.list_releases(parse_repository("VSCodium/vscodium"))
