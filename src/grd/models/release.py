"""Release data models shared by all providers."""

from dataclasses import dataclass, field


@dataclass
class Asset:
    """A downloadable file attached to a release."""

    name: str
    download_url: str
    size: int = 0
    content_type: str = "application/octet-stream"

    @classmethod
    def from_api_response(cls, data: dict) -> "Asset":
        """Create Asset from a GitHub or Gitea API response.

        Both APIs expose the same field names for release attachments.
        """
        return cls(
            name=data["name"],
            download_url=data["browser_download_url"],
            size=data.get("size") or 0,
            content_type=data.get("content_type") or "application/octet-stream",
        )


@dataclass
class Release:
    """A tagged release of a repository."""

    tag_name: str
    name: str
    prerelease: bool
    assets: list[Asset] = field(default_factory=list)
    draft: bool = False
    created_at: str = ""
    html_url: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "Release":
        """Create Release from a GitHub or Gitea API response."""
        assets = [Asset.from_api_response(a) for a in data.get("assets") or []]
        return cls(
            tag_name=data["tag_name"],
            name=data.get("name") or data["tag_name"],
            prerelease=bool(data.get("prerelease", False)),
            assets=assets,
            draft=bool(data.get("draft", False)),
            created_at=data.get("created_at") or "",
            html_url=data.get("html_url") or "",
        )
