"""Repository reference model."""

from dataclasses import dataclass
from enum import Enum


class Provider(str, Enum):
    """Release API dialect of a hosting website."""

    GITHUB = "github"
    GITEA = "gitea"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Repository:
    """A repository on a specific hosting website."""

    provider: Provider
    owner: str
    name: str
    host: str | None = None
    sub_path: str = ""
    scheme: str = "https"
    passed_string: str = ""

    @property
    def full_name(self) -> str:
        """owner/name format."""
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.passed_string or self.full_name
