"""Repository parsing and website type detection."""

import logging
import re

from grd.core.errors import InvalidRepositoryError, UnrecognizedProviderError
from grd.models.repository import Provider, Repository

logger = logging.getLogger(__name__)


# Hosts whose website type is known without configuration
KNOWN_HOSTS: dict[str, Provider] = {
    "github.com": Provider.GITHUB,
    "gitea.com": Provider.GITEA,
    "codeberg.org": Provider.GITEA,
}

# Hosts a repository may omit
DEFAULT_HOSTS: dict[Provider, str] = {
    Provider.GITHUB: "github.com",
}

_SCHEME_PATTERN = re.compile(r"^(?P<scheme>https?)://", re.IGNORECASE)


def parse_provider(value: str) -> Provider:
    """Parse a website type name such as 'github' or 'Gitea'."""
    try:
        return Provider(value.strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in Provider)
        raise UnrecognizedProviderError(
            f"Unknown website type '{value}'. Choose from: {choices}"
        ) from None


def normalize_host(host: str) -> str:
    """Lowercase a host and strip its port."""
    return host.lower().split(":", 1)[0]


def normalize_sub_path(sub_path: str | None) -> str:
    """Normalize a sub path to '/path' form ('' for none)."""
    if not sub_path:
        return ""
    stripped = sub_path.strip("/")
    return f"/{stripped}" if stripped else ""


def split_repository(text: str) -> tuple[str, str | None, str, str, str]:
    """Split a repository string into (scheme, host, sub_path, owner, name).

    Accepts:
    - owner/name
    - host/owner/name
    - https://host/owner/name
    - https://host/sub/path/owner/name

    A trailing slash and a '.git' suffix are ignored.
    """
    rest = text.strip()
    scheme = "https"

    match = _SCHEME_PATTERN.match(rest)
    if match:
        scheme = match.group("scheme").lower()
        rest = rest[match.end():]

    rest = rest.rstrip("/")
    if rest.endswith(".git"):
        rest = rest[: -len(".git")]

    parts = rest.split("/")
    if len(parts) < 2 or any(not part for part in parts):
        raise InvalidRepositoryError(
            f"Invalid repository: {text}. Use 'owner/name' or a repository URL."
        )

    owner, name = parts[-2], parts[-1]
    if len(parts) == 2:
        if match:
            # https://host/name has no owner
            raise InvalidRepositoryError(f"Invalid repository: {text}")
        return scheme, None, "", owner, name

    host = parts[0]
    sub_path = normalize_sub_path("/".join(parts[1:-2]))
    return scheme, host, sub_path, owner, name


def detect_provider(
    text: str,
    override: Provider | str | None = None,
    hosts: dict[str, Provider] | None = None,
) -> Provider:
    """Work out which release API a repository string refers to.

    An explicit override always wins. Otherwise the host is looked up in
    the known hosts, extended by ``hosts`` (from the config file). A
    repository without a host is assumed to live on GitHub.
    """
    if override is not None:
        return override if isinstance(override, Provider) else parse_provider(override)

    _, host, _, _, _ = split_repository(text)
    if host is None:
        return Provider.GITHUB

    mapping = {**KNOWN_HOSTS, **{normalize_host(h): p for h, p in (hosts or {}).items()}}
    provider = mapping.get(normalize_host(host))
    if provider is None:
        raise UnrecognizedProviderError(
            f"Failed to guess website type of '{host}'. "
            "Pass --website-type or add the host to the config file."
        )
    return provider


def parse_repository(
    text: str,
    override: Provider | str | None = None,
    sub_path: str | None = None,
    hosts: dict[str, Provider] | None = None,
) -> Repository:
    """Parse user input into a Repository.

    ``sub_path`` replaces the sub path found in the URL. It only has an
    effect for self-hosted websites such as Gitea.
    """
    provider = detect_provider(text, override, hosts)
    scheme, host, parsed_sub_path, owner, name = split_repository(text)

    if host is None:
        host = DEFAULT_HOSTS.get(provider)
        if host is None:
            raise InvalidRepositoryError(
                f"Repository '{text}' needs a host for website type {provider}, "
                "e.g. gitea.com/owner/name"
            )

    if provider == Provider.GITHUB and parsed_sub_path:
        # GitHub serves repositories at the root, extra segments mean a page URL
        raise InvalidRepositoryError(
            f"Invalid repository: {text}. Use 'owner/name' or https://{host}/owner/name"
        )

    if sub_path is not None:
        parsed_sub_path = normalize_sub_path(sub_path)

    repository = Repository(
        provider=provider,
        owner=owner,
        name=name,
        host=host,
        sub_path=parsed_sub_path,
        scheme=scheme,
        passed_string=text,
    )
    logger.debug("Parsed repository %s as %r", text, repository)
    return repository
