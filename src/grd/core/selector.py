"""Release and asset selection."""

import logging
import re

from grd.core.errors import (
    AmbiguousAssetError,
    InvalidPatternError,
    NoAssetFoundError,
    NoReleaseFoundError,
    ReleaseNotFoundError,
)
from grd.models.release import Asset, Release

logger = logging.getLogger(__name__)


def select_release(
    releases: list[Release],
    tag: str | None = None,
    include_prerelease: bool = False,
) -> Release:
    """Pick the release to work with.

    With a tag, the release carrying exactly that tag is returned whether
    or not it is a prerelease. Without one, the first release in API order
    that is not a prerelease (or the very first, if prereleases are
    included) is the latest.
    """
    if tag is not None:
        for release in releases:
            if release.tag_name == tag:
                logger.debug("Selected release %s by tag", release.tag_name)
                return release
        raise ReleaseNotFoundError(f'Could not find release with tag "{tag}"')

    for release in releases:
        if include_prerelease or not release.prerelease:
            logger.debug("Selected latest release %s", release.tag_name)
            return release

    if not releases:
        raise NoReleaseFoundError("Repository has no releases")
    raise NoReleaseFoundError(
        "Repository only has prereleases. Use --prerelease to include them."
    )


def filter_releases(
    releases: list[Release], include_prerelease: bool = False, count: int | None = None
) -> list[Release]:
    """Releases in API order, prereleases only if included, at most count."""
    selected = [r for r in releases if include_prerelease or not r.prerelease]
    if count is not None:
        selected = selected[:count]
    return selected


def compile_pattern(pattern: str) -> re.Pattern:
    """Compile an asset name pattern."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(f'Could not compile pattern "{pattern}": {e}') from e


def match_assets(release: Release, pattern: str | re.Pattern) -> list[Asset]:
    """All assets whose name matches the pattern, in release order."""
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)
    return [asset for asset in release.assets if pattern.search(asset.name)]


def select_asset(release: Release, pattern: str | re.Pattern) -> Asset:
    """Find the single asset matching the pattern.

    A download must be unambiguous: zero or several matches are errors.
    """
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)

    matches = match_assets(release, pattern)
    if not matches:
        raise NoAssetFoundError(
            f'Could not find pattern "{pattern.pattern}" in release "{release.tag_name}"'
        )
    if len(matches) > 1:
        names = [asset.name for asset in matches]
        raise AmbiguousAssetError(
            f'Pattern "{pattern.pattern}" matches {len(matches)} assets in release '
            f'"{release.tag_name}": {", ".join(names)}',
            matches=names,
        )

    logger.debug("Selected asset %s", matches[0].name)
    return matches[0]
