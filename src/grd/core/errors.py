"""Error types raised by grd.

Every error is terminal for the current command. The CLI prints the message
and exits with the error's ``exit_code``.
"""


class GrdError(Exception):
    """Base class for all grd errors."""

    exit_code = 1


class ConfigError(GrdError):
    """Configuration file could not be read or is invalid."""

    exit_code = 2


class InvalidRepositoryError(GrdError):
    """Repository string could not be parsed."""

    exit_code = 2


class UnrecognizedProviderError(GrdError):
    """Website type could not be guessed from the repository."""

    exit_code = 2


class NetworkError(GrdError):
    """Transport failure while talking to the API."""

    exit_code = 3


class ApiError(GrdError):
    """API answered with an error status or an unusable body."""

    exit_code = 4


class ReleaseNotFoundError(GrdError):
    """No release carries the requested tag."""

    exit_code = 5


class NoReleaseFoundError(GrdError):
    """No release qualifies as the latest one."""

    exit_code = 5


class InvalidPatternError(GrdError):
    """Asset pattern is not a valid regular expression."""

    exit_code = 6


class NoAssetFoundError(GrdError):
    """No asset of the release matches the pattern."""

    exit_code = 7


class AmbiguousAssetError(GrdError):
    """More than one asset matches the pattern."""

    exit_code = 8

    def __init__(self, message: str, matches: list[str] | None = None):
        super().__init__(message)
        self.matches = matches or []


class DownloadError(GrdError):
    """Error during download."""

    exit_code = 9
