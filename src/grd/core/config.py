"""Configuration loading for grd."""

from pathlib import Path
from dataclasses import dataclass, field
import logging
import os

import yaml

from grd.core.errors import ConfigError, UnrecognizedProviderError
from grd.core.providers import normalize_host, parse_provider
from grd.models.repository import Provider, Repository

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def default_config_path() -> Path:
    """Location of the config file ($GRD_CONFIG or the XDG config dir)."""
    if "GRD_CONFIG" in os.environ:
        return Path(os.environ["GRD_CONFIG"])
    base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "grd" / "config.yaml"


@dataclass
class GrdConfig:
    """Configuration for grd."""

    config_path: Path | None = None
    hosts: dict[str, Provider] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def default(cls) -> "GrdConfig":
        """Create config from the default config file, if there is one."""
        return cls.load(default_config_path())

    @classmethod
    def load(cls, path: Path) -> "GrdConfig":
        """Load config from a YAML file. A missing file gives defaults."""
        if not path.exists():
            return cls(config_path=path)

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        logger.debug("Loaded config from %s", path)
        return cls.from_dict(data, path)

    @classmethod
    def from_dict(cls, data: dict, path: Path | None = None) -> "GrdConfig":
        """Create config from parsed YAML data."""
        hosts_data = data.get("hosts") or {}
        tokens_data = data.get("tokens") or {}
        if not isinstance(hosts_data, dict) or not isinstance(tokens_data, dict):
            raise ConfigError("'hosts' and 'tokens' must be mappings of host names")

        hosts = {}
        for host, provider_name in hosts_data.items():
            try:
                hosts[normalize_host(str(host))] = parse_provider(str(provider_name))
            except UnrecognizedProviderError as e:
                raise ConfigError(f"Invalid website type for host '{host}': {e}") from e

        try:
            timeout = float(data.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout: {data.get('timeout')!r}") from e

        return cls(
            config_path=path,
            hosts=hosts,
            tokens={normalize_host(str(h)): str(t) for h, t in tokens_data.items()},
            timeout=timeout,
        )

    def token_for(self, repository: Repository) -> str | None:
        """Get the configured API token for a repository's host."""
        if repository.host is None:
            return None
        return self.tokens.get(normalize_host(repository.host))


# Global config instance
_config: GrdConfig | None = None


def get_config() -> GrdConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = GrdConfig.default()
    return _config


def set_config(config: GrdConfig | None) -> None:
    """Set a custom configuration (useful for testing)."""
    global _config
    _config = config
