"""
Configuration parameters for javaupdater.
"""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from javaupdater.javaupdater_exceptions import JavaUpdaterException
from javaupdater.javaupdater_utils import Platform, PlatformUtils

ADOPTIUM_API_URL = "https://api.adoptium.net"
DEFAULT_REQUEST_TIMEOUT = 60.0
DEFAULT_PAGE_SIZE = 50
CONFIG_TABLE = "javaupdater"


class Vendor(str, Enum):
    """
    JDK vendors whose release catalog javaupdater knows how to query
    """

    ADOPTIUM = "adoptium"


@dataclass
class JavaUpdaterConfig:
    """
    Configuration parameters
    """

    java_version: str = "17"
    java_vendor: str = Vendor.ADOPTIUM.value
    platform: Platform = field(default_factory=PlatformUtils.get_platform)
    install_root: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    catalog_url: str = ADOPTIUM_API_URL
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if not isinstance(self.platform, Platform):
            try:
                self.platform = Platform(str(self.platform).lower())
            except ValueError:
                raise JavaUpdaterException(f"Unsupported platform: {self.platform}")
        self.java_version = str(self.java_version)
        if self.request_timeout <= 0:
            raise JavaUpdaterException("'request_timeout' must be positive")
        if self.page_size <= 0:
            raise JavaUpdaterException("'page_size' must be positive")

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "JavaUpdaterConfig":
        """
        Create a JavaUpdaterConfig instance from a dictionary, ignoring unknown keys
        """
        return cls(**{k: v for k, v in env.items() if k in inspect.signature(cls).parameters})

    @classmethod
    def from_toml(cls, path: str) -> "JavaUpdaterConfig":
        """
        Create a JavaUpdaterConfig from the [javaupdater] table of a TOML file
        """
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise JavaUpdaterException(f"Failed to load configuration from {path}: {e}") from e

        section = toml_dict.get(CONFIG_TABLE, {})
        if not isinstance(section, dict):
            raise JavaUpdaterException(f"'{CONFIG_TABLE}' in {path} must be a table")
        return cls.from_dict(section)
