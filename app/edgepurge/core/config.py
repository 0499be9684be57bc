"""Purge configuration and settings.

This module provides the configuration model and I/O functions for the
purge service. Configuration is stored in ~/.config/edgepurge/config.toml

Secrets may be supplied through the environment instead of the file:
EDGEPURGE_EMAIL, EDGEPURGE_AUTH_KEY and EDGEPURGE_ZONE_ID override the
corresponding file values when set.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from edgepurge.core.errors import EdgePurgeError
from edgepurge.core.paths import get_config_path

logger = logging.getLogger(__name__)

# Cloudflare API root
DEFAULT_API_URL = "https://api.cloudflare.com/client/v4"

# Extensions the CMS classifies as images
DEFAULT_IMAGE_CATEGORY_EXTENSIONS: tuple[str, ...] = (
    "alpha",
    "als",
    "bmp",
    "cel",
    "gif",
    "ico",
    "icon",
    "jpeg",
    "jpg",
    "pcx",
    "png",
    "ps",
    "psd",
    "tif",
    "tiff",
)

# Absolute path fragments that never hold publicly served assets
DEFAULT_BLACKLIST_ABSOLUTE_PATHNAMES: tuple[str, ...] = (
    "/vendor/",
    "/framework/",
    "/cms/",
    "/node_modules/",
    "/.git/",
)

ENV_OVERRIDES: dict[str, str] = {
    "EDGEPURGE_EMAIL": "email",
    "EDGEPURGE_AUTH_KEY": "auth_key",
    "EDGEPURGE_ZONE_ID": "zone_id",
}


class PurgeConfig(BaseModel):
    """Configuration for the purge service.

    Attributes:
        enabled: Master switch; when False every purge operation is a no-op.
        email: Account email used for API authentication.
        auth_key: API key used for API authentication.
        zone_id: Identifier of the CDN zone to purge.
        base_url: Public base URL used when building page and relative URLs.
        site_url: Fallback base URL when base_url is empty.
        base_folder: Project root that is scanned for asset files.
        assets_dir: Assets directory name under base_folder.
        combined_files_folder: Bundle output folder under assets_dir.
        image_category_extensions: Extensions the CMS classifies as images.
            None means the category is not configured; an empty list
            purges only image_file_extensions.
        image_file_extensions: Additional image extensions to purge.
        blacklist_absolute_pathnames: Path fragments excluded from scans.
        disable_default_blacklist_absolute_pathnames: Skip blacklist checks.
        api_url: CDN API root.
        timeout_seconds: Timeout for a single API request.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: Annotated[bool, Field(description="Enable cache purging")] = False
    email: Annotated[str, Field(description="API account email")] = ""
    auth_key: Annotated[str, Field(description="API authentication key")] = ""
    zone_id: Annotated[str, Field(description="CDN zone identifier")] = ""
    base_url: Annotated[str, Field(description="Public base URL for purged links")] = ""
    site_url: Annotated[str, Field(description="Fallback site base URL")] = ""
    base_folder: Annotated[
        Path,
        Field(default_factory=Path.cwd, description="Project base folder"),
    ]
    assets_dir: Annotated[str, Field(description="Assets directory name")] = "assets"
    combined_files_folder: Annotated[
        str,
        Field(description="Combined CSS/JS output folder under assets"),
    ] = "_combinedfiles"
    image_category_extensions: Annotated[
        list[str] | None,
        Field(description="Image category extensions (None = not configured)"),
    ] = list(DEFAULT_IMAGE_CATEGORY_EXTENSIONS)
    image_file_extensions: Annotated[
        list[str],
        Field(description="Additional image extensions"),
    ] = ["svg", "webp"]
    blacklist_absolute_pathnames: Annotated[
        list[str],
        Field(description="Absolute path fragments excluded from scans"),
    ] = list(DEFAULT_BLACKLIST_ABSOLUTE_PATHNAMES)
    disable_default_blacklist_absolute_pathnames: Annotated[
        bool,
        Field(description="Disable the path blacklist"),
    ] = False
    api_url: Annotated[str, Field(description="CDN API root")] = DEFAULT_API_URL
    timeout_seconds: Annotated[
        float,
        Field(gt=0, le=300, description="Request timeout in seconds (0-300)"),
    ] = 30.0

    @field_validator("image_file_extensions", "image_category_extensions")
    @classmethod
    def strip_leading_dots(cls, v: list[str] | None) -> list[str] | None:
        """Store extensions without a leading dot."""
        if v is None:
            return None
        return [ext.lstrip(".") for ext in v]

    @property
    def combined_assets_folder(self) -> Path:
        """Folder holding combined CSS/JS bundles."""
        return self.base_folder / self.assets_dir / self.combined_files_folder

    @property
    def effective_base_url(self) -> str:
        """Base URL for relative links, falling back to the site URL."""
        return self.base_url or self.site_url

    @property
    def blacklist_enabled(self) -> bool:
        """Whether scans apply the path blacklist."""
        return not self.disable_default_blacklist_absolute_pathnames


class PurgeConfigError(EdgePurgeError):
    """Base exception for purge configuration errors."""


class PurgeConfigNotFoundError(PurgeConfigError):
    """Raised when the config file is not found."""


class PurgeConfigParseError(PurgeConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> PurgeConfig:
    """Load purge configuration from a TOML file.

    Environment overrides are applied on top of the file contents.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated PurgeConfig object.

    Raises:
        PurgeConfigNotFoundError: If the config file doesn't exist.
        PurgeConfigParseError: If the TOML syntax is invalid.
        PurgeConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise PurgeConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise PurgeConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise PurgeConfigError(f"Failed to read config: {e}") from e

    for env_var, field_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            logger.debug("Using %s from environment", field_name)
            data[field_name] = value

    try:
        return PurgeConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise PurgeConfigError(f"Invalid config content: {e}") from e


def save_config(config: PurgeConfig, path: Path | None = None) -> Path:
    """Save purge configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The PurgeConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        PurgeConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise PurgeConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: PurgeConfig) -> dict[str, object]:
    """Convert PurgeConfig to a dictionary for TOML serialization.

    TOML has no null, so an unset image category is left out of the file.
    Loading such a file applies the default image category.

    Args:
        config: The PurgeConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    data = config.model_dump(mode="json")
    if data["image_category_extensions"] is None:
        del data["image_category_extensions"]
    return data


def get_default_config() -> PurgeConfig:
    """Create a default PurgeConfig.

    Returns:
        PurgeConfig with default settings.
    """
    return PurgeConfig()
