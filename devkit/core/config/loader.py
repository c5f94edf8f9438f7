"""
Configuration loader — reads devkit.yml into ``Settings``.

The file is optional: with no devkit.yml every setting keeps its
default and the dotfiles directory is the repository this package
lives in.  A present-but-broken file is a ``ConfigError``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from devkit.core.errors import DevkitError
from devkit.core.models.placement import PlacementEntry

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "devkit.yml"

# Repository root: devkit/core/config/loader.py → three levels up
DEFAULT_DOTFILES_DIR = Path(__file__).resolve().parents[3]


class ConfigError(DevkitError):
    """Raised when devkit.yml is unreadable or invalid."""


class Settings(BaseModel):
    """Run settings — everything not detected from the host."""

    dotfiles_dir: Path = DEFAULT_DOTFILES_DIR
    home: Path = Field(default_factory=Path.home)
    backup_prefix: str = ".dotfiles-backup"
    default_shell: str = "zsh"
    skip_stages: list[str] = Field(default_factory=list)
    placements: list[PlacementEntry] = Field(default_factory=list)

    @property
    def fonts_dir(self) -> Path:
        return self.dotfiles_dir / "fonts"


def find_config_file(dotfiles_dir: Path | None = None) -> Path | None:
    """Return ``<dotfiles_dir>/devkit.yml`` if it exists."""
    candidate = (dotfiles_dir or DEFAULT_DOTFILES_DIR) / CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_settings(
    path: Path | None = None,
    *,
    dotfiles_dir: Path | None = None,
    home: Path | None = None,
) -> Settings:
    """Load and validate run settings.

    Args:
        path: Explicit path to devkit.yml.  If None, looks in the
            dotfiles directory and falls back to defaults.
        dotfiles_dir: Override for ``dotfiles_dir`` (``--repo``).
        home: Override for the home directory (tests).

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    data: dict = {}

    if path is not None and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    if path is None:
        path = find_config_file(dotfiles_dir)

    if path is not None:
        logger.debug("Loading settings from %s", path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Expected a YAML mapping in {path}, got {type(loaded).__name__}"
            )
        data = loaded

        # Relative dotfiles_dir is relative to the config file's directory
        if "dotfiles_dir" in data and data["dotfiles_dir"] is not None:
            configured = Path(str(data["dotfiles_dir"])).expanduser()
            if not configured.is_absolute():
                configured = path.parent / configured
            data["dotfiles_dir"] = configured.resolve()

    if dotfiles_dir is not None:
        data["dotfiles_dir"] = dotfiles_dir.resolve()
    if home is not None:
        data["home"] = home

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid devkit configuration: {e}") from e

    logger.info("Dotfiles directory: %s", settings.dotfiles_dir)
    return settings
