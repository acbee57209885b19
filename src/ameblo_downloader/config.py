"""Configuration management."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from ameblo_downloader.core import ErrorPolicy


@dataclass
class SiteConfig:
    """Blog platform settings."""
    base_url: str = "https://ameblo.jp"


@dataclass
class SelectorsConfig:
    """CSS selectors for the blog markup."""
    pagination_end: str = "li>a.skin-paginationEnd"
    archive_item: str = "ul.skin-archiveList>li.skin-borderQuiet"
    entry_link: str = "h2>a"
    title: str = "h1.skin-entryTitle"
    pubdate: str = "p.skin-entryPubdate>time"
    pubdate_decoration: str = "span"
    entry_body: str = "div.skin-entryBody"
    image: str = "img"


@dataclass
class HttpConfig:
    """HTTP client settings."""
    timeout: float = 30.0
    user_agent: str = "ameblo-downloader/0.1"


@dataclass
class PathsConfig:
    """Path settings."""
    output_dir: Path = Path("ameblo")


@dataclass
class DownloadConfig:
    """Image download settings."""
    on_error: ErrorPolicy = ErrorPolicy.ABORT
    dir_mode: int = 0o755
    chunk_size: int = 64 * 1024


@dataclass
class Settings:
    """Application settings."""
    
    site: SiteConfig = field(default_factory=SiteConfig)
    selectors: SelectorsConfig = field(default_factory=SelectorsConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)
    
    @property
    def base_url(self) -> str:
        return self.site.base_url
    
    @property
    def output_dir(self) -> Path:
        return self.paths.output_dir
    
    @property
    def on_error(self) -> ErrorPolicy:
        return self.download.on_error


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}
    
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e


def _apply_section(section: object, values: dict, name: str) -> None:
    """Copy YAML values onto a config dataclass, coercing known types."""
    known = {f.name for f in fields(section)}
    for key, value in values.items():
        if key not in known:
            raise ValueError(f"Unknown setting '{name}.{key}'")
        current = getattr(section, key)
        try:
            if isinstance(current, Path):
                value = Path(value)
            elif isinstance(current, ErrorPolicy):
                value = ErrorPolicy(value)
            elif key == "dir_mode":
                # Written as octal digits, quoted or not
                value = int(str(value), 8)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid '{name}.{key}': {value!r}") from e
        setattr(section, key, value)


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)
    settings = Settings()
    
    for name in ("site", "selectors", "http", "paths", "download"):
        if name in config:
            _apply_section(getattr(settings, name), config[name] or {}, name)
    
    # Environment wins over the file
    output_dir = os.getenv("AMEBLO_OUTPUT_DIR")
    if output_dir:
        settings.paths.output_dir = Path(output_dir)
    
    base_url = os.getenv("AMEBLO_BASE_URL")
    if base_url:
        settings.site.base_url = base_url
    
    return settings
