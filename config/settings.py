"""Configuration management module for feedsmith."""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
import yaml
from dotenv import load_dotenv


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ('1', 'true', 'yes', 'on'):
        return True
    if normalized in ('0', 'false', 'no', 'off', ''):
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


# Environment variable -> (dot-notation config key, converter)
ENV_OVERRIDES: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    'SOURCE_SITEMAP': ('source.sitemap_url', str),
    'SITE_LINK': ('source.site_link', str),
    'POST_URL_PATTERN': ('source.post_url_pattern', str),
    'PUBLICATION_NAME': ('publication.name', str),
    'CHANNEL_DESCRIPTION': ('publication.channel_description', str),
    'RSS_LANG': ('publication.rss_language', str),
    'PUB_LANG': ('publication.news_language', str),
    'FEED_SELF_URL': ('rss.feed_self_url', str),
    'MAX_RSS_ITEMS': ('rss.max_items', int),
    'RSS_TTL': ('rss.ttl', int),
    'CHANNEL_IMAGE_URL': ('rss.channel_image.url', str),
    'CHANNEL_IMAGE_WIDTH': ('rss.channel_image.width', int),
    'CHANNEL_IMAGE_HEIGHT': ('rss.channel_image.height', int),
    'NEWS_WINDOW_HOURS': ('news.window_hours', float),
    'ENABLE_IMAGE_SITEMAP': ('images.enable_sitemap', _parse_bool),
    'MAX_IMAGES_PER_PAGE': ('images.max_per_page', int),
    'REQUEST_TIMEOUT': ('scraper.request_timeout', float),
    'CONCURRENCY': ('scraper.concurrency', int),
    'BATCH_DELAY': ('scraper.batch_delay', float),
    'DESCRIPTION_MAX_LENGTH': ('scraper.description_max_length', int),
    'USER_AGENT': ('scraper.user_agent', str),
    'OUTPUT_DIR': ('paths.output_dir', str),
    'LOG_LEVEL': ('logging.level', str),
    'LOG_FILE': ('logging.log_file', str),
}


@dataclass(frozen=True)
class FeedSettings:
    """Immutable run configuration, built once and passed to every component."""
    sitemap_url: str
    site_link: str
    post_url_pattern: str
    publication_name: str
    channel_description: str
    rss_language: str
    news_language: str
    feed_self_url: str
    channel_image_url: str = ""
    channel_image_width: int = 144
    channel_image_height: int = 144
    rss_ttl: int = 60
    max_rss_items: int = 50
    news_window_hours: float = 48
    news_max_entries: int = 1000
    request_timeout: float = 15
    concurrency: int = 8
    batch_delay: float = 0.25
    user_agent: str = "feedsmith/1.0"
    enable_image_sitemap: bool = True
    max_images_per_page: int = 10
    description_max_length: int = 220
    output_dir: Path = Path(".")
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        try:
            re.compile(self.post_url_pattern)
        except re.error as e:
            raise ValueError(f"Invalid post URL pattern {self.post_url_pattern!r}: {e}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")
        if self.max_rss_items < 0:
            raise ValueError(f"max_rss_items must be >= 0, got {self.max_rss_items}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.description_max_length < 1:
            raise ValueError(f"description_max_length must be >= 1, got {self.description_max_length}")


class Config:
    """Configuration manager that loads settings from YAML and environment variables."""

    def __init__(self, config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config.yaml file. If None, looks in config/ directory.
            environ: Environment mapping to read overrides from (default: os.environ,
                after loading a local .env file)
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        if config_path is None:
            config_path = str(Path(__file__).parent / "config.yaml")

        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}

        self._load_config()
        self._apply_env_overrides(environ)

    def _load_config(self):
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            self._config = yaml.safe_load(f) or {}

    def _apply_env_overrides(self, environ: Mapping[str, str]):
        """Apply environment variable overrides to configuration."""
        for env_name, (key, convert) in ENV_OVERRIDES.items():
            raw = environ.get(env_name)
            if raw is None or raw == '':
                continue
            try:
                value = convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_name}: {e}")
            self._set(key, value)

    def _set(self, key: str, value: Any):
        node = self._config
        parts = key.split('.')
        for k in parts[:-1]:
            if not isinstance(node.get(k), dict):
                node[k] = {}
            node = node[k]
        node[parts[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'rss.max_items')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('scraper.concurrency')
            8
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_path(self, key: str) -> Path:
        """Get a path configuration value as a Path object."""
        value = self.get(key)
        if value is None:
            raise ValueError(f"Path configuration not found: {key}")
        return Path(value)

    def settings(self) -> FeedSettings:
        """Build the immutable FeedSettings record from the loaded values."""
        name = self.get('publication.name', '')
        return FeedSettings(
            sitemap_url=self.get('source.sitemap_url'),
            site_link=self.get('source.site_link'),
            post_url_pattern=self.get('source.post_url_pattern', '.*'),
            publication_name=name,
            channel_description=self.get('publication.channel_description') or name,
            rss_language=self.get('publication.rss_language', 'en'),
            news_language=self.get('publication.news_language', 'en'),
            feed_self_url=self.get('rss.feed_self_url', ''),
            channel_image_url=self.get('rss.channel_image.url') or '',
            channel_image_width=int(self.get('rss.channel_image.width', 144)),
            channel_image_height=int(self.get('rss.channel_image.height', 144)),
            rss_ttl=int(self.get('rss.ttl', 60)),
            max_rss_items=int(self.get('rss.max_items', 50)),
            news_window_hours=float(self.get('news.window_hours', 48)),
            news_max_entries=int(self.get('news.max_entries', 1000)),
            request_timeout=float(self.get('scraper.request_timeout', 15)),
            concurrency=int(self.get('scraper.concurrency', 8)),
            batch_delay=float(self.get('scraper.batch_delay', 0.25)),
            user_agent=self.get('scraper.user_agent', 'feedsmith/1.0'),
            enable_image_sitemap=bool(self.get('images.enable_sitemap', True)),
            max_images_per_page=int(self.get('images.max_per_page', 10)),
            description_max_length=int(self.get('scraper.description_max_length', 220)),
            output_dir=Path(self.get('paths.output_dir') or '.'),
            log_level=str(self.get('logging.level', 'INFO')),
            log_file=Path(self.get('logging.log_file')) if self.get('logging.log_file') else None,
        )


def load_settings(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None
) -> FeedSettings:
    """
    Load YAML defaults plus environment overrides into a FeedSettings record.

    Args:
        config_path: Path to config file (default: config/config.yaml)
        environ: Environment mapping (default: os.environ plus .env)

    Returns:
        FeedSettings instance
    """
    return Config(config_path, environ).settings()
