"""Tests for configuration module."""

import dataclasses
from pathlib import Path

import pytest
from config.settings import Config, FeedSettings, load_settings


def test_config_get_simple():
    """Test getting simple configuration values."""
    config = Config(environ={})

    assert config.get('scraper.concurrency') == 8
    assert config.get('rss.max_items') == 50


def test_config_get_default():
    """Test getting configuration with default value."""
    config = Config(environ={})

    assert config.get('nonexistent.key', 'default_value') == 'default_value'
    assert config.get('another.missing.key', 42) == 42


def test_config_get_path():
    """Test getting path configuration."""
    config = Config(environ={})

    assert isinstance(config.get_path('paths.output_dir'), Path)


def test_default_settings():
    """Test settings built from the shipped config.yaml."""
    settings = load_settings(environ={})

    assert settings.max_rss_items == 50
    assert settings.news_window_hours == 48
    assert settings.request_timeout == 15
    assert settings.concurrency == 8
    assert settings.news_max_entries == 1000
    assert settings.enable_image_sitemap is True
    assert settings.log_file is None
    # empty channel description falls back to the publication name
    assert settings.channel_description == settings.publication_name


def test_env_overrides():
    """Test environment variables override YAML values."""
    environ = {
        'SOURCE_SITEMAP': 'https://example.org/sitemap.xml',
        'MAX_RSS_ITEMS': '20',
        'NEWS_WINDOW_HOURS': '24',
        'ENABLE_IMAGE_SITEMAP': 'false',
        'CHANNEL_IMAGE_URL': 'https://example.org/logo.png',
        'CHANNEL_IMAGE_WIDTH': '88',
        'OUTPUT_DIR': 'public',
    }

    settings = load_settings(environ=environ)

    assert settings.sitemap_url == 'https://example.org/sitemap.xml'
    assert settings.max_rss_items == 20
    assert settings.news_window_hours == 24
    assert settings.enable_image_sitemap is False
    assert settings.channel_image_url == 'https://example.org/logo.png'
    assert settings.channel_image_width == 88
    assert settings.output_dir == Path('public')


def test_empty_env_value_keeps_default():
    """Test an empty environment value keeps the YAML default."""
    settings = load_settings(environ={'MAX_RSS_ITEMS': ''})
    assert settings.max_rss_items == 50


def test_invalid_numeric_override():
    """Test a non-numeric override names the variable."""
    with pytest.raises(ValueError, match="MAX_RSS_ITEMS"):
        load_settings(environ={'MAX_RSS_ITEMS': 'fifty'})


def test_invalid_boolean_override():
    """Test a non-boolean override names the variable."""
    with pytest.raises(ValueError, match="ENABLE_IMAGE_SITEMAP"):
        load_settings(environ={'ENABLE_IMAGE_SITEMAP': 'maybe'})


def test_invalid_pattern_rejected():
    """Test an invalid post URL regex is refused."""
    with pytest.raises(ValueError, match="Invalid post URL pattern"):
        load_settings(environ={'POST_URL_PATTERN': '(unclosed'})


def test_invalid_description_length_rejected():
    """Test a description cap too small to hold any text is refused."""
    with pytest.raises(ValueError, match="description_max_length"):
        load_settings(environ={'DESCRIPTION_MAX_LENGTH': '0'})


def test_missing_config_file(tmp_path):
    """Test a missing config file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / 'missing.yaml'), environ={})


def test_custom_config_file(tmp_path):
    """Test a custom config file with a partial layout."""
    config_file = tmp_path / 'config.yaml'
    config_file.write_text(
        "source:\n"
        "  sitemap_url: https://blog.example.net/sitemap.xml\n"
        "  site_link: https://blog.example.net\n"
        "  post_url_pattern: /articles/\n"
        "publication:\n"
        "  name: Blog\n"
        "scraper:\n"
        "  concurrency: 3\n",
        encoding='utf-8',
    )

    settings = load_settings(str(config_file), environ={})

    assert settings.sitemap_url == 'https://blog.example.net/sitemap.xml'
    assert settings.concurrency == 3
    assert settings.max_rss_items == 50


def test_settings_are_immutable(settings):
    """Test FeedSettings cannot be modified."""
    assert isinstance(settings, FeedSettings)
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.max_rss_items = 10
