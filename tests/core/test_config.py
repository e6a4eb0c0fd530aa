from pathlib import Path

import pytest

from errata.core.config import DEFAULT_TOPICS, ErrataConfig
from errata.exceptions import ConfigLoadError


def test_errata_config_load_defaults(tmp_path: Path):
    """It should load default settings when no config file or env vars are present."""
    config = ErrataConfig.load(tmp_path)

    assert config.paths.site_root == tmp_path
    assert config.paths.posts_dir == Path("_posts")
    assert config.paths.abs_posts_dir == tmp_path / "_posts"
    assert config.paths.abs_output_dir == tmp_path / "_site"
    assert config.paths.abs_templates_dir is None
    assert config.build.strict is False
    assert config.feed.limit == 20
    assert config.rotation.topics == DEFAULT_TOPICS
    assert config.rotation.catch_all == "main"


def test_errata_config_load_from_toml_file(tmp_path: Path):
    """It should load settings from an .errata.toml file."""
    (tmp_path / ".errata.toml").write_text(
        """
[site]
title = "Error Notes"
url = "https://errors.example.com/"

[paths]
posts_dir = "content/posts"
templates_dir = "layouts"

[rotation]
topics = ["react", "vue"]
""",
        encoding="utf-8",
    )

    config = ErrataConfig.load(tmp_path)

    assert config.site.title == "Error Notes"
    assert config.site.base_url == "https://errors.example.com"
    assert config.site.description  # default is kept
    assert config.paths.abs_posts_dir == tmp_path / "content" / "posts"
    assert config.paths.abs_templates_dir == tmp_path / "layouts"
    assert config.rotation.topics == ["react", "vue"]


def test_errata_config_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Environment variables should take precedence over the config file."""
    (tmp_path / ".errata.toml").write_text(
        '[site]\ntitle = "From file"\nauthor = "File Author"\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("ERRATA_SITE__TITLE", "From env")
    monkeypatch.setenv("ERRATA_FEED__LIMIT", "5")

    config = ErrataConfig.load(tmp_path)

    assert config.site.title == "From env"
    assert config.site.author == "File Author"
    assert config.feed.limit == 5


def test_absolute_paths_are_not_rebased(tmp_path: Path):
    out = tmp_path / "elsewhere"
    (tmp_path / ".errata.toml").write_text(f'[paths]\noutput_dir = "{out.as_posix()}"\n', encoding="utf-8")

    assert ErrataConfig.load(tmp_path).paths.abs_output_dir == out


def test_malformed_toml_raises_config_error(tmp_path: Path):
    (tmp_path / ".errata.toml").write_text("[site\ntitle = ", encoding="utf-8")
    with pytest.raises(ConfigLoadError):
        ErrataConfig.load(tmp_path)


def test_invalid_file_value_raises_config_error(tmp_path: Path):
    (tmp_path / ".errata.toml").write_text("[feed]\nlimit = 0\n", encoding="utf-8")
    with pytest.raises(ConfigLoadError, match="feed.limit"):
        ErrataConfig.load(tmp_path)


def test_invalid_env_value_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ERRATA_FEED__LIMIT", "abc")
    with pytest.raises(ConfigLoadError, match="feed.limit"):
        ErrataConfig.load(tmp_path)
