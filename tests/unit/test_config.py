"""Unit tests for configuration."""

from pathlib import Path

import pytest

from discogs_playlist.config import Config, load_config
from discogs_playlist.exceptions import ConfigParseError, ConfigValidationError


def test_default_config() -> None:
    """Test that default config has sensible values."""
    config = Config()
    assert config.colored_output is True
    assert config.match_mode == "track"
    assert config.spotify_access_token is None
    assert config.batch_size == 100
    assert config.playlist_public is False
    assert config.playlist_description == "Converted from Discogs collection"


def test_load_missing_config(temp_dir: Path) -> None:
    """Test loading when config file doesn't exist."""
    config_path = temp_dir / "nonexistent.toml"
    config, warnings = load_config(config_path)

    assert config is not None
    assert config.config_path is None
    assert len(warnings) > 0  # Should warn about missing file


def test_load_valid_config(sample_config: Path) -> None:
    """Test loading a valid config file."""
    config, warnings = load_config(sample_config)

    assert warnings == []
    assert config.spotify_access_token == "config-token"
    assert config.match_mode == "album"
    assert config.artist_fields == ["Artist", "Band"]
    assert config.title_fields == ["title", "Title"]
    assert config.album_delay == 0.5
    assert config.track_delay == 0.1
    assert config.playlist_name == "Shelf"
    assert config.playlist_public is True
    assert config.batch_size == 50
    assert config.colored_output is False
    assert config.config_path == sample_config.resolve()


def test_load_invalid_toml(temp_dir: Path) -> None:
    """Test loading invalid TOML raises error."""
    config_path = temp_dir / "invalid.toml"
    config_path.write_text("this is not valid [ toml")

    with pytest.raises(ConfigParseError):
        load_config(config_path)


@pytest.mark.parametrize(
    "content",
    [
        '[display]\ncolored_output = "not a boolean"\n',
        "[matching]\nartist_fields = \"artist\"\n",
        "[matching]\ntrack_delay = true\n",
        "[playlist]\nbatch_size = 1.5\n",
        "[spotify]\naccess_token = 42\n",
    ],
)
def test_config_validation_invalid_type(temp_dir: Path, content: str) -> None:
    """Test that invalid types raise validation error."""
    config_path = temp_dir / "bad_types.toml"
    config_path.write_text(content)

    with pytest.raises(ConfigValidationError):
        load_config(config_path)


def test_invalid_match_mode(temp_dir: Path) -> None:
    config_path = temp_dir / "mode.toml"
    config_path.write_text('[matching]\nmode = "artist"\n')

    with pytest.raises(ConfigValidationError, match="matching.mode"):
        load_config(config_path)


def test_match_mode_case_insensitive(temp_dir: Path) -> None:
    config_path = temp_dir / "mode.toml"
    config_path.write_text('[matching]\nmode = "Album"\n')

    config, _ = load_config(config_path)
    assert config.match_mode == "album"


@pytest.mark.parametrize("size", [0, 101])
def test_batch_size_out_of_range(size: int) -> None:
    with pytest.raises(ConfigValidationError, match="batch_size"):
        Config(batch_size=size).validate()


def test_empty_field_aliases() -> None:
    with pytest.raises(ConfigValidationError):
        Config(title_fields=[]).validate()


def test_negative_delays_clamped() -> None:
    config = Config(track_delay=-1.0)
    warnings = config.validate()

    assert config.track_delay == 0.0
    assert any("Negative" in w for w in warnings)


def test_similarity_out_of_range_warns() -> None:
    warnings = Config(artist_similarity=150).validate()
    assert any("artist_similarity" in w for w in warnings)


def test_api_base_trailing_slash(temp_dir: Path) -> None:
    config_path = temp_dir / "api.toml"
    config_path.write_text('[spotify]\napi_base = "http://localhost:8080/v1/"\n')

    config, _ = load_config(config_path)
    assert config.spotify_api_base == "http://localhost:8080/v1"
