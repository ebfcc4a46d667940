from pathlib import Path

from api.config import Settings, load_settings
from storage.naming import ALLOWED_TYPES


def test_defaults_when_no_file(tmp_path):
    settings = load_settings(tmp_path / "missing.yaml", env={})
    assert settings == Settings()
    assert settings.port == 3002
    assert settings.base_url == "localhost:3002"
    assert settings.token_key == ""
    assert settings.allowed_types == list(ALLOWED_TYPES)
    assert settings.max_files == 10


def test_yaml_values(tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text(
        "server:\n"
        "  port: 8080\n"
        "  base_url: https://cdn.example.com\n"
        "storage:\n"
        "  media_dir: /srv/media\n"
        "uploads:\n"
        "  max_files: 3\n"
        "  allowed_types: [image/png]\n"
    )
    settings = load_settings(config, env={})
    assert settings.port == 8080
    assert settings.base_url == "https://cdn.example.com"
    assert settings.media_dir == Path("/srv/media")
    assert settings.upload_dir == Path("/srv/media/upload")
    assert settings.max_files == 3
    assert settings.allowed_types == ["image/png"]


def test_env_overrides_yaml(tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text("server:\n  port: 8080\n")
    settings = load_settings(config, env={
        "TOKEN_KEY": "abc",
        "PORT": "9000",
        "BASE_URL": "http://example.org",
        "LOG_LEVEL": "debug",
    })
    assert settings.token_key == "abc"
    assert settings.port == 9000
    assert settings.base_url == "http://example.org"
    assert settings.log_level == "debug"


def test_empty_yaml_file(tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text("")
    assert load_settings(config, env={}) == Settings()


def test_default_media_dir_is_relative_to_working_directory():
    settings = Settings()
    assert settings.media_dir == Path("media")
    assert settings.upload_dir == Path("media/upload")
