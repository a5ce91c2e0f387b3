"""
Tests for environment-driven settings.
"""
import pydantic
import pytest

from order_export.config import ExportSettings

REQUIRED = {
    "SHOPIFY_STORE": "demo.myshopify.com",
    "SHOPIFY_ACCESS_TOKEN": "shpat_test",
    "SFTP_HOST": "sftp.example.com",
    "SFTP_USER": "exporter",
    "SFTP_PASSWORD": "secret",
    "SFTP_REMOTE_PATH": "/upload/orders.csv",
}


@pytest.fixture
def env(monkeypatch):
    for key, value in REQUIRED.items():
        monkeypatch.setenv(key, value)
    return monkeypatch


def test_reads_environment_with_defaults(env):
    settings = ExportSettings(_env_file=None)

    assert settings.shopify_store == "demo.myshopify.com"
    assert settings.sftp_remote_path == "/upload/orders.csv"
    assert settings.sftp_port == 22
    assert settings.shopify_api_version == "2024-01"
    assert settings.shopify_page_limit == 250
    assert settings.schedule == "0 1 * * 1"
    assert settings.timezone == "UTC"
    assert settings.log_file == "shopify_export.log"
    assert settings.on_error == "raise"
    assert settings.quote_all is False


def test_overrides(env):
    env.setenv("SFTP_PORT", "2222")
    env.setenv("EXPORT_ON_ERROR", "warn")
    env.setenv("EXPORT_QUOTE_ALL", "true")
    settings = ExportSettings(_env_file=None)

    assert settings.sftp_port == 2222
    assert settings.on_error == "warn"
    assert settings.quote_all is True


def test_missing_required(env):
    env.delenv("SFTP_HOST")
    with pytest.raises(pydantic.ValidationError):
        ExportSettings(_env_file=None)


def test_rejects_unknown_error_mode(env):
    env.setenv("EXPORT_ON_ERROR", "ignore")
    with pytest.raises(pydantic.ValidationError):
        ExportSettings(_env_file=None)


def test_env_file(tmp_path, monkeypatch):
    for key in REQUIRED:
        monkeypatch.delenv(key, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("\n".join(f"{k}={v}" for k, v in REQUIRED.items()), encoding="utf-8")

    settings = ExportSettings(_env_file=str(env_file))
    assert settings.sftp_user == "exporter"
