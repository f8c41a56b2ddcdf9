import logging
import os

import pytest

from sales_intel_config import settings


@pytest.fixture(autouse=True)
def _fresh_caches():
    settings.project_root.cache_clear()
    settings.load_env_once.cache_clear()
    yield
    settings.project_root.cache_clear()
    settings.load_env_once.cache_clear()


def test_env_file_does_not_override_existing(tmp_path, monkeypatch):
    env_file = tmp_path / "custom.env"
    env_file.write_text("CLAY_API_KEY=from-file\nGONG_ACCESS_KEY=file-gong\n", encoding="utf-8")
    monkeypatch.setenv("SALES_INTEL_ENV_FILE", str(env_file))
    monkeypatch.setenv("GONG_ACCESS_KEY", "already-set")

    try:
        assert settings.load_env_once() == env_file.resolve()
        assert os.environ["CLAY_API_KEY"] == "from-file"
        assert os.environ["GONG_ACCESS_KEY"] == "already-set"
    finally:
        os.environ.pop("CLAY_API_KEY", None)


def test_project_root_override(tmp_path, monkeypatch):
    monkeypatch.setenv("SALES_INTEL_REPO_ROOT", str(tmp_path))
    assert settings.project_root() == tmp_path.resolve()


def test_project_root_override_must_exist(tmp_path, monkeypatch):
    monkeypatch.setenv("SALES_INTEL_REPO_ROOT", str(tmp_path / "missing"))
    with pytest.raises(RuntimeError):
        settings.project_root()


def test_telemetry_dir_and_flag(tmp_path, monkeypatch):
    monkeypatch.setenv("SALES_INTEL_TELEMETRY_DIR", str(tmp_path / "t"))
    assert settings.telemetry_dir() == (tmp_path / "t").resolve()

    monkeypatch.setenv("SALES_INTEL_DISABLE_TELEMETRY", "yes")
    assert settings.telemetry_disabled() is True
    monkeypatch.setenv("SALES_INTEL_DISABLE_TELEMETRY", "0")
    assert settings.telemetry_disabled() is False


def test_configure_logging_keeps_existing_handlers(monkeypatch):
    root = logging.getLogger()
    marker = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [marker])

    settings.configure_logging()

    assert root.handlers == [marker]


def test_log_settings_from_env(monkeypatch):
    monkeypatch.setenv("SALES_INTEL_LOG_LEVEL", "debug")
    monkeypatch.setenv("SALES_INTEL_LOG_FORMAT", "%(message)s")
    assert settings.LogSettings.from_env() == settings.LogSettings(level=logging.DEBUG, fmt="%(message)s")

    monkeypatch.setenv("SALES_INTEL_LOG_LEVEL", "chatty")
    assert settings.LogSettings.from_env().level == logging.INFO
