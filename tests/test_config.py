import pytest

from sitemap_ping.config import (
    DEFAULT_TIMEOUT_SECONDS,
    base_directory,
    load_config,
    load_environment,
)


def _clear_env(monkeypatch):
    for key in ["LOG_DIR", "LOG_LEVEL", "APP_NAME", "SITEMAP_PING_TIMEOUT"]:
        monkeypatch.delenv(key, raising=False)


def test_load_config_defaults_without_env_file(tmp_path, monkeypatch):
    _clear_env(monkeypatch)

    config = load_config(tmp_path / "missing.env")

    assert config.log_directory is None
    assert config.log_level == "WARNING"
    assert config.app_name == "sitemap-ping"
    assert config.request_timeout == DEFAULT_TIMEOUT_SECONDS


def test_load_config_reads_env_file(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    env_file = tmp_path / "test.env"
    env_file.write_text(
        "\n".join(
            [
                "# comment lines are skipped",
                "LOG_DIR=logs/testing",
                "LOG_LEVEL=debug",
                "APP_NAME='ci-pinger'",
                "SITEMAP_PING_TIMEOUT=5",
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(env_file)

    assert config.log_directory == base_directory() / "logs/testing"
    assert config.log_level == "DEBUG"
    assert config.app_name == "ci-pinger"
    assert config.request_timeout == 5.0


def test_load_config_prefers_environment_variables(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    env_file = tmp_path / "test.env"
    env_file.write_text(
        "\n".join([f"LOG_DIR={tmp_path / 'from_env_file'}", "SITEMAP_PING_TIMEOUT=5"]),
        encoding="utf-8",
    )

    env_log_dir = tmp_path / "from_env"
    monkeypatch.setenv("LOG_DIR", str(env_log_dir))
    monkeypatch.setenv("LOG_LEVEL", "info")
    monkeypatch.setenv("SITEMAP_PING_TIMEOUT", "12.5")

    config = load_config(env_file)

    assert config.log_directory == env_log_dir
    assert config.log_level == "INFO"
    assert config.request_timeout == 12.5


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_load_config_rejects_bad_timeout(tmp_path, monkeypatch, raw):
    _clear_env(monkeypatch)
    monkeypatch.setenv("SITEMAP_PING_TIMEOUT", raw)

    with pytest.raises(ValueError):
        load_config(tmp_path / "missing.env")


def test_load_environment_merges_file_and_environ(tmp_path, monkeypatch):
    env_file = tmp_path / "merge.env"
    env_file.write_text("ONLY_IN_FILE=1\nSHARED=file\n", encoding="utf-8")
    monkeypatch.setenv("SHARED", "environ")

    values = load_environment(env_file)

    assert values["ONLY_IN_FILE"] == "1"
    assert values["SHARED"] == "environ"


def test_installed_package_reads_env_from_working_directory(tmp_path, monkeypatch):
    import sitemap_ping.config as config_mod

    _clear_env(monkeypatch)
    site_packages = tmp_path / "site-packages"
    site_packages.mkdir()
    workdir = tmp_path / "project"
    workdir.mkdir()
    (workdir / ".env").write_text("LOG_DIR=logs\nSITEMAP_PING_TIMEOUT=7\n", encoding="utf-8")
    monkeypatch.setattr(config_mod, "REPO_ROOT", site_packages)
    monkeypatch.chdir(workdir)

    config = load_config()

    assert config_mod.base_directory() == workdir
    assert config.log_directory == workdir / "logs"
    assert config.request_timeout == 7.0


def test_source_checkout_uses_repository_root(tmp_path, monkeypatch):
    import sitemap_ping.config as config_mod

    checkout = tmp_path / "checkout"
    checkout.mkdir()
    (checkout / "pyproject.toml").write_text("[project]\n", encoding="utf-8")
    monkeypatch.setattr(config_mod, "REPO_ROOT", checkout)
    monkeypatch.chdir(tmp_path)

    assert config_mod.base_directory() == checkout
