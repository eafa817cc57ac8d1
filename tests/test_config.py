import pytest

from component_analyzer.config import (
    AnalyzerSettings,
    load_settings,
    load_settings_file,
)
from component_analyzer.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "COMPONENT_ANALYZER_LOG_LEVEL",
        "COMPONENT_ANALYZER_MAX_CONCURRENCY",
        "COMPONENT_ANALYZER_OUTPUT_FORMAT",
        "COMPONENT_ANALYZER_CONFIG",
    ):
        monkeypatch.delenv(key, raising=False)


def test_argument_env_file_priority(tmp_path, monkeypatch):
    path = tmp_path / "analyzer.yaml"
    path.write_text("output_format: yaml\nlog_level: info\n")
    assert load_settings(config_file=path).output_format == "yaml"
    monkeypatch.setenv("COMPONENT_ANALYZER_OUTPUT_FORMAT", "json")
    assert load_settings(config_file=path).output_format == "json"
    assert load_settings(config_file=path, output_format="table").output_format == "table"
    assert load_settings(config_file=path).log_level == "INFO"


def test_max_concurrency_from_env(monkeypatch):
    monkeypatch.setenv("COMPONENT_ANALYZER_MAX_CONCURRENCY", "12")
    assert load_settings().max_concurrency == 12
    monkeypatch.setenv("COMPONENT_ANALYZER_MAX_CONCURRENCY", "many")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_defaults():
    settings = load_settings()
    assert settings == AnalyzerSettings()
    assert settings.log_level == "WARNING"
    assert settings.max_concurrency == 8
    assert "node_modules" in settings.ignore_dirs


def test_settings_file(tmp_path):
    path = tmp_path / "analyzer.yaml"
    path.write_text(
        "component_analyzer:\n"
        "  log_level: debug\n"
        "  max_concurrency: 2\n"
        "  output_format: json\n"
        "  ignore_dirs: [vendor]\n"
    )
    settings = load_settings(config_file=path)
    assert settings.log_level == "DEBUG"
    assert settings.max_concurrency == 2
    assert settings.output_format == "json"
    assert settings.ignore_dirs == ["vendor"]


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "analyzer.yaml"
    path.write_text("max_concurrency: 2\n")
    monkeypatch.setenv("COMPONENT_ANALYZER_MAX_CONCURRENCY", "5")
    monkeypatch.setenv("COMPONENT_ANALYZER_CONFIG", str(path))
    assert load_settings().max_concurrency == 5
    assert load_settings(max_concurrency=1).max_concurrency == 1


def test_empty_settings_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_settings_file(path) == {}


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("a: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_settings_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings_file(tmp_path / "missing.yaml")


def test_invalid_values():
    with pytest.raises(ConfigurationError):
        load_settings(log_level="LOUD")
    with pytest.raises(ConfigurationError):
        load_settings(output_format="xml")
    with pytest.raises(ConfigurationError):
        load_settings(max_concurrency=0)
