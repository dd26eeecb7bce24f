"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from actionkit.kernel.config.loader import ConfigLoader, _parse_bool_env, load_config
from actionkit.kernel.config.models import FileStoreConfig
from actionkit.kernel.exceptions import ConfigurationError, ValidationError

_ENV_VARS = (
    "ACTIONKIT_CONFIG_PATH",
    "ACTIONKIT_LOG_LEVEL",
    "ACTIONKIT_LOG_FORMAT",
    "ACTIONKIT_LOG_FILE",
    "ACTIONKIT_LOG_COLOR",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test in an empty directory with no actionkit env vars."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestDefaults:
    def test_defaults_when_nothing_found(self) -> None:
        config = load_config()

        assert config.logging.level == "INFO"
        assert config.logging.format == "structured"
        assert config.runner.surface_write_errors is False
        assert config.files.work_dir == "/home/project"
        assert config.files.storage_key == "actionkit-files"

    def test_explicit_missing_path_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")


class TestYamlConfig:
    def test_kind_config_document(self, tmp_path) -> None:
        path = tmp_path / "actionkit.yaml"
        path.write_text(
            """
kind: Config
metadata:
  name: dev
spec:
  logging:
    level: debug
    format: rich
  runner:
    surface_write_errors: true
  files:
    work_dir: /workspace
    storage_key: dev-files
""",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.logging.level == "DEBUG"
        assert config.logging.format == "rich"
        assert config.runner.surface_write_errors is True
        assert config.files.work_dir == "/workspace"
        assert config.files.storage_key == "dev-files"

    def test_wrong_kind_rejected(self, tmp_path) -> None:
        path = tmp_path / "pipeline.yaml"
        path.write_text("kind: Pipeline\nspec: {}\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="kind: Config"):
            load_config(path)

    def test_env_var_substitution(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("WS_ROOT", "/srv/ws")
        path = tmp_path / "actionkit.yaml"
        path.write_text(
            "kind: Config\nspec:\n  files:\n    work_dir: ${WS_ROOT}\n", encoding="utf-8"
        )

        assert load_config(path).files.work_dir == "/srv/ws"

    def test_config_path_env_var(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "elsewhere.yaml"
        path.write_text("kind: Config\nspec:\n  runner:\n    surface_write_errors: 'yes'\n")
        monkeypatch.setenv("ACTIONKIT_CONFIG_PATH", str(path))

        assert load_config().runner.surface_write_errors is True

    def test_non_string_work_dir_rejected(self, tmp_path) -> None:
        path = tmp_path / "actionkit.yaml"
        path.write_text("kind: Config\nspec:\n  files:\n    work_dir: 42\n")

        with pytest.raises(ConfigurationError, match="work_dir"):
            load_config(path)

    def test_relative_work_dir_rejected(self, tmp_path) -> None:
        path = tmp_path / "actionkit.yaml"
        path.write_text("kind: Config\nspec:\n  files:\n    work_dir: project\n")

        with pytest.raises(ConfigurationError, match="work_dir"):
            load_config(path)


class TestPyprojectConfig:
    def test_tool_section_discovered_from_parent(self, tmp_path, monkeypatch) -> None:
        (tmp_path / "pyproject.toml").write_text(
            """
[tool.actionkit.files]
work_dir = "/project"

[tool.actionkit.logging]
level = "WARNING"
""",
            encoding="utf-8",
        )
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = ConfigLoader().load()

        assert config.files.work_dir == "/project"
        assert config.logging.level == "WARNING"


class TestLoggingOverrides:
    def test_env_overrides_file_values(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "actionkit.yaml"
        path.write_text("kind: Config\nspec:\n  logging:\n    level: INFO\n")
        monkeypatch.setenv("ACTIONKIT_LOG_LEVEL", "error")
        monkeypatch.setenv("ACTIONKIT_LOG_FORMAT", "JSON")
        monkeypatch.setenv("ACTIONKIT_LOG_COLOR", "off")

        logging_config = load_config(path).logging

        assert logging_config.level == "ERROR"
        assert logging_config.format == "json"
        assert logging_config.use_color is False

    def test_invalid_color_env_is_configuration_error(self, monkeypatch) -> None:
        monkeypatch.setenv("ACTIONKIT_LOG_COLOR", "sometimes")

        with pytest.raises(ConfigurationError, match="ACTIONKIT_LOG_COLOR"):
            load_config()

    def test_unknown_format_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("ACTIONKIT_LOG_FORMAT", "xml")

        with pytest.raises(ConfigurationError, match="unknown format"):
            load_config()


class TestHelpers:
    @pytest.mark.parametrize(("raw", "expected"), [("TRUE", True), ("0", False), (" on ", True)])
    def test_parse_bool_env(self, raw: str, expected: bool) -> None:
        assert _parse_bool_env(raw) is expected

    def test_parse_bool_env_rejects_garbage(self) -> None:
        with pytest.raises(ValueError, match="Invalid boolean value"):
            _parse_bool_env("maybe")

    def test_file_store_config_validation(self) -> None:
        with pytest.raises(ValidationError):
            FileStoreConfig(storage_key="")
