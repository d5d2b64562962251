"""
Configuration Module Unit Tests
"""

import os
import json
import tempfile
from pathlib import Path
import pytest

from attendance_sdk.config import (
    ClientConfig,
    ConfigLoader,
    ConfigValidator,
    ConfigDefaults,
    DEFAULT_CONFIG_URL,
)
from attendance_sdk.exceptions import ConfigError, ValidationError


class TestConfigValidator:
    """Tests for ConfigValidator"""

    @pytest.fixture
    def validator(self) -> ConfigValidator:
        return ConfigValidator()

    @pytest.fixture
    def valid_config(self) -> dict:
        return {
            "username": "staff@school.test",
            "password": "secret",
        }

    def test_validate_valid_config(self, validator: ConfigValidator, valid_config: dict):
        """Should pass with valid configuration"""
        result = validator.validate(valid_config)
        assert result.valid is True
        assert len(result.errors) == 0

    def test_validate_missing_username(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when username is missing"""
        del valid_config["username"]
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "username" for e in result.errors)

    def test_validate_empty_password_is_redacted(self, validator: ConfigValidator, valid_config: dict):
        """Should fail on empty password without echoing it"""
        valid_config["password"] = "   "
        result = validator.validate(valid_config)
        assert result.valid is False
        error = next(e for e in result.errors if e.field == "password")
        assert "empty" in error.message
        assert error.value == "[REDACTED]"

    def test_validate_username_not_email(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when username is not an email address"""
        valid_config["username"] = "staff"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "username" and "email" in e.message
            for e in result.errors
        )

    def test_validate_invalid_config_url(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with invalid config_url"""
        valid_config["config_url"] = "not-a-url"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "config_url" for e in result.errors)

    def test_validate_timeout_too_low(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with timeout too low"""
        valid_config["timeout"] = 100
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "timeout" and "1000ms" in e.message
            for e in result.errors
        )

    def test_validate_negative_rate_limit_margin(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with negative rate_limit_margin"""
        valid_config["rate_limit_margin"] = -1
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "rate_limit_margin" for e in result.errors)

    def test_validate_or_raise_invalid(self, validator: ConfigValidator, valid_config: dict):
        """Should raise ValidationError with invalid configuration"""
        del valid_config["password"]
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_or_raise(valid_config)
        assert exc_info.value.field == "password"


class TestConfigLoader:
    """Tests for ConfigLoader"""

    @pytest.fixture
    def loader(self) -> ConfigLoader:
        return ConfigLoader()

    @pytest.fixture
    def valid_config(self) -> dict:
        return {
            "username": "staff@school.test",
            "password": "secret",
        }

    def test_from_dict(self, loader: ConfigLoader, valid_config: dict):
        """Should return a copy of the configuration"""
        result = loader.from_dict(valid_config)
        assert result == valid_config
        assert result is not valid_config

    def test_from_environment(self, loader: ConfigLoader, monkeypatch):
        """Should load configuration from environment variables"""
        monkeypatch.setenv("ATTENDANCE_USERNAME", "env@school.test")
        monkeypatch.setenv("ATTENDANCE_PASSWORD", "env-secret")
        monkeypatch.setenv("ATTENDANCE_TIMEOUT", "60000")
        monkeypatch.setenv("ATTENDANCE_RATE_LIMIT_MARGIN", "5")
        monkeypatch.setenv("ATTENDANCE_DEBUG", "yes")

        result = loader.from_environment()

        assert result["username"] == "env@school.test"
        assert result["password"] == "env-secret"
        assert result["timeout"] == 60000
        assert result["rate_limit_margin"] == 5
        assert result["debug"] is True

    def test_from_environment_boolean_parsing(self, loader: ConfigLoader, monkeypatch):
        """Should parse boolean values correctly"""
        monkeypatch.setenv("ATTENDANCE_ENABLE_AUDIT_LOG", "1")
        assert loader.from_environment()["enable_audit_log"] is True

        monkeypatch.setenv("ATTENDANCE_ENABLE_AUDIT_LOG", "false")
        assert loader.from_environment()["enable_audit_log"] is False

    def test_merge(self, loader: ConfigLoader):
        """Should merge multiple configurations with priority"""
        base = {"username": "a@b.test", "timeout": 5000}
        override = {"username": "c@d.test", "debug": True}

        result = loader.merge(base, override)

        assert result["username"] == "c@d.test"
        assert result["timeout"] == 5000
        assert result["debug"] is True

    def test_merge_filters_none(self, loader: ConfigLoader):
        """Should not include None values from overrides"""
        result = loader.merge({"timeout": 30000}, {"timeout": None})
        assert result["timeout"] == 30000

    def test_resolve_applies_defaults(self, loader: ConfigLoader, valid_config: dict):
        """Should apply default values"""
        result = loader.resolve(valid_config)

        assert result.config_url == DEFAULT_CONFIG_URL
        assert result.tenant_api_path == ConfigDefaults.TENANT_API_PATH
        assert result.timeout == ConfigDefaults.TIMEOUT
        assert result.rate_limit_margin == ConfigDefaults.RATE_LIMIT_MARGIN
        assert result.debug is False

    def test_from_file(self, loader: ConfigLoader, valid_config: dict):
        """Should load configuration from JSON file"""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".json", delete=False
        ) as f:
            json.dump(valid_config, f)

        try:
            result = loader.from_file(f.name)
            assert result["username"] == valid_config["username"]
        finally:
            os.unlink(f.name)

    def test_from_file_not_found(self, loader: ConfigLoader):
        """Should raise error for missing file"""
        with pytest.raises(ConfigError) as exc_info:
            loader.from_file("/nonexistent/path.json")

        assert exc_info.value.code == "CONFIG_FILE_NOT_FOUND"

    def test_from_file_invalid_json(self, loader: ConfigLoader, tmp_path: Path):
        """Should raise error for malformed JSON"""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            loader.from_file(path)

        assert exc_info.value.code == "CONFIG_PARSE_ERROR"

    def test_load_programmatic_overrides_environment(self, loader: ConfigLoader, monkeypatch):
        """Programmatic config should win over environment variables"""
        monkeypatch.setenv("ATTENDANCE_USERNAME", "env@school.test")
        monkeypatch.setenv("ATTENDANCE_PASSWORD", "env-secret")

        result = loader.load(config={"username": "code@school.test"})

        assert result.username == "code@school.test"
        assert result.password == "env-secret"

    def test_create_template(self, loader: ConfigLoader):
        """Should create template configuration file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            template_path = Path(tmpdir) / "config" / "template.json"
            loader.create_template(template_path)

            assert template_path.exists()

            with open(template_path) as f:
                template = json.load(f)

            assert "username" in template
            assert template["password"] == ""
            assert template["rate_limit_margin"] == 3
            assert template["config_url"] == DEFAULT_CONFIG_URL


class TestClientConfig:
    """Tests for ClientConfig Pydantic model"""

    def test_create_valid_config(self):
        """Should apply defaults to a minimal config"""
        config = ClientConfig(username="staff@school.test", password="secret")
        assert config.username == "staff@school.test"
        assert config.rate_limit_margin == 3

    def test_password_not_in_repr(self):
        """Should keep the password out of repr"""
        config = ClientConfig(username="staff@school.test", password="hunter2")
        assert "hunter2" not in repr(config)

    def test_invalid_username(self):
        """Should reject a username that is not an email"""
        with pytest.raises(ValueError):
            ClientConfig(username="nobody", password="secret")

    def test_default_config_url_is_placeholder(self):
        """Should flag the default config_url as an unresolvable placeholder"""
        config = ClientConfig(username="staff@school.test", password="secret")
        assert config.uses_placeholder_config_url is True
        assert ".invalid/" in config.config_url

    def test_explicit_config_url_is_not_placeholder(self):
        """Should not flag a deployment config_url"""
        config = ClientConfig(
            username="staff@school.test",
            password="secret",
            config_url="https://config.district.test/runtime.json",
        )
        assert config.uses_placeholder_config_url is False

    def test_tenant_base_url(self):
        """Should join apiUrl and the tenant API path"""
        config = ClientConfig(
            username="staff@school.test",
            password="secret",
            tenant_api_path="/api/",
        )
        assert config.tenant_api_path == "api"
        assert config.tenant_base_url("https://tenant.test/") == "https://tenant.test/api"
        assert config.tenant_base_url("https://tenant.test") == "https://tenant.test/api"
