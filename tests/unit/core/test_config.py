"""Unit tests for application settings and the client build environment."""

import pytest
import pytest_check
from pydantic import ValidationError

from papercontest.core.config import (
    ClientEnvironment,
    LogConfig,
    Settings,
    get_client_environment,
    get_settings,
)


@pytest.mark.unit
class TestSettings:
    """Test cases for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the development defaults."""
        monkeypatch.delenv("K_SERVICE", raising=False)
        monkeypatch.delenv("AWS_EXECUTION_ENV", raising=False)
        settings = Settings()

        pytest_check.equal(settings.app_name, "PaperContest")
        pytest_check.equal(settings.environment, "development")
        pytest_check.equal(settings.api_port, 3000)
        pytest_check.equal(settings.api_prefix, "/api/v1")
        pytest_check.equal(settings.docs_url, "/api-docs")
        pytest_check.equal(settings.cors_origins, ["*"])
        pytest_check.equal(settings.log_config.log_formatter_type, "console")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("api/v2", "/api/v2"),
            ("/api/v2/", "/api/v2"),
            ("/", ""),
            ("", ""),
        ],
    )
    def test_api_prefix_normalized(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        """Test that the prefix always has one leading and no trailing slash."""
        monkeypatch.setenv("API_PREFIX", raw)

        assert Settings().api_prefix == expected

    def test_empty_docs_urls_disable_docs(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that empty strings turn the documentation URLs off."""
        monkeypatch.setenv("DOCS_URL", "")
        monkeypatch.setenv("REDOC_URL", "")
        monkeypatch.setenv("OPENAPI_URL", "")

        settings = Settings()

        assert settings.docs_url is None
        assert settings.redoc_url is None
        assert settings.openapi_url is None

    def test_nested_env_configuration(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that nested settings are read with the double underscore."""
        monkeypatch.setenv("LOG_CONFIG__LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("OBSERVABILITY_CONFIG__ENABLE_TRACING", "false")

        settings = Settings()

        assert settings.log_config.log_level == "DEBUG"
        assert settings.observability_config.enable_tracing is False

    def test_production_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that production switches to JSON logs, OTLP and sampling."""
        monkeypatch.delenv("K_SERVICE", raising=False)
        monkeypatch.delenv("AWS_EXECUTION_ENV", raising=False)
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings()

        pytest_check.equal(settings.log_config.log_formatter_type, "json")
        pytest_check.equal(settings.observability_config.exporter_type, "otlp")
        pytest_check.equal(settings.observability_config.trace_sample_rate, 0.1)

    def test_cloud_run_detection(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that Cloud Run selects the GCP formatter."""
        monkeypatch.setenv("K_SERVICE", "papercontest")

        assert Settings().log_config.log_formatter_type == "gcp"

    def test_invalid_environment_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that unknown environments fail validation."""
        monkeypatch.setenv("ENVIRONMENT", "qa")

        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self) -> None:
        """Test that the same instance is returned until the cache is cleared."""
        assert get_settings() is get_settings()

    def test_log_config_sensitive_defaults(self) -> None:
        """Test that password reset fields are redacted by default."""
        sensitive = LogConfig().sensitive_fields

        assert "newPassword" in sensitive
        assert "code" in sensitive


@pytest.mark.unit
class TestClientEnvironment:
    """Test cases for ClientEnvironment."""

    def test_reads_vite_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that both client variables are read from the environment."""
        monkeypatch.setenv("VITE_API_BASE_URL", "https://api.example.com/api/v1")
        monkeypatch.setenv("VITE_GEMINI_API_KEY", "gm-key")

        env = ClientEnvironment()  # type: ignore[call-arg]

        assert env.api_base_url == "https://api.example.com/api/v1"
        assert env.gemini_api_key == "gm-key"
        assert env.assistant_enabled is True

    def test_gemini_key_optional(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the assistant key may be absent."""
        monkeypatch.setenv("VITE_API_BASE_URL", "http://localhost:3000/api/v1")

        env = ClientEnvironment()  # type: ignore[call-arg]

        assert env.gemini_api_key is None
        assert env.assistant_enabled is False

    def test_base_url_required(self) -> None:
        """Test that loading without the base URL fails."""
        with pytest.raises(ValidationError) as exc_info:
            ClientEnvironment(_env_file=None)  # type: ignore[call-arg]

        assert "api_base_url" in str(exc_info.value).lower()

    def test_populate_by_field_name(self) -> None:
        """Test that tooling can construct the environment directly."""
        env = ClientEnvironment(api_base_url="http://localhost:3000/api/v1")  # type: ignore[call-arg]

        assert env.api_base_url == "http://localhost:3000/api/v1"

    def test_frozen(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the environment cannot be changed once loaded."""
        monkeypatch.setenv("VITE_API_BASE_URL", "http://localhost:3000/api/v1")
        env = get_client_environment()

        with pytest.raises(ValidationError):
            env.api_base_url = "http://elsewhere"  # type: ignore[misc]
