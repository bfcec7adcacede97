"""Unit tests for main.py module."""

import pytest
from pytest_mock import MockType

import main
from papercontest.core.config import Settings


@pytest.mark.unit
class TestMainFunction:
    """Test class for main() function."""

    def test_main_loads_settings_and_sets_up_logging(
        self,
        mock_main_dependencies: dict[str, MockType],
        mock_settings: Settings,
    ) -> None:
        """Verify that main() loads settings and initializes logging."""
        main.main()

        mock_main_dependencies["get_settings"].assert_called_once()
        mock_main_dependencies["setup_logging"].assert_called_once_with(mock_settings)

    @pytest.mark.parametrize(
        ("env_port", "expected_port"),
        [
            ("8080", 8080),
            (None, 3000),
        ],
    )
    def test_port_precedence(
        self,
        mock_main_dependencies: dict[str, MockType],
        monkeypatch: pytest.MonkeyPatch,
        env_port: str | None,
        expected_port: int,
    ) -> None:
        """Verify that PORT overrides the configured port."""
        if env_port is not None:
            monkeypatch.setenv("PORT", env_port)

        main.main()

        kwargs = mock_main_dependencies["uvicorn_run"].call_args.kwargs
        assert kwargs["port"] == expected_port
        assert kwargs["host"] == "127.0.0.1"

    def test_runs_app_import_string(
        self, mock_main_dependencies: dict[str, MockType]
    ) -> None:
        """Verify that uvicorn receives the app import string and log config."""
        main.main()

        call = mock_main_dependencies["uvicorn_run"].call_args
        assert call.args == ("papercontest.api.main:app",)
        assert call.kwargs["reload"] is False
        assert call.kwargs["log_config"] is main.UVICORN_LOG_CONFIG
