"""Tests for runtime configuration."""

from ledgerlens.config import RuntimeConfig


class TestRuntimeConfig:
    """Test cases for RuntimeConfig."""

    def test_defaults(self, settings):
        assert settings.risk_threshold == 0.5
        assert settings.control_effectiveness_threshold == 0.7
        assert settings.anomaly_zscore_threshold == 2.0
        assert settings.max_file_size_bytes == 25 * 1024 * 1024
        assert not settings.storage_configured
        assert not settings.inference_configured

    def test_collaborators_configured(self):
        config = RuntimeConfig(
            _env_file=None,
            supabase_url="https://project.supabase.co",
            supabase_service_role_key="key",
            openai_api_key="sk-test",
        )

        assert config.storage_configured
        assert config.inference_configured

    def test_cors_origins_from_comma_separated_string(self):
        config = RuntimeConfig(_env_file=None, cors_allowed_origins="https://a.example, https://b.example")

        assert config.cors_allowed_origins == ["https://a.example", "https://b.example"]

    def test_cors_origins_from_json_string(self):
        config = RuntimeConfig(_env_file=None, cors_allowed_origins='["https://a.example"]')

        assert config.cors_allowed_origins == ["https://a.example"]

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RISK_THRESHOLD", "0.3")
        monkeypatch.setenv("MAX_FILE_SIZE_MB", "5")

        config = RuntimeConfig(_env_file=None)

        assert config.risk_threshold == 0.3
        assert config.max_file_size_bytes == 5 * 1024 * 1024
