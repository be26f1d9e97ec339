"""Tests for luxtrade.config — environment variable loading and validation."""

import pytest

from luxtrade.config import default_config, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Ensure LuxTrade env vars are cleared between tests."""
    for var in [
        "DB_PATH",
        "LOG_LEVEL",
        "API_PORT",
        "GEMINI_API_KEY",
        "GEMINI_MODEL",
        "USDJPY_REFERENCE_RATE",
        "DEFAULT_BALANCE",
        "DEFAULT_CURRENCY",
    ]:
        # set first so vars loaded from a test .env are removed afterwards
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)


@pytest.fixture
def no_env_file(tmp_path):
    """A non-existent env path so load_dotenv doesn't read a real .env file."""
    return str(tmp_path / "nonexistent.env")


class TestLoadConfig:
    def test_defaults(self, no_env_file):
        cfg = load_config(env_path=no_env_file)
        assert cfg.db_path == "data/luxtrade.db"
        assert cfg.log_level == "INFO"
        assert cfg.api_port == 8080
        assert cfg.gemini_api_key == ""
        assert cfg.gemini_model == "gemini-3-pro-preview"
        assert cfg.usd_jpy_rate == 158.0
        assert cfg.default_balance == 10_000.0
        assert cfg.default_currency == "USD"

    def test_overrides(self, monkeypatch, no_env_file):
        monkeypatch.setenv("USDJPY_REFERENCE_RATE", "150.25")
        monkeypatch.setenv("GEMINI_API_KEY", "abc123")
        monkeypatch.setenv("API_PORT", "9000")
        cfg = load_config(env_path=no_env_file)
        assert cfg.usd_jpy_rate == pytest.approx(150.25)
        assert cfg.gemini_api_key == "abc123"
        assert cfg.api_port == 9000

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("DEFAULT_BALANCE=2500\nDEFAULT_CURRENCY=EUR\n", encoding="utf-8")
        cfg = load_config(env_path=str(env_file))
        assert cfg.default_balance == pytest.approx(2_500.0)
        assert cfg.default_currency == "EUR"

    def test_malformed_rate(self, monkeypatch, no_env_file):
        monkeypatch.setenv("USDJPY_REFERENCE_RATE", "abc")
        with pytest.raises(ValueError, match="USDJPY_REFERENCE_RATE"):
            load_config(env_path=no_env_file)

    def test_non_positive_balance(self, monkeypatch, no_env_file):
        monkeypatch.setenv("DEFAULT_BALANCE", "0")
        with pytest.raises(ValueError, match="DEFAULT_BALANCE"):
            load_config(env_path=no_env_file)

    def test_gemini_url(self, monkeypatch, no_env_file):
        monkeypatch.setenv("GEMINI_MODEL", "gemini-x")
        cfg = load_config(env_path=no_env_file)
        assert cfg.gemini_url == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-x:generateContent"
        )

    def test_default_config_matches_unset_environment(self, no_env_file):
        assert default_config() == load_config(env_path=no_env_file)

    def test_default_config_ignores_environment(self, monkeypatch):
        monkeypatch.setenv("USDJPY_REFERENCE_RATE", "abc")
        assert default_config().usd_jpy_rate == 158.0
