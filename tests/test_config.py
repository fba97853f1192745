import pytest

from sentinels.config import DEFAULT_FEED_URL, AppConfig


class TestAppConfig:
    def test_defaults(self, monkeypatch):
        for name in ("FEED_URL", "FEED_TIMEOUT_SEC", "REFRESH_INTERVAL_SEC", "LIQUIDATION_FILTER", "ANTHROPIC_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        cfg = AppConfig.load()
        assert cfg.feed_url == DEFAULT_FEED_URL
        assert cfg.feed_timeout_sec == 2.0
        assert cfg.refresh_interval_sec == 1.0
        assert cfg.liquidation_filter == "ALL"
        assert cfg.anthropic_api_key == ""

    def test_timeout_independent_of_interval(self, monkeypatch):
        monkeypatch.setenv("REFRESH_INTERVAL_SEC", "30")
        monkeypatch.setenv("FEED_TIMEOUT_SEC", "2")
        cfg = AppConfig.load()
        assert cfg.refresh_interval_sec == 30.0
        assert cfg.feed_timeout_sec == 2.0

    def test_filter_normalized(self, monkeypatch):
        monkeypatch.setenv("LIQUIDATION_FILTER", " short ")
        assert AppConfig.load().liquidation_filter == "SHORT"

    def test_invalid_filter(self, monkeypatch):
        monkeypatch.setenv("LIQUIDATION_FILTER", "BOTH")
        with pytest.raises(RuntimeError):
            AppConfig.load()
