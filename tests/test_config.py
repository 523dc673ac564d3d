"""Tests for settings loading."""

from ho_connect.config import Settings, get_settings, reset_settings_cache


def test_defaults_match_notification_limits(monkeypatch):
    monkeypatch.delenv("TOAST_LIMIT", raising=False)
    monkeypatch.delenv("NOTIFICATION_LEDGER_LIMIT", raising=False)

    settings = Settings(_env_file=None)

    assert settings.notification_ledger_limit == 100
    assert settings.toast_limit == 5
    assert settings.toast_lifetime_seconds == 6.0
    assert settings.mention_toast_lifetime_seconds == 12.0
    assert settings.remote_mention_toast_lifetime_seconds == 10.0
    assert settings.presence_window_seconds == 300.0


def test_environment_overrides_after_cache_reset(monkeypatch):
    reset_settings_cache()
    monkeypatch.setenv("TOAST_LIMIT", "3")
    try:
        assert get_settings() is get_settings()
        assert get_settings().toast_limit == 3
    finally:
        monkeypatch.delenv("TOAST_LIMIT")
        reset_settings_cache()
