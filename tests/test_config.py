from __future__ import annotations

import pytest

from reconnect.core.config import Settings, _build_settings


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite:///./reconnect.db", "sqlite+aiosqlite:///./reconnect.db"),
        ("sqlite://", "sqlite+aiosqlite://"),
        ("sqlite+aiosqlite:////tmp/x.db", "sqlite+aiosqlite:////tmp/x.db"),
        ("postgresql+asyncpg://db/reconnect", "postgresql+asyncpg://db/reconnect"),
    ],
)
def test_async_database_url(url: str, expected: str) -> None:
    settings = Settings(database_url=url)

    assert settings.async_database_url == expected
    assert settings.is_sqlite is expected.startswith("sqlite")


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, ,http://b.test")
    monkeypatch.setenv("CLAMP_RELATIONSHIP_SCORE", "false")
    monkeypatch.setenv("DASHBOARD_RECENT_LIMIT", "7")

    settings = _build_settings()

    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.clamp_relationship_score is False
    assert settings.dashboard_recent_limit == 7
    assert settings.dashboard_tags_limit == 10


def test_dashboard_limits_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Settings(dashboard_events_limit=0)


def test_runner_serves_app_on_configured_address(monkeypatch) -> None:
    import reconnect.__main__ as runner

    calls = []
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setattr(runner, "get_settings", _build_settings)
    monkeypatch.setattr(runner.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    runner.main()

    [(app, kwargs)] = calls
    assert app == "reconnect.main:app"
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is False
    assert kwargs["log_config"] is None
