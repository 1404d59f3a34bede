from __future__ import annotations

from study_planner.core.config import Settings


def test_environment_profiles_apply_defaults() -> None:
    dev = Settings(environment="development")
    assert dev.environment == "development"
    assert dev.log_level == "DEBUG"
    assert dev.reload is True

    test_profile = Settings(environment="test")
    assert test_profile.environment == "test"
    assert test_profile.log_level == "WARNING"
    assert test_profile.reload is False

    ci_profile = Settings(environment="ci")
    assert ci_profile.environment == "ci"
    assert ci_profile.log_level == "INFO"
    assert ci_profile.reload is False


def test_environment_aliases_are_normalised() -> None:
    assert Settings(environment="DEV").environment == "development"
    assert Settings(environment="testing").environment == "test"
    assert Settings(environment="staging").environment == "development"


def test_environment_profile_respects_explicit_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PLANNER_LOG_LEVEL", "error")
    overridden = Settings(environment="test")
    assert overridden.log_level == "ERROR"


def test_comma_separated_cors_origins(monkeypatch) -> None:
    monkeypatch.setenv("PLANNER_CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    settings = Settings()
    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]


def test_workflow_settings(monkeypatch) -> None:
    defaults = Settings(environment="test")
    assert defaults.leaderboard_size == 10
    assert defaults.completion_compensate is False

    monkeypatch.setenv("PLANNER_LEADERBOARD_SIZE", "0")
    monkeypatch.setenv("PLANNER_COMPLETION_COMPENSATE", "true")
    configured = Settings(environment="test")
    assert configured.leaderboard_size == 1
    assert configured.completion_compensate is True
