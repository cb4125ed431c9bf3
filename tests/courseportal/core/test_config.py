import pytest

from courseportal.core import config


def test_validate_runtime_config_requires_mongodb_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'MONGODB_URI', '')

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()


def test_validate_runtime_config_requires_secret_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'MONGODB_URI', 'mongodb://localhost:27017')
    monkeypatch.setattr(config, 'APP_ENV', 'production')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'change-me')

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()


def test_validate_runtime_config_accepts_development_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'MONGODB_URI', 'mongodb://localhost:27017')
    monkeypatch.setattr(config, 'APP_ENV', 'development')

    config.validate_runtime_config()
