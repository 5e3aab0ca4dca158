import pytest
from pydantic import ValidationError as PydanticValidationError

from core.config import AppSettings, _parse_env_lines, write_user_env_vars


def test_env_prefix_overrides_defaults(monkeypatch):
    monkeypatch.setenv("OKTO_DEMO_BASE_URL", "https://example.invalid")
    monkeypatch.setenv("OKTO_DEMO_DEMO_FALLBACK_ENABLED", "false")

    settings = AppSettings()

    assert settings.base_url == "https://example.invalid"
    assert settings.demo_fallback_enabled is False


def test_write_user_env_vars_merges_existing(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"OKTO_DEMO_BASE_URL": "https://a.test"}, env_path=env_path)
    write_user_env_vars({"OKTO_DEMO_LOG_LEVEL": "INFO"}, env_path=env_path)

    text = env_path.read_text(encoding="utf-8")

    assert "OKTO_DEMO_BASE_URL=https://a.test" in text
    assert "OKTO_DEMO_LOG_LEVEL=INFO" in text


def test_log_level_is_normalised(monkeypatch):
    monkeypatch.setenv("OKTO_DEMO_LOG_LEVEL", " info ")

    assert AppSettings().log_level == "INFO"


def test_unknown_log_level_is_rejected_at_load(monkeypatch):
    monkeypatch.setenv("OKTO_DEMO_LOG_LEVEL", "LOUD")

    with pytest.raises(PydanticValidationError):
        AppSettings()


def test_parse_env_lines_skips_comments_and_strips_quotes():
    parsed = _parse_env_lines('# header\n\nA="1"\nB = two\n#C=3\nnot a pair\n')

    assert parsed == {"A": "1", "B": "two"}
