import pytest

from recordstats.config import get_settings


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DEFAULT_OUTPUT_PATH", raising=False)
    monkeypatch.delenv("DEFAULT_DELIMITER", raising=False)

    settings = get_settings()

    assert settings.default_output_path == "report.txt"
    assert settings.default_delimiter == ","


def test_empty_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_OUTPUT_PATH", "")
    monkeypatch.setenv("DEFAULT_DELIMITER", "")

    settings = get_settings()

    assert settings.default_output_path == "report.txt"
    assert settings.default_delimiter == ","


def test_environment_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_OUTPUT_PATH", "summary.txt")
    monkeypatch.setenv("DEFAULT_DELIMITER", ";")

    settings = get_settings()

    assert settings.default_output_path == "summary.txt"
    assert settings.default_delimiter == ";"
