"""Configuration stories: layered values become CheckerSettings.

lib_layered_config is replaced by a small stand-in exposing the same
``get(section, default=...)`` call, so these tests only cover how ivy_dated
reads its ``[registry]`` section and the native environment overrides.
"""

from __future__ import annotations

import tomllib
from typing import Any

import pytest

from ivy_dated import config as config_mod
from ivy_dated import config_show
from ivy_dated.config import CheckerSettings, get_checker_settings, get_default_config_path


class StubConfig:
    def __init__(self, data: dict[str, Any]) -> None:
        self.data = data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def as_dict(self) -> dict[str, Any]:
        return self.data


@pytest.fixture
def registry_config(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    section: dict[str, Any] = {
        "search_url": "https://mirror.example/solrsearch/select",
        "timeout": 12,
        "request_delay": 0.5,
        "user_agent": "custom/1.0",
    }
    stub = StubConfig({"registry": section})
    monkeypatch.setattr(config_mod, "get_config", lambda: stub)
    monkeypatch.setattr(config_show, "get_config", lambda: stub)
    for name in ("SEARCH_URL", "TIMEOUT", "REQUEST_DELAY"):
        monkeypatch.delenv(f"IVY_DATED_{name}", raising=False)
    return section


# ════════════════════════════════════════════════════════════════════════════
# Bundled defaults
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_default_config_file_ships_with_package() -> None:
    path = get_default_config_path()

    assert path.name == "defaultconfig.toml"
    assert path.exists()


@pytest.mark.os_agnostic
def test_default_config_matches_settings_defaults() -> None:
    data = tomllib.loads(get_default_config_path().read_text(encoding="utf-8"))
    defaults = CheckerSettings()

    assert data["registry"]["search_url"] == defaults.search_url
    assert data["registry"]["timeout"] == defaults.timeout
    assert data["registry"]["request_delay"] == defaults.request_delay


@pytest.mark.os_agnostic
def test_checker_settings_are_immutable() -> None:
    settings = CheckerSettings()

    with pytest.raises(AttributeError):
        settings.timeout = 1.0  # type: ignore[misc]


# ════════════════════════════════════════════════════════════════════════════
# get_checker_settings
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_settings_come_from_registry_section(registry_config: dict[str, Any]) -> None:
    settings = get_checker_settings()

    assert settings == CheckerSettings(
        search_url="https://mirror.example/solrsearch/select",
        timeout=12.0,
        request_delay=0.5,
        user_agent="custom/1.0",
    )


@pytest.mark.os_agnostic
def test_settings_fall_back_to_defaults_without_section(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_mod, "get_config", lambda: StubConfig({}))
    for name in ("SEARCH_URL", "TIMEOUT", "REQUEST_DELAY"):
        monkeypatch.delenv(f"IVY_DATED_{name}", raising=False)

    assert get_checker_settings() == CheckerSettings()


@pytest.mark.os_agnostic
def test_native_env_vars_override_config(registry_config: dict[str, Any], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IVY_DATED_SEARCH_URL", "https://other.example/select")
    monkeypatch.setenv("IVY_DATED_TIMEOUT", "3.5")
    monkeypatch.setenv("IVY_DATED_REQUEST_DELAY", "0")

    settings = get_checker_settings()

    assert settings.search_url == "https://other.example/select"
    assert settings.timeout == 3.5
    assert settings.request_delay == 0.0


@pytest.mark.os_agnostic
def test_invalid_env_number_keeps_config_value(registry_config: dict[str, Any], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IVY_DATED_TIMEOUT", "soon")

    assert get_checker_settings().timeout == 12.0


@pytest.mark.os_agnostic
def test_non_finite_env_number_keeps_config_value(registry_config: dict[str, Any], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IVY_DATED_REQUEST_DELAY", "nan")
    monkeypatch.setenv("IVY_DATED_TIMEOUT", "inf")

    settings = get_checker_settings()

    assert settings.request_delay == 0.5
    assert settings.timeout == 12.0


@pytest.mark.os_agnostic
def test_non_numeric_config_value_raises(registry_config: dict[str, Any]) -> None:
    registry_config["timeout"] = "abc"

    with pytest.raises(ValueError, match="registry.timeout must be a number"):
        get_checker_settings()


@pytest.mark.os_agnostic
def test_non_finite_config_value_raises(registry_config: dict[str, Any]) -> None:
    registry_config["request_delay"] = float("nan")

    with pytest.raises(ValueError, match="registry.request_delay"):
        get_checker_settings()


# ════════════════════════════════════════════════════════════════════════════
# display_config
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_display_config_renders_section_as_toml(
    registry_config: dict[str, Any],
    capsys: pytest.CaptureFixture[str],
) -> None:
    config_show.display_config(section="registry")

    out = capsys.readouterr().out
    assert "[registry]" in out
    assert 'search_url = "https://mirror.example/solrsearch/select"' in out
    assert "timeout = 12" in out


@pytest.mark.os_agnostic
def test_display_config_renders_section_as_json(
    registry_config: dict[str, Any],
    capsys: pytest.CaptureFixture[str],
) -> None:
    config_show.display_config(format="json", section="registry")

    out = capsys.readouterr().out
    assert '"request_delay": 0.5' in out


@pytest.mark.os_agnostic
def test_display_config_exits_for_unknown_section(registry_config: dict[str, Any]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        config_show.display_config(section="missing")

    assert excinfo.value.code == 1
