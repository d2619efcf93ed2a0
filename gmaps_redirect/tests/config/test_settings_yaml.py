from __future__ import annotations

from pathlib import Path
import textwrap

import pytest
from pydantic import ValidationError

from gmaps_redirect.config import Settings, load_settings


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("GMAPS_REDIRECT_REQUEST_TIMEOUT", raising=False)
    monkeypatch.delenv("GMAPS_REDIRECT_MAX_REDIRECTS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.request_timeout == 10.0
    assert settings.max_redirects == 10
    assert settings.log_to_console is True
    assert settings.log_to_file is False


def test_load_settings_reads_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "basic.yaml"
    log_file = tmp_path / "logs" / "run.log"
    config_path.write_text(
        textwrap.dedent(
            f"""
            request_timeout: 2.5
            max_redirects: 4
            log_to_file: true
            log_file: {log_file}
            verbose: true
            """
        ),
        encoding="utf-8",
    )

    settings = load_settings(yaml_path=config_path)

    assert settings.request_timeout == 2.5
    assert settings.max_redirects == 4
    assert settings.log_file == log_file
    assert settings.verbose is True
    assert log_file.parent.is_dir()


def test_environment_is_overridden_by_yaml_and_cli(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("GMAPS_REDIRECT_REQUEST_TIMEOUT", "7")
    monkeypatch.setenv("GMAPS_REDIRECT_MAX_REDIRECTS", "3")
    config_path = tmp_path / "override.yaml"
    config_path.write_text("max_redirects: 6\n", encoding="utf-8")

    settings = load_settings(yaml_path=config_path, overrides={"request_timeout": 1.0})

    assert settings.request_timeout == 1.0
    assert settings.max_redirects == 6


def test_from_yaml_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Settings.from_yaml(tmp_path / "missing.yaml")


def test_from_yaml_rejects_non_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "list.yaml"
    config_path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError):
        Settings.from_yaml(config_path)


def test_settings_validate_bounds() -> None:
    with pytest.raises(ValidationError):
        Settings(request_timeout=0)
    with pytest.raises(ValidationError):
        Settings(max_redirects=-1)


def test_settings_cap_max_redirects() -> None:
    assert Settings(max_redirects=100).max_redirects == 100
    with pytest.raises(ValidationError):
        Settings(max_redirects=101)


@pytest.mark.parametrize(
    "overrides",
    [
        {"request_timeout": -1.0},
        {"request_timeout": 0},
        {"max_redirects": -3},
        {"max_redirects": 1000},
    ],
)
def test_load_settings_validates_overrides(overrides) -> None:
    with pytest.raises(ValidationError):
        load_settings(overrides=overrides)


def test_load_settings_validates_yaml_merge(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("max_redirects: -1\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_settings(yaml_path=config_path)
