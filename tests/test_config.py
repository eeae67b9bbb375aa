from __future__ import annotations

import pytest

from verdict.config import RunSettings, apply_overrides, load_settings
from verdict.errors import ConfigError
from verdict.reporting import ReportFormat


def test_defaults_without_config_file(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert settings == RunSettings()
    assert settings.fuzz_runs == 100
    assert settings.report is ReportFormat.CONSOLE


def test_reads_verdict_yaml_from_working_directory(tmp_path, monkeypatch) -> None:
    (tmp_path / "verdict.yaml").write_text(
        "seed: 12\nfuzz_runs: 5\nreport: junit\nworkers: 3\nsuites:\n  - tests/math_suite.py\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert settings.seed == 12
    assert settings.fuzz_runs == 5
    assert settings.report is ReportFormat.JUNIT
    assert settings.workers == 3
    assert settings.suites == ("tests/math_suite.py",)


def test_empty_file_gives_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(str(path)) == RunSettings()


def test_missing_explicit_file_is_an_error(tmp_path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_settings(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize(
    ("content", "fragment"),
    [
        ("seeds: 3\n", "Additional properties"),
        ("workers: 0\n", "workers"),
        ("report: html\n", "report"),
        ("- just\n- a list\n", "mapping"),
        ("seed: [unclosed\n", "not valid YAML"),
    ],
)
def test_invalid_config_is_rejected(tmp_path, content, fragment) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match=fragment):
        load_settings(str(path))


def test_overrides_skip_none_and_convert_report() -> None:
    base = RunSettings(seed=1, fuzz_runs=7)
    updated = apply_overrides(base, seed=None, fuzz_runs=3, report="json", color=False)
    assert updated.seed == 1
    assert updated.fuzz_runs == 3
    assert updated.report is ReportFormat.JSON
    assert updated.color is False
    assert base.fuzz_runs == 7


def test_unknown_override_is_rejected() -> None:
    with pytest.raises(ConfigError, match="colour"):
        apply_overrides(RunSettings(), colour=False)


def test_resolved_seed_keeps_explicit_seed() -> None:
    assert RunSettings(seed=5).resolved_seed().seed == 5
    drawn = RunSettings().resolved_seed().seed
    assert isinstance(drawn, int)
    assert drawn >= 0
