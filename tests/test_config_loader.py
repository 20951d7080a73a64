"""Tests for config_loader.py"""
import dataclasses
import shutil
import subprocess

import pytest

from commit_gate.config_loader import ConfigurationError, GateConfig, StagedFilesDetector, deep_merge


def test_defaults():
    config = GateConfig.from_dict({})
    assert config.console_logs.enabled is False
    assert config.console_logs.block_commit is False
    assert config.file_size.enabled is True
    assert config.file_size.limits["default"] == "5mb"
    assert config.typescript.enabled is False
    assert config.typescript.no_emit is True
    assert config.eslint.auto_fix is True
    assert config.commit_message.examples
    assert config.performance.timeout_seconds == 60.0
    assert config.before_hooks == ()


def test_partial_override_keeps_other_defaults():
    config = GateConfig.from_dict({"checks": {"fileSize": {"limits": {".png": "1mb"}}}})
    assert config.file_size.limits[".png"] == "1mb"
    assert config.file_size.limits["default"] == "5mb"
    assert config.file_size.enabled is True


def test_lists_replace_defaults():
    config = GateConfig.from_dict({"checks": {"consoleLogs": {"allowedPatterns": []}}})
    assert config.console_logs.allowed_patterns == ()
    assert config.console_logs.patterns


def test_unknown_fields_are_ignored():
    config = GateConfig.from_dict({"checks": {"spellcheck": {"enabled": True}}, "colour": "blue"})
    assert config.file_size.enabled is True


def test_deep_merge_does_not_mutate_inputs():
    base = {"a": {"b": 1, "c": [1]}}
    override = {"a": {"b": 2}}
    merged = deep_merge(base, override)
    assert merged == {"a": {"b": 2, "c": [1]}}
    assert base == {"a": {"b": 1, "c": [1]}}
    merged["a"]["c"].append(2)
    assert base["a"]["c"] == [1]


def test_records_are_immutable():
    config = GateConfig.from_dict({})
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.file_size.enabled = False


def test_timeout_disabled():
    config = GateConfig.from_dict({"performance": {"timeout": 0}})
    assert config.performance.timeout_seconds is None


def test_load_from_yaml(tmp_path, monkeypatch):
    (tmp_path / ".commit-gate.yaml").write_text(
        "checks:\n  consoleLogs:\n    enabled: true\n    blockCommit: true\n"
        "performance:\n  parallel: true\n  maxWorkers: 2\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    config = GateConfig()
    assert config.config_file.samefile(tmp_path / ".commit-gate.yaml")
    assert config.console_logs.enabled is True
    assert config.console_logs.block_commit is True
    assert config.performance.parallel is True
    assert config.performance.max_workers == 2


def test_load_from_parent_directory(tmp_path, monkeypatch):
    (tmp_path / "commit-gate.yaml").write_text("checks:\n  fileSize:\n    enabled: false\n", encoding="utf-8")
    nested = tmp_path / "src" / "app"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    assert GateConfig().file_size.enabled is False


def test_explicit_config_path(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("customHooks:\n  before:\n    - npm run generate\n", encoding="utf-8")
    config = GateConfig(str(path))
    assert config.before_hooks == ("npm run generate",)


def test_missing_explicit_config(tmp_path):
    with pytest.raises(ConfigurationError):
        GateConfig(str(tmp_path / "nope.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / ".commit-gate.yaml"
    path.write_text("checks: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        GateConfig(str(path))


def test_non_mapping_yaml(tmp_path):
    path = tmp_path / ".commit-gate.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        GateConfig(str(path))


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / ".commit-gate.yaml"
    path.write_text("", encoding="utf-8")
    config = GateConfig(str(path))
    assert config.file_size.limits["images"] == "2mb"


@pytest.mark.parametrize(
    "text, option",
    [
        ("performance:\n  maxWorkers: four\n", "performance.maxWorkers"),
        ("performance:\n  timeout: soon\n", "performance.timeout"),
        ("checks:\n  fileSize:\n    limits: 5mb\n", "checks.fileSize.limits"),
        ("checks:\n  consoleLogs: true\n", "checks.consoleLogs"),
        ("checks: [eslint]\n", "checks"),
        ("notifications: off\n", "notifications"),
    ],
)
def test_wrongly_typed_values(tmp_path, text, option):
    path = tmp_path / ".commit-gate.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigurationError, match=option):
        GateConfig(str(path))


def test_null_sections_use_defaults():
    config = GateConfig.from_dict({"performance": None, "checks": {"fileSize": None}})
    assert config.performance.max_workers == 4
    assert config.file_size.limits["default"] == "5mb"


def test_staged_files_with_non_ascii_names(tmp_path, monkeypatch):
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    monkeypatch.chdir(tmp_path)
    subprocess.run(["git", "init", "-q"], check=True)
    (tmp_path / "café.png").write_bytes(b"\0" * 10)
    (tmp_path / "plain.txt").write_text("x\n", encoding="utf-8")
    subprocess.run(["git", "add", "café.png", "plain.txt"], check=True)
    assert sorted(StagedFilesDetector().get_staged_files()) == ["café.png", "plain.txt"]
