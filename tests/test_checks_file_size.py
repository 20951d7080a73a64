"""Tests for checks_file_size.py"""
from commit_gate.checks_file_size import FileSizeCheck
from commit_gate.config_loader import FileSizeConfig

MB = 1024 * 1024


def _write(path, size):
    path.write_bytes(b"\0" * size)
    return path


def test_oversized_image(tmp_path):
    """3MB png against a 2MB images limit is one blocking finding."""
    _write(tmp_path / "photo.png", 3 * MB)
    config = FileSizeConfig(enabled=True, block_commit=True, limits={"images": "2mb", "default": "5mb"})
    result = FileSizeCheck(config, cwd=str(tmp_path)).run(["photo.png"])
    assert len(result.findings) == 1
    finding = result.findings[0]
    assert finding.file == "photo.png"
    assert finding.size == 3145728
    assert finding.limit == 2097152
    assert finding.message == "Size: 3 MB (Max: 2 MB)"
    assert result.blocks


def test_file_within_limit(tmp_path):
    _write(tmp_path / "notes.txt", 1024)
    config = FileSizeConfig(enabled=True, block_commit=True, limits={"default": "1kb"})
    result = FileSizeCheck(config, cwd=str(tmp_path)).run(["notes.txt"])
    assert not result.has_findings
    assert not result.blocks


def test_disabled(tmp_path):
    _write(tmp_path / "big.bin", 2048)
    config = FileSizeConfig(enabled=False, block_commit=True, limits={"default": 1})
    result = FileSizeCheck(config, cwd=str(tmp_path)).run(["big.bin"])
    assert not result.has_findings
    assert not result.blocks


def test_non_blocking_findings(tmp_path):
    _write(tmp_path / "big.bin", 2048)
    config = FileSizeConfig(enabled=True, block_commit=False, limits={"default": "1kb"})
    result = FileSizeCheck(config, cwd=str(tmp_path)).run(["big.bin"])
    assert result.has_findings
    assert not result.blocks


def test_missing_file_is_not_a_violation(tmp_path):
    _write(tmp_path / "big.bin", 2048)
    config = FileSizeConfig(enabled=True, block_commit=True, limits={"default": "1kb"})
    result = FileSizeCheck(config, cwd=str(tmp_path)).run(["deleted.bin", "big.bin"])
    assert len(result.errors) == 1
    assert "deleted.bin" in result.errors[0]
    assert [f.file for f in result.findings] == ["big.bin"]


def test_missing_default_is_a_configuration_error(tmp_path):
    _write(tmp_path / "a.txt", 10)
    config = FileSizeConfig(enabled=True, block_commit=False, limits={".png": "2mb"})
    result = FileSizeCheck(config, cwd=str(tmp_path)).run(["a.txt"])
    assert "default" in result.run_error
    assert not result.has_findings
    assert result.blocks


def test_invalid_size_string(tmp_path):
    _write(tmp_path / "a.txt", 10)
    config = FileSizeConfig(enabled=True, block_commit=True, limits={"default": "five megs"})
    result = FileSizeCheck(config, cwd=str(tmp_path)).run(["a.txt"])
    assert "Invalid size format" in result.run_error
    assert result.blocks


def test_extension_limit_wins(tmp_path):
    _write(tmp_path / "icon.svg", 600 * 1024)
    _write(tmp_path / "photo.jpg", 600 * 1024)
    config = FileSizeConfig(
        enabled=True, block_commit=True, limits={".svg": "500kb", "images": "2mb", "default": "5mb"}
    )
    result = FileSizeCheck(config, cwd=str(tmp_path)).run(["icon.svg", "photo.jpg"])
    assert [f.file for f in result.findings] == ["icon.svg"]
    assert result.findings[0].limit == 500 * 1024
