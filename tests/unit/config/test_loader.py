"""設定レイヤーローダーのテスト。

load_user_settings — ReaderSettings のキー, 不在, 未知のキー, TOML 構文エラー
load_pyproject_settings — [tool.confreader] の抽出, テーブル以外, 未知のキー
"""

from __future__ import annotations

from pathlib import Path

import pytest

from confreader.config._loader import (
    SettingsFileError,
    load_pyproject_settings,
    load_user_settings,
)


def _write_toml(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadUserSettings:
    """~/.config/confreader/config.toml 相当のファイル。"""

    def test_reader_settings_keys(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path / "config.toml",
            'encoding = "latin-1"\noutput_format = "json"\nlog_level = "debug"\n',
        )
        assert load_user_settings(path) == {
            "encoding": "latin-1",
            "output_format": "json",
            "log_level": "debug",
        }

    def test_missing_file_is_skipped(self, tmp_path: Path) -> None:
        """ユーザー設定は任意。存在しなければ None。"""
        assert load_user_settings(tmp_path / "config.toml") is None

    def test_unknown_key_names_file(self, tmp_path: Path) -> None:
        """未知のキーはファイルパスとキー名を示して拒否する。"""
        path = _write_toml(tmp_path / "config.toml", 'charset = "utf-8"\n')
        with pytest.raises(SettingsFileError) as exc_info:
            load_user_settings(path)
        assert exc_info.value.path == path
        assert "charset" in exc_info.value.reason
        assert "encoding" in exc_info.value.reason
        assert str(path) in str(exc_info.value)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path / "config.toml", "encoding = = utf-8\n")
        with pytest.raises(SettingsFileError, match="invalid TOML"):
            load_user_settings(path)

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        """ファイルではなくディレクトリの場合は読み取り不可。"""
        path = tmp_path / "config.toml"
        path.mkdir()
        with pytest.raises(SettingsFileError, match="cannot read file"):
            load_user_settings(path)


class TestLoadPyprojectSettings:
    """pyproject.toml の [tool.confreader] テーブル。"""

    def test_table_extracted(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path / "pyproject.toml",
            '[project]\nname = "app"\n\n'
            '[tool.confreader]\noutput_format = "json"\nencoding = "cp1252"\n',
        )
        assert load_pyproject_settings(path) == {
            "output_format": "json",
            "encoding": "cp1252",
        }

    def test_without_table_returns_none(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path / "pyproject.toml", "[tool.ruff]\nline-length = 88\n"
        )
        assert load_pyproject_settings(path) is None

    def test_empty_table(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path / "pyproject.toml", "[tool.confreader]\n")
        assert load_pyproject_settings(path) == {}

    def test_non_table_rejected(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path / "pyproject.toml", '[tool]\nconfreader = "json"\n'
        )
        with pytest.raises(SettingsFileError, match=r"must be a table"):
            load_pyproject_settings(path)

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path / "pyproject.toml", '[tool.confreader]\nformat = "json"\n'
        )
        with pytest.raises(SettingsFileError, match=r"\[tool\.confreader\]: format"):
            load_pyproject_settings(path)
