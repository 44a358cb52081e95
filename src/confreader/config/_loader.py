"""設定レイヤーローダー。

ユーザー設定ファイルはファイル全体を、pyproject.toml は [tool.confreader]
テーブルを ReaderSettings の 1 レイヤーとして読み込む。
ReaderSettings に存在しないキーはファイルパス付きで拒否し、
値の検証は ReaderSettings に委ねる。
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Final

from confreader.models.config import ReaderSettings

_TOOL_KEY: Final[str] = "tool"
_TOOL_TABLE_KEY: Final[str] = "confreader"
_PYPROJECT_TABLE_LABEL: Final[str] = "[tool.confreader]"


class SettingsFileError(Exception):
    """設定ファイルを読み込めない、または内容が不正な場合の例外。

    Attributes:
        path: 問題のあった設定ファイル。
        reason: 失敗理由。
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def _read_toml(path: Path) -> dict[str, object] | None:
    """TOML ファイルを読み込む。ファイルが存在しない場合は None。"""
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        raise SettingsFileError(path, f"invalid TOML: {e}") from e
    except OSError as e:
        raise SettingsFileError(path, f"cannot read file: {e.strerror or e}") from e


def _settings_layer(
    path: Path, table: dict[str, object], label: str
) -> dict[str, object]:
    """テーブルのキーが ReaderSettings のフィールドであることを確認する。"""
    known = ReaderSettings.model_fields
    unknown = sorted(key for key in table if key not in known)
    if unknown:
        raise SettingsFileError(
            path,
            f"unknown key(s) in {label}: {', '.join(unknown)} "
            f"(expected: {', '.join(known)})",
        )
    return dict(table)


def load_user_settings(path: Path) -> dict[str, object] | None:
    """ユーザー設定ファイルを設定レイヤーとして読み込む。

    Args:
        path: ~/.config/confreader/config.toml 等のパス。

    Returns:
        設定レイヤーの辞書。ファイルが存在しなければ None。

    Raises:
        SettingsFileError: TOML 構文エラー、読み取り不可、未知のキーの場合。
    """
    data = _read_toml(path)
    if data is None:
        return None
    return _settings_layer(path, data, "user settings")


def load_pyproject_settings(path: Path) -> dict[str, object] | None:
    """pyproject.toml の [tool.confreader] を設定レイヤーとして読み込む。

    Args:
        path: pyproject.toml のパス。

    Returns:
        設定レイヤーの辞書。[tool.confreader] がなければ None。

    Raises:
        SettingsFileError: TOML 構文エラー、読み取り不可、
            [tool.confreader] がテーブルでない、未知のキーの場合。
    """
    data = _read_toml(path)
    if data is None:
        return None
    tool = data.get(_TOOL_KEY)
    if not isinstance(tool, dict) or _TOOL_TABLE_KEY not in tool:
        return None
    table = tool[_TOOL_TABLE_KEY]
    if not isinstance(table, dict):
        raise SettingsFileError(path, f"{_PYPROJECT_TABLE_LABEL} must be a table")
    return _settings_layer(path, table, _PYPROJECT_TABLE_LABEL)
